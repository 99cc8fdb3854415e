"""
Unit tests for the MinIO client connector.

The connector should:
- Reuse one client per process (singleton)
- Read connection details from disk_uploads.config
"""

from unittest.mock import MagicMock, patch

import pytest


class TestMinioClientConnector:
    """Tests for MinIO singleton connector."""

    def test_get_instance_returns_minio_client(self, mock_minio_module):
        """get_instance() should return a MinIO client."""
        from disk_uploads.infrastructure.minio import MinioClientConnector

        client = MinioClientConnector.get_instance()

        assert client is mock_minio_module.return_value

    def test_returns_same_instance_on_multiple_calls(self, mock_minio_module):
        """Multiple calls should return the same instance (singleton)."""
        from disk_uploads.infrastructure.minio import MinioClientConnector

        client1 = MinioClientConnector.get_instance()
        client2 = MinioClientConnector.get_instance()

        assert client1 is client2
        mock_minio_module.assert_called_once()

    def test_uses_settings_for_configuration(self, mock_minio_module):
        """Should use settings from disk_uploads.config."""
        from disk_uploads.infrastructure.minio import MinioClientConnector

        with patch("disk_uploads.infrastructure.minio.settings") as mock_settings:
            mock_settings.MINIO_ENDPOINT = "minio.example.com:9000"
            mock_settings.MINIO_ACCESS_KEY = "myaccess"
            mock_settings.MINIO_SECRET_KEY = "mysecret"
            mock_settings.MINIO_SECURE = True

            MinioClientConnector.get_instance()

        call_kwargs = mock_minio_module.call_args[1]
        assert call_kwargs["endpoint"] == "minio.example.com:9000"
        assert call_kwargs["access_key"] == "myaccess"
        assert call_kwargs["secure"] is True


class TestCreateMinioClient:
    """Tests for explicit client creation."""

    def test_creates_new_client_each_call(self, mock_minio_module):
        from disk_uploads.infrastructure.minio import create_minio_client

        create_minio_client("a:9000", "key", "secret")
        create_minio_client("b:9000", "key", "secret")

        assert mock_minio_module.call_count == 2

    def test_reraises_connection_errors(self, mock_minio_module):
        from disk_uploads.infrastructure.minio import create_minio_client

        mock_minio_module.side_effect = ValueError("bad endpoint")

        with pytest.raises(ValueError, match="bad endpoint"):
            create_minio_client("not a url", "key", "secret")


class TestGetMinioClientFunction:
    """Tests for the convenience function."""

    def test_get_minio_client_returns_client(self, mock_minio_module):
        """get_minio_client() should return the singleton client."""
        from disk_uploads.infrastructure.minio import MinioClientConnector, get_minio_client

        client = get_minio_client()

        assert client is MinioClientConnector._instance


# --- Fixtures ---


@pytest.fixture
def mock_minio_module():
    """Mock the Minio class and reset the singleton around each test."""
    from disk_uploads.infrastructure.minio import MinioClientConnector

    MinioClientConnector._instance = None
    with patch("disk_uploads.infrastructure.minio.Minio") as mock_minio:
        mock_client = MagicMock()
        mock_minio.return_value = mock_client
        yield mock_minio
    MinioClientConnector._instance = None
