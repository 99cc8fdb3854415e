"""Clients for external storage services."""

from disk_uploads.infrastructure.minio import MinioClientConnector, create_minio_client, get_minio_client

__all__ = ["MinioClientConnector", "create_minio_client", "get_minio_client"]
