"""
MinIO client connector for disk-uploads.

This module provides a singleton MinIO client built from settings, shared by
every MinIO disk that doesn't bring its own connection details.
"""

from __future__ import annotations

from loguru import logger
from minio import Minio

from disk_uploads.config import settings


def create_minio_client(
    endpoint: str,
    access_key: str,
    secret_key: str,
    secure: bool = False,
) -> Minio:
    """
    Build a MinIO client for explicit connection details.

    Returns:
        Minio: A new MinIO client.
    """
    try:
        client = Minio(
            endpoint=endpoint,
            access_key=access_key,
            secret_key=secret_key,
            secure=secure,
        )
        logger.info(f"Connected to MinIO at '{endpoint}'")
    except Exception as e:
        logger.error(f"Failed to connect to MinIO at '{endpoint}': {e}")
        raise
    return client


class MinioClientConnector:
    """
    Singleton connector for MinIO object storage.

    Usage:
        client = MinioClientConnector.get_instance()
        client.put_object(bucket_name="uploads", ...)
    """

    _instance: Minio | None = None

    @classmethod
    def get_instance(cls) -> Minio:
        """
        Get or create the MinIO client instance.

        Returns:
            Minio: The MinIO client instance.
        """
        if cls._instance is None:
            cls._instance = create_minio_client(
                endpoint=settings.MINIO_ENDPOINT,
                access_key=settings.MINIO_ACCESS_KEY,
                secret_key=settings.MINIO_SECRET_KEY,
                secure=settings.MINIO_SECURE,
            )

        return cls._instance


def get_minio_client() -> Minio:
    """
    Convenience function to get the MinIO client.

    Returns:
        Minio: The MinIO client instance.
    """
    return MinioClientConnector.get_instance()
