"""S3 client management and the storage client protocol."""

from .s3_client import (
    Boto3StorageClient,
    S3ClientConfig,
    S3ClientManager,
    StorageClient,
)

__all__ = ["Boto3StorageClient", "S3ClientConfig", "S3ClientManager", "StorageClient"]
