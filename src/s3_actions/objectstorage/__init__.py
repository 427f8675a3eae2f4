"""Object storage operations for S3-compatible services."""

from .clients import Boto3StorageClient, S3ClientConfig, S3ClientManager, StorageClient
from .executor import ActionExecutor
from .preconditions import PreconditionChecker

__all__ = [
    "ActionExecutor",
    "Boto3StorageClient",
    "PreconditionChecker",
    "S3ClientConfig",
    "S3ClientManager",
    "StorageClient",
]
