"""Declarative S3 bucket and object actions.

This package runs a configured list of actions (createBucket, deleteBucket,
upload, download, copy, delete) against S3-compatible object storage. Each
action checks its preconditions, issues one call through boto3 and either
returns a value or raises a classified error.

Key Features:
    - Action list parsing with eager configuration validation
    - Bucket and object existence guards
    - Optional bucket auto-creation and transfer acceleration
    - Ordered, fail-fast execution of multi-action lists
    - CLI interface

Recommended Usage:

    >>> from s3_actions import S3Sender, SenderConfig
    >>> sender = S3Sender(
    ...     SenderConfig(actions="download", bucket_name="reports")
    ... )
    >>> sender.configure()
    >>> sender.open()
    >>> session = {}
    >>> sender.send_message("2024/summary.csv", session=session)
    's3ObjectContent'
"""

__version__ = "0.1.0"

from .actions import ActionKind, ActionRequest, parse_actions, validate_sender_config
from .core.exceptions import (
    AlreadyExistsError,
    BucketCreationDisabledError,
    ConfigurationError,
    ErrorKind,
    InvalidRequestError,
    NotFoundError,
    RemoteOperationFailed,
    RemoteTimeout,
    S3ActionsError,
)
from .objectstorage import (
    ActionExecutor,
    Boto3StorageClient,
    PreconditionChecker,
    S3ClientConfig,
    StorageClient,
)
from .parameters import ParameterValues
from .schemas import ExecutionResult, Failure, SenderConfig, Success
from .sender import S3Sender

__all__ = [
    # Sender
    "S3Sender",
    "SenderConfig",
    "ParameterValues",
    # Actions
    "ActionKind",
    "ActionRequest",
    "parse_actions",
    "validate_sender_config",
    # Results
    "ExecutionResult",
    "Failure",
    "Success",
    # Storage
    "ActionExecutor",
    "Boto3StorageClient",
    "PreconditionChecker",
    "S3ClientConfig",
    "StorageClient",
    # Errors
    "AlreadyExistsError",
    "BucketCreationDisabledError",
    "ConfigurationError",
    "ErrorKind",
    "InvalidRequestError",
    "NotFoundError",
    "RemoteOperationFailed",
    "RemoteTimeout",
    "S3ActionsError",
]
