"""Exception hierarchy for s3-actions."""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Classification carried by every s3-actions error."""

    CONFIGURATION = "ConfigurationError"
    NOT_FOUND = "NotFound"
    ALREADY_EXISTS = "AlreadyExists"
    BUCKET_CREATION_DISABLED = "BucketCreationDisabled"
    REMOTE_OPERATION_FAILED = "RemoteOperationFailed"
    REMOTE_TIMEOUT = "RemoteTimeout"


class S3ActionsError(Exception):
    """Base exception for all s3-actions errors."""

    kind: ErrorKind = ErrorKind.CONFIGURATION


class ConfigurationError(S3ActionsError):
    """Raised when sender configuration is invalid."""

    kind = ErrorKind.CONFIGURATION


class InvalidRequestError(ConfigurationError):
    """Raised when per-invocation inputs violate an action's requirements.

    Detected for the whole action sequence before any remote call.
    """


class ActionError(S3ActionsError):
    """Base for failures of a single executed action.

    Args:
        message: Human readable description
        action: Name of the action that failed
        bucket: Bucket the action addressed
        key: Object key the action addressed, if any
    """

    def __init__(
        self,
        message: str,
        action: Optional[str] = None,
        bucket: Optional[str] = None,
        key: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.action = action
        self.bucket = bucket
        self.key = key

    def context(self) -> dict[str, Optional[str]]:
        """Return the diagnostic fields suitable for structured logging."""
        return {"action": self.action, "bucket": self.bucket, "key": self.key}


class NotFoundError(ActionError):
    """Raised when a bucket or object that must exist is missing."""

    kind = ErrorKind.NOT_FOUND


class AlreadyExistsError(ActionError):
    """Raised when a bucket or object that must be absent is present."""

    kind = ErrorKind.ALREADY_EXISTS


class BucketCreationDisabledError(ActionError):
    """Raised when a missing bucket would need creating but creation is off."""

    kind = ErrorKind.BUCKET_CREATION_DISABLED


class RemoteOperationFailed(ActionError):
    """Raised when the storage service or SDK reports a failure."""

    kind = ErrorKind.REMOTE_OPERATION_FAILED


class RemoteTimeout(RemoteOperationFailed):
    """Raised when the storage client gives up waiting on the service."""

    kind = ErrorKind.REMOTE_TIMEOUT
