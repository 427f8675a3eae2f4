"""Existence guards run before mutating or reading actions."""

from typing import Optional

from s3_actions.core import get_logger
from s3_actions.core.exceptions import (
    AlreadyExistsError,
    BucketCreationDisabledError,
    NotFoundError,
)
from s3_actions.objectstorage.clients import StorageClient

logger = get_logger(__name__)


class PreconditionChecker:
    """Checks bucket and object existence against the storage client.

    Every check is a fresh remote call; results are never cached.
    """

    def __init__(self, client: StorageClient):
        self.client = client

    def bucket_exists(self, name: str) -> bool:
        return self.client.bucket_exists(name)

    def object_exists(self, bucket: str, key: str) -> bool:
        return self.client.object_exists(bucket, key)

    def require_bucket(self, action: str, bucket: str) -> None:
        if not self.bucket_exists(bucket):
            raise NotFoundError(
                f"bucket [{bucket}] does not exist", action=action, bucket=bucket
            )

    def require_object(self, action: str, bucket: str, key: str) -> None:
        """Require both the bucket and the object in it to exist."""
        self.require_bucket(action, bucket)
        if not self.object_exists(bucket, key):
            raise NotFoundError(
                f"object [{key}] does not exist in bucket [{bucket}]",
                action=action,
                bucket=bucket,
                key=key,
            )

    def require_object_absent(self, action: str, bucket: str, key: str) -> None:
        if self.object_exists(bucket, key):
            raise AlreadyExistsError(
                f"object [{key}] already exists in bucket [{bucket}], please "
                "specify a new name",
                action=action,
                bucket=bucket,
                key=key,
            )

    def ensure_bucket(
        self,
        action: str,
        bucket: str,
        creation_enabled: bool,
        region: Optional[str] = None,
    ) -> bool:
        """Make sure a target bucket exists, creating it when allowed.

        Returns:
            True if the bucket was created by this call

        Raises:
            BucketCreationDisabledError: If it is missing and creation is off
        """
        if self.bucket_exists(bucket):
            return False
        if not creation_enabled:
            raise BucketCreationDisabledError(
                f"bucket [{bucket}] does not exist and bucket creation is "
                "disabled, set bucket_creation_enabled to create it",
                action=action,
                bucket=bucket,
            )
        self.client.create_bucket(bucket, region)
        logger.info("Bucket created for object action", action=action, bucket=bucket)
        return True
