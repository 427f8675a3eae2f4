"""Execution of single storage actions.

Each action issues at most one mutating or reading call on the storage
client, after the existence guards from :mod:`preconditions` have passed.
Bucket auto-creation for upload and copy, and the acceleration follow-up of
createBucket, are the only additional calls.
"""

from typing import Any, Optional

from s3_actions.actions import ActionKind, ActionRequest
from s3_actions.core import get_logger, get_tracer
from s3_actions.core.exceptions import (
    ActionError,
    AlreadyExistsError,
    InvalidRequestError,
)
from s3_actions.objectstorage.clients import StorageClient
from s3_actions.objectstorage.preconditions import PreconditionChecker
from s3_actions.schemas import DEFAULT_CONTENT_TYPE, SenderConfig

logger = get_logger(__name__)
tracer = get_tracer(__name__)


def _require_input(value: Any, name: str, action: str) -> Any:
    """Return a request input the action cannot run without."""
    if value is None or (isinstance(value, str) and not value):
        raise InvalidRequestError(
            f"no value found for the {name}, it is required to perform "
            f"[{action}] action"
        )
    return value


class ActionExecutor:
    """Maps a validated action onto the storage client."""

    def __init__(self, client: StorageClient, config: SenderConfig):
        self.client = client
        self.config = config
        self.checker = PreconditionChecker(client)
        self._handlers = {
            ActionKind.CREATE_BUCKET: self._create_bucket,
            ActionKind.DELETE_BUCKET: self._delete_bucket,
            ActionKind.UPLOAD: self._upload,
            ActionKind.DOWNLOAD: self._download,
            ActionKind.COPY: self._copy,
            ActionKind.DELETE: self._delete,
        }

    def execute(self, kind: ActionKind, request: ActionRequest) -> Any:
        """Run one action.

        Returns:
            The bucket name or object key the action produced, or an open
            content handle for download

        Raises:
            InvalidRequestError: If the request lacks an input the action needs
            ActionError: Classified failure carrying action, bucket and key
        """
        with tracer.start_as_current_span(f"s3_actions.{kind.value}") as span:
            span.set_attribute("s3.bucket", request.bucket)
            if request.key:
                span.set_attribute("s3.key", request.key)
            try:
                return self._handlers[kind](request)
            except ActionError as e:
                if e.action is None:
                    e.action = kind.value
                logger.error(
                    "Action failed",
                    sender=self.config.name,
                    kind=e.kind.value,
                    error=e.message,
                    **e.context(),
                )
                raise

    def _creation_region(self) -> Optional[str]:
        if self.config.force_global_bucket_access:
            return self.config.bucket_region
        return self.config.client_region

    def _create_bucket(self, request: ActionRequest) -> str:
        action = ActionKind.CREATE_BUCKET.value
        bucket = request.bucket
        if self.checker.bucket_exists(bucket):
            if self.config.tolerate_existing_bucket:
                logger.info("Bucket already exists", action=action, bucket=bucket)
                return bucket
            raise AlreadyExistsError(
                f"bucket [{bucket}] already exists, please specify a unique "
                "bucket name",
                action=action,
                bucket=bucket,
            )

        self.client.create_bucket(bucket, self._creation_region())
        logger.debug("Bucket created", action=action, bucket=bucket)

        if self.config.accelerate_mode_enabled:
            # The bucket stays in place if this follow-up fails
            status = self.client.enable_bucket_acceleration(bucket)
            logger.debug("Bucket accelerate status", bucket=bucket, status=status)
        return bucket

    def _delete_bucket(self, request: ActionRequest) -> str:
        action = ActionKind.DELETE_BUCKET.value
        self.checker.require_bucket(action, request.bucket)
        self.client.delete_bucket(request.bucket)
        logger.debug("Bucket deleted", action=action, bucket=request.bucket)
        return request.bucket

    def _upload(self, request: ActionRequest) -> str:
        action = ActionKind.UPLOAD.value
        key = _require_input(request.key, "object key", action)
        stream = _require_input(request.stream, "file parameter", action)
        self.checker.ensure_bucket(
            action,
            request.bucket,
            self.config.bucket_creation_enabled,
            self._creation_region(),
        )
        self.checker.require_object_absent(action, request.bucket, key)
        self.client.put_object(
            request.bucket,
            key,
            stream,
            request.content_type or DEFAULT_CONTENT_TYPE,
        )
        logger.debug("Object uploaded", action=action, bucket=request.bucket, key=key)
        return key

    def _download(self, request: ActionRequest) -> Any:
        action = ActionKind.DOWNLOAD.value
        key = _require_input(request.key, "object key", action)
        self.checker.require_object(action, request.bucket, key)
        handle = self.client.get_object(request.bucket, key)
        logger.debug(
            "Object downloaded", action=action, bucket=request.bucket, key=key
        )
        return handle

    def _copy(self, request: ActionRequest) -> str:
        action = ActionKind.COPY.value
        key = _require_input(request.key, "object key", action)
        destination_bucket = _require_input(
            request.destination_bucket, "destination bucket", action
        )
        destination_key = _require_input(
            request.destination_key, "destination key", action
        )

        # A taken destination wins over any problem with the source
        if self.checker.bucket_exists(destination_bucket):
            self.checker.require_object_absent(
                action, destination_bucket, destination_key
            )
        self.checker.require_object(action, request.bucket, key)
        self.checker.ensure_bucket(
            action,
            destination_bucket,
            self.config.bucket_creation_enabled,
            self._creation_region(),
        )

        self.client.copy_object(
            request.bucket, key, destination_bucket, destination_key
        )
        logger.debug(
            "Object copied",
            action=action,
            bucket=request.bucket,
            key=key,
            destination_bucket=destination_bucket,
            destination_key=destination_key,
        )
        return destination_key

    def _delete(self, request: ActionRequest) -> str:
        action = ActionKind.DELETE.value
        key = _require_input(request.key, "object key", action)
        self.checker.require_object(action, request.bucket, key)
        self.client.delete_object(request.bucket, key)
        logger.debug("Object deleted", action=action, bucket=request.bucket, key=key)
        return key
