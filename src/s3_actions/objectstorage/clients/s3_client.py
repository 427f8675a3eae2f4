"""S3 client configuration and the storage client used by the executor.

S3ClientManager handles boto3 client creation with the different credential
sources. Boto3StorageClient narrows that client down to the handful of
bucket and object calls the action executor needs, and translates botocore
failures into s3-actions errors.

Authentication Methods Supported:
    1. Explicit credentials (access_key_id, secret_access_key)
    2. AWS CLI profiles (aws_profile)
    3. IAM roles / environment variables (no explicit credentials)
    4. Temporary credentials (session_token)

S3-Compatible Services:
    Custom endpoints for services like MinIO are supported via endpoint_url.
"""

from typing import Any, BinaryIO, Dict, Optional, Protocol

import boto3
from botocore.config import Config
from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    ConnectTimeoutError,
    ReadTimeoutError,
)
from pydantic import BaseModel, ConfigDict, Field

from s3_actions.core import get_logger
from s3_actions.core.exceptions import RemoteOperationFailed, RemoteTimeout

logger = get_logger(__name__)

_MISSING_CODES = frozenset({"404", "NoSuchBucket", "NoSuchKey", "NotFound"})
_US_EAST_1 = "us-east-1"


class S3ClientConfig(BaseModel):
    """Configuration for S3 client connections.

    Authentication Priority:
        1. If aws_profile is provided, use profile-based authentication
        2. If explicit credentials are provided, use them
        3. Otherwise, fall back to default AWS credential chain

    Example:
        # MinIO endpoint
        config = S3ClientConfig(
            endpoint_url="http://localhost:9000",
            access_key_id="minioadmin",
            secret_access_key="minioadmin"
        )
    """

    model_config = ConfigDict(extra="forbid")

    access_key_id: Optional[str] = Field(None, description="AWS access key ID")
    secret_access_key: Optional[str] = Field(None, description="AWS secret access key")
    session_token: Optional[str] = Field(
        None, description="AWS session token for temporary credentials"
    )
    region_name: str = Field(_US_EAST_1, description="AWS region name")
    endpoint_url: Optional[str] = Field(
        None, description="Custom S3 endpoint URL for S3-compatible services"
    )
    aws_profile: Optional[str] = Field(
        None, description="AWS CLI profile name to use for credentials"
    )
    accelerate_mode_enabled: bool = Field(
        False, description="Route requests through S3 transfer acceleration"
    )


class S3ClientManager:
    """Manages the lifetime of a single boto3 S3 client."""

    def __init__(self, config: S3ClientConfig):
        self.config = config
        self._client = None
        logger.info("S3 client manager initialized", region=config.region_name)

    @property
    def client(self):
        """Get or create S3 client instance."""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _create_client(self):
        """Create boto3 S3 client with the configured settings."""
        kwargs: Dict[str, Any] = {
            "region_name": self.config.region_name,
        }

        if self.config.endpoint_url:
            kwargs["endpoint_url"] = self.config.endpoint_url

        if self.config.accelerate_mode_enabled:
            kwargs["config"] = Config(s3={"use_accelerate_endpoint": True})

        if self.config.aws_profile:
            session = boto3.Session(profile_name=self.config.aws_profile)
            client = session.client("s3", **kwargs)  # type: ignore
            logger.info(
                "S3 client created with profile", profile=self.config.aws_profile
            )
        else:
            if self.config.access_key_id and self.config.secret_access_key:
                kwargs.update(
                    {
                        "aws_access_key_id": self.config.access_key_id,
                        "aws_secret_access_key": self.config.secret_access_key,
                    }
                )
                if self.config.session_token:
                    kwargs["aws_session_token"] = self.config.session_token
                logger.info("S3 client created with explicit credentials")
            else:
                logger.info("S3 client created with default credential chain")

            client = boto3.client("s3", **kwargs)  # type: ignore

        return client

    def close(self) -> None:
        """Release the underlying client, if one was created."""
        if self._client is not None:
            self._client.close()
            self._client = None
            logger.info("S3 client closed")


class StorageClient(Protocol):
    """Bucket and object calls the action executor depends on."""

    def bucket_exists(self, name: str) -> bool: ...

    def create_bucket(self, name: str, region: Optional[str] = None) -> None: ...

    def enable_bucket_acceleration(self, name: str) -> str: ...

    def delete_bucket(self, name: str) -> None: ...

    def object_exists(self, bucket: str, key: str) -> bool: ...

    def put_object(
        self, bucket: str, key: str, stream: BinaryIO, content_type: str
    ) -> None: ...

    def get_object(self, bucket: str, key: str) -> Any: ...

    def copy_object(
        self, source_bucket: str, source_key: str, bucket: str, key: str
    ) -> None: ...

    def delete_object(self, bucket: str, key: str) -> None: ...


def _error_code(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", ""))


def _remote_failure(
    operation: str, error: Exception, bucket: str, key: Optional[str] = None
) -> RemoteOperationFailed:
    target = f"{bucket}/{key}" if key else bucket
    if isinstance(error, (ConnectTimeoutError, ReadTimeoutError)):
        return RemoteTimeout(
            f"{operation} timed out for [{target}]: {error}", bucket=bucket, key=key
        )
    return RemoteOperationFailed(
        f"{operation} failed for [{target}]: {error}", bucket=bucket, key=key
    )


class Boto3StorageClient:
    """StorageClient backed by a boto3 S3 client."""

    def __init__(self, client_manager: S3ClientManager):
        self.client_manager = client_manager

    @classmethod
    def from_config(cls, config: S3ClientConfig) -> "Boto3StorageClient":
        return cls(S3ClientManager(config))

    @property
    def client(self):
        return self.client_manager.client

    def close(self) -> None:
        self.client_manager.close()

    def bucket_exists(self, name: str) -> bool:
        """Return True when the bucket exists, even if owned by someone else."""
        try:
            self.client.head_bucket(Bucket=name)
            return True
        except ClientError as e:
            code = _error_code(e)
            if code in _MISSING_CODES:
                return False
            if code in ("403", "AccessDenied"):
                return True
            raise _remote_failure("head_bucket", e, name) from e
        except BotoCoreError as e:
            raise _remote_failure("head_bucket", e, name) from e

    def create_bucket(self, name: str, region: Optional[str] = None) -> None:
        region = region or self.client_manager.config.region_name
        kwargs: Dict[str, Any] = {"Bucket": name}
        # us-east-1 rejects an explicit location constraint
        if region and region != _US_EAST_1:
            kwargs["CreateBucketConfiguration"] = {"LocationConstraint": region}
        try:
            self.client.create_bucket(**kwargs)
        except (ClientError, BotoCoreError) as e:
            raise _remote_failure("create_bucket", e, name) from e

    def enable_bucket_acceleration(self, name: str) -> str:
        """Turn on transfer acceleration and return the status read back."""
        try:
            self.client.put_bucket_accelerate_configuration(
                Bucket=name, AccelerateConfiguration={"Status": "Enabled"}
            )
            response = self.client.get_bucket_accelerate_configuration(Bucket=name)
        except (ClientError, BotoCoreError) as e:
            raise _remote_failure("bucket_accelerate_configuration", e, name) from e
        return response.get("Status", "")

    def delete_bucket(self, name: str) -> None:
        try:
            self.client.delete_bucket(Bucket=name)
        except (ClientError, BotoCoreError) as e:
            raise _remote_failure("delete_bucket", e, name) from e

    def object_exists(self, bucket: str, key: str) -> bool:
        try:
            self.client.head_object(Bucket=bucket, Key=key)
            return True
        except ClientError as e:
            if _error_code(e) in _MISSING_CODES:
                return False
            raise _remote_failure("head_object", e, bucket, key) from e
        except BotoCoreError as e:
            raise _remote_failure("head_object", e, bucket, key) from e

    def put_object(
        self, bucket: str, key: str, stream: BinaryIO, content_type: str
    ) -> None:
        try:
            self.client.put_object(
                Bucket=bucket, Key=key, Body=stream, ContentType=content_type
            )
        except (ClientError, BotoCoreError) as e:
            raise _remote_failure("put_object", e, bucket, key) from e

    def get_object(self, bucket: str, key: str) -> Any:
        """Return the object's streaming body; the caller must close it."""
        try:
            response = self.client.get_object(Bucket=bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            raise _remote_failure("get_object", e, bucket, key) from e
        return response["Body"]

    def copy_object(
        self, source_bucket: str, source_key: str, bucket: str, key: str
    ) -> None:
        try:
            self.client.copy_object(
                CopySource={"Bucket": source_bucket, "Key": source_key},
                Bucket=bucket,
                Key=key,
            )
        except (ClientError, BotoCoreError) as e:
            raise _remote_failure("copy_object", e, bucket, key) from e

    def delete_object(self, bucket: str, key: str) -> None:
        try:
            self.client.delete_object(Bucket=bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            raise _remote_failure("delete_object", e, bucket, key) from e
