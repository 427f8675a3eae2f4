"""Configuration and result schemas for s3-actions."""

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .core.exceptions import ErrorKind

DEFAULT_CLIENT_REGION = "eu-west-1"
DEFAULT_CONTENT_TYPE = "application/octet-stream"
DEFAULT_SESSION_KEY = "s3ObjectContent"


class SenderConfig(BaseModel):
    """Static configuration of an S3 sender.

    Built once when the sender is configured; per-call inputs such as the
    file stream or object key are supplied as parameter values instead.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field("S3Sender", description="Name used in log messages")
    actions: str = Field(
        ..., description="Comma or whitespace separated list of actions"
    )
    bucket_name: str = Field(..., description="Bucket the actions operate on")
    destination_bucket_name: Optional[str] = Field(
        None, description="Destination bucket for the copy action"
    )
    client_region: str = Field(
        DEFAULT_CLIENT_REGION, description="Region endpoint for the client"
    )
    bucket_region: Optional[str] = Field(
        None,
        description="Region for new buckets when global bucket access is on",
    )
    accelerate_mode_enabled: bool = Field(
        False, description="Use accelerate endpoints and accelerate new buckets"
    )
    force_global_bucket_access: bool = Field(
        False, description="Allow creating buckets outside the client region"
    )
    bucket_creation_enabled: bool = Field(
        False, description="Create missing buckets on upload and copy"
    )
    tolerate_existing_bucket: bool = Field(
        False, description="Let createBucket succeed when the bucket exists"
    )
    store_result_in_session_key: str = Field(
        DEFAULT_SESSION_KEY,
        description="Session key receiving the content handle of a download",
    )
    parameters: list[str] = Field(
        default_factory=list, description="Names of declared call parameters"
    )


class Success(BaseModel):
    """Outcome of an action sequence that ran to completion."""

    status: Literal["success"] = "success"
    value: str


class Failure(BaseModel):
    """Outcome of an action sequence that stopped on an error."""

    status: Literal["failure"] = "failure"
    kind: ErrorKind
    message: str
    action: Optional[str] = None
    bucket: Optional[str] = None
    key: Optional[str] = None


# Discriminated union for execution outcomes
ExecutionResult = Union[Success, Failure]
