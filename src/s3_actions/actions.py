"""Action list parsing and request validation.

An action list is a string such as ``"createBucket, upload"``. Parsing turns
it into an ordered tuple of :class:`ActionKind`; validation checks the sender
configuration against what each requested action needs. Both steps are pure:
nothing here talks to the storage service.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, Optional

from s3_actions.core import get_logger
from s3_actions.core.exceptions import ConfigurationError, InvalidRequestError
from s3_actions.parameters import (
    DESTINATION_BUCKET_NAME,
    DESTINATION_KEY_PARAMETERS,
    FILE,
    ParameterValues,
)
from s3_actions.regions import (
    is_valid_bucket_name,
    validate_bucket_name,
    validate_region,
)
from s3_actions.schemas import SenderConfig

logger = get_logger(__name__)

_TOKEN_SEPARATORS = re.compile(r"[\s,]+")


class ActionKind(str, Enum):
    """Actions a sender can perform, keyed by their configuration token."""

    CREATE_BUCKET = "createBucket"
    DELETE_BUCKET = "deleteBucket"
    UPLOAD = "upload"
    DOWNLOAD = "download"
    COPY = "copy"
    DELETE = "delete"

    @property
    def needs_object_key(self) -> bool:
        return self not in (ActionKind.CREATE_BUCKET, ActionKind.DELETE_BUCKET)


def valid_actions() -> list[str]:
    """Return every accepted action token, sorted."""
    return sorted(kind.value for kind in ActionKind)


def parse_actions(raw: Optional[str]) -> tuple[ActionKind, ...]:
    """Split an action list into ordered action kinds.

    Args:
        raw: Tokens separated by commas and/or whitespace

    Returns:
        Action kinds in declared order

    Raises:
        ConfigurationError: If the list is empty or holds an unknown token
    """
    tokens = [token for token in _TOKEN_SEPARATORS.split(raw or "") if token]
    if not tokens:
        raise ConfigurationError(
            f"no actions configured, please use following supported actions "
            f"{valid_actions()}"
        )

    kinds = []
    for token in tokens:
        try:
            kinds.append(ActionKind(token))
        except ValueError:
            raise ConfigurationError(
                f"invalid action [{token}] please use following supported "
                f"actions {valid_actions()}"
            ) from None
    return tuple(kinds)


def validate_sender_config(config: SenderConfig) -> tuple[ActionKind, ...]:
    """Validate a sender configuration without touching the service.

    Returns:
        The parsed action sequence

    Raises:
        ConfigurationError: On the first rule the configuration breaks
    """
    prefix = f"[{config.name}]"
    try:
        validate_region(config.client_region, "clientRegion")
        validate_bucket_name(config.bucket_name)
        if config.destination_bucket_name is not None:
            validate_bucket_name(
                config.destination_bucket_name, "destinationBucketName"
            )

        kinds = parse_actions(config.actions)
        declared = set(config.parameters)

        for kind in kinds:
            if kind is ActionKind.CREATE_BUCKET and config.force_global_bucket_access:
                validate_region(config.bucket_region, "bucketRegion")

            if kind is ActionKind.UPLOAD and FILE not in declared:
                raise ConfigurationError(
                    f"file parameter is required to perform [{kind.value}] action"
                )

            if kind is ActionKind.COPY:
                has_destination_bucket = bool(config.destination_bucket_name) or (
                    DESTINATION_BUCKET_NAME in declared
                )
                has_destination_key = any(
                    name in declared for name in DESTINATION_KEY_PARAMETERS
                )
                if not (has_destination_bucket and has_destination_key):
                    raise ConfigurationError(
                        "destinationBucketName and a destination_file_name or "
                        "destination_object_key parameter are required to "
                        f"perform [{kind.value}] action"
                    )
    except ConfigurationError as e:
        logger.error("Sender configuration rejected", sender=config.name, error=str(e))
        raise ConfigurationError(f"{prefix} {e}") from None

    logger.debug(
        "Sender configuration validated",
        sender=config.name,
        actions=[kind.value for kind in kinds],
    )
    return kinds


@dataclass(frozen=True)
class ActionRequest:
    """Everything one invocation needs to run its action sequence."""

    actions: tuple[ActionKind, ...]
    bucket: str
    key: Optional[str] = None
    destination_bucket: Optional[str] = None
    destination_key: Optional[str] = None
    stream: Optional[BinaryIO] = None
    content_type: Optional[str] = None


def build_request(
    config: SenderConfig,
    actions: tuple[ActionKind, ...],
    parameters: ParameterValues,
) -> ActionRequest:
    """Resolve per-call values into an ActionRequest and check its invariants.

    The checks cover the whole sequence, so a bad input stops the request
    before the first remote call.

    Raises:
        InvalidRequestError: If an action is missing an input it needs
    """
    request = ActionRequest(
        actions=actions,
        bucket=config.bucket_name,
        key=parameters.object_key(),
        destination_bucket=parameters.destination_bucket_name(
            config.destination_bucket_name
        ),
        destination_key=parameters.destination_object_key(),
        stream=parameters.file(),
        content_type=parameters.content_type(),
    )

    for kind in actions:
        if kind.needs_object_key and not request.key:
            raise InvalidRequestError(
                f"no value found for the file_name parameter or message, one "
                f"is required to perform [{kind.value}] action"
            )
        if kind is ActionKind.UPLOAD and request.stream is None:
            raise InvalidRequestError(
                f"no value was assigned to the file parameter for [{kind.value}]"
            )
        if kind is ActionKind.COPY:
            if not request.destination_key:
                raise InvalidRequestError(
                    "no value found for the destination key parameter, it is "
                    f"required to perform [{kind.value}] action"
                )
            if not is_valid_bucket_name(request.destination_bucket):
                raise InvalidRequestError(
                    f"invalid destination bucket [{request.destination_bucket}] "
                    f"for [{kind.value}] action"
                )

    return request
