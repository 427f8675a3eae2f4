"""The S3 sender: configure once, then run the action list per message.

Example:
    >>> config = SenderConfig(
    ...     actions="createBucket,upload",
    ...     bucket_name="reports",
    ...     parameters=["file"],
    ... )
    >>> sender = S3Sender(config, S3ClientConfig(region_name="eu-west-1"))
    >>> sender.configure()
    >>> sender.open()
    >>> sender.send_message("2024/summary.csv", {"file": open("summary.csv", "rb")})
    '2024/summary.csv'
"""

from collections.abc import Mapping, MutableMapping
from typing import Any, Optional

from s3_actions.actions import (
    ActionKind,
    build_request,
    validate_sender_config,
)
from s3_actions.core import get_logger
from s3_actions.core.exceptions import (
    ActionError,
    ConfigurationError,
    InvalidRequestError,
    S3ActionsError,
)
from s3_actions.objectstorage.clients import (
    Boto3StorageClient,
    S3ClientConfig,
    StorageClient,
)
from s3_actions.objectstorage.executor import ActionExecutor
from s3_actions.parameters import ParameterValues
from s3_actions.schemas import ExecutionResult, Failure, SenderConfig, Success

logger = get_logger(__name__)


def close_handle(handle: Any) -> None:
    """Close a downloaded content handle; ignores None."""
    close = getattr(handle, "close", None)
    if callable(close):
        close()


class S3Sender:
    """Runs a configured list of S3 actions for each message it is sent.

    Actions run in declared order and the first failure stops the sequence.
    Actions that already completed are not undone. The result is that of
    the last action.
    """

    def __init__(
        self,
        config: SenderConfig,
        client_config: Optional[S3ClientConfig] = None,
        client: Optional[StorageClient] = None,
    ):
        """Initialize the sender.

        Args:
            config: Sender configuration
            client_config: Connection settings used by open() to build a
                boto3-backed client
            client: Ready-made storage client; open() will not replace it
        """
        self.config = config
        self.client_config = client_config
        self.client = client
        self._owns_client = False
        self._actions: Optional[tuple[ActionKind, ...]] = None

    @property
    def actions(self) -> tuple[ActionKind, ...]:
        if self._actions is None:
            raise ConfigurationError(f"[{self.config.name}] sender is not configured")
        return self._actions

    def configure(self) -> None:
        """Validate the configuration; raises ConfigurationError."""
        self._actions = validate_sender_config(self.config)
        logger.info(
            "Sender configured",
            sender=self.config.name,
            actions=[kind.value for kind in self._actions],
            bucket=self.config.bucket_name,
        )

    def open(self) -> None:
        """Create the storage client unless one was supplied."""
        if self.client is not None:
            return
        client_config = self.client_config or S3ClientConfig()
        client_config = client_config.model_copy(
            update={
                "region_name": self.config.client_region,
                "accelerate_mode_enabled": self.config.accelerate_mode_enabled,
            }
        )
        self.client = Boto3StorageClient.from_config(client_config)
        self._owns_client = True
        logger.info("Sender opened", sender=self.config.name)

    def close(self) -> None:
        """Release the storage client if this sender created it."""
        if self._owns_client and isinstance(self.client, Boto3StorageClient):
            self.client.close()
            self.client = None
            self._owns_client = False
        logger.info("Sender closed", sender=self.config.name)

    def send_message(
        self,
        message: Optional[str],
        parameters: Optional[Mapping[str, Any]] = None,
        session: Optional[MutableMapping[str, Any]] = None,
    ) -> Optional[str]:
        """Run the action list for one message.

        Args:
            message: Default object key when no key parameter is given
            parameters: Per-call parameter values, e.g. ``file``
            session: Receives the content handle of a download under
                ``store_result_in_session_key``; required when the actions
                include download. A handle already stored there is closed
                before it is replaced.

        Returns:
            Result of the last action: a bucket name, object key, or the
            session key holding downloaded content

        Raises:
            ConfigurationError: Before any remote call, for bad inputs
            ActionError: When an action fails; later actions are skipped
        """
        if self.client is None:
            raise ConfigurationError(f"[{self.config.name}] sender is not opened")

        request = build_request(
            self.config, self.actions, ParameterValues(parameters, message)
        )
        if ActionKind.DOWNLOAD in request.actions and session is None:
            raise InvalidRequestError(
                f"[{self.config.name}] a session is required to receive the "
                f"content of [{ActionKind.DOWNLOAD.value}] action"
            )
        executor = ActionExecutor(self.client, self.config)

        result: Optional[str] = None
        for kind in request.actions:
            value = executor.execute(kind, request)
            if kind is ActionKind.DOWNLOAD:
                session_key = self.config.store_result_in_session_key
                close_handle(session.get(session_key))
                session[session_key] = value
                result = session_key
            else:
                result = value

        logger.info(
            "Actions completed",
            sender=self.config.name,
            bucket=request.bucket,
            key=request.key,
            result=result,
        )
        return result

    def run(
        self,
        message: Optional[str],
        parameters: Optional[Mapping[str, Any]] = None,
        session: Optional[MutableMapping[str, Any]] = None,
    ) -> ExecutionResult:
        """Like send_message, but report failures as a Failure value."""
        try:
            value = self.send_message(message, parameters, session)
        except ActionError as e:
            return Failure(
                kind=e.kind,
                message=e.message,
                action=e.action,
                bucket=e.bucket,
                key=e.key,
            )
        except S3ActionsError as e:
            return Failure(kind=e.kind, message=str(e))
        return Success(value=value or "")
