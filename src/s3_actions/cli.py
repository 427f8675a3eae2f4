"""Command-line interface for s3-actions.

Commands:
    - run: Execute an action list against a bucket
    - list-actions: Show the supported action names
    - list-regions: Show the supported client regions
"""

import shutil
from contextlib import ExitStack
from pathlib import Path
from typing import Annotated, Any, Optional

import typer

from . import __version__
from .actions import parse_actions, valid_actions
from .cli_params import (
    AccelerateOption,
    AccessKeyOption,
    BucketCreationOption,
    BucketOption,
    EndpointUrlOption,
    ProfileOption,
    RegionOption,
    SecretKeyOption,
    SessionTokenOption,
)
from .core.exceptions import S3ActionsError
from .objectstorage import S3ClientConfig
from .parameters import (
    CONTENT_TYPE,
    DESTINATION_FILE_NAME,
    FILE,
    FILE_NAME,
)
from .regions import sorted_regions
from .schemas import DEFAULT_CLIENT_REGION, SenderConfig
from .sender import S3Sender, close_handle

app = typer.Typer(
    name="s3-actions",
    help="Run bucket and object actions against S3-compatible storage.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"s3-actions {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, help="Show version."),
    ] = None,
) -> None:
    """
    S3-Actions: create, delete, upload, download and copy S3 objects.
    """
    pass


def _save_download(handle: Any, output: Optional[Path]) -> None:
    """Write a downloaded content handle to output, then close it."""
    try:
        if output is not None:
            with output.open("wb") as target:
                shutil.copyfileobj(handle, target)
            typer.echo(f"Saved to {output}")
    finally:
        handle.close()


@app.command("run")
def run_cmd(
    actions: Annotated[
        str, typer.Argument(help="Actions to run, e.g. 'createBucket,upload'")
    ],
    bucket: BucketOption,
    key: Annotated[
        Optional[str], typer.Option("--key", "-k", help="Object key")
    ] = None,
    file: Annotated[
        Optional[Path],
        typer.Option("--file", "-f", help="Local file to upload", exists=True),
    ] = None,
    content_type: Annotated[
        Optional[str], typer.Option("--content-type", help="Upload content type")
    ] = None,
    destination_bucket: Annotated[
        Optional[str],
        typer.Option("--destination-bucket", help="Destination bucket for copy"),
    ] = None,
    destination_key: Annotated[
        Optional[str],
        typer.Option("--destination-key", help="Destination key for copy"),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Where to save a downloaded object"),
    ] = None,
    tolerate_existing_bucket: Annotated[
        bool,
        typer.Option(
            "--tolerate-existing-bucket",
            help="Let createBucket succeed when the bucket already exists",
        ),
    ] = False,
    force_global_bucket_access: Annotated[
        bool,
        typer.Option(
            "--force-global-bucket-access",
            help="Allow creating buckets in --bucket-region",
        ),
    ] = False,
    bucket_region: Annotated[
        Optional[str],
        typer.Option("--bucket-region", help="Region for new buckets"),
    ] = None,
    accelerate: AccelerateOption = False,
    create_missing_buckets: BucketCreationOption = False,
    access_key_id: AccessKeyOption = None,
    secret_access_key: SecretKeyOption = None,
    session_token: SessionTokenOption = None,
    region_name: RegionOption = DEFAULT_CLIENT_REGION,
    endpoint_url: EndpointUrlOption = None,
    aws_profile: ProfileOption = None,
) -> None:
    """
    Run an action list against a bucket.

    Examples:
        s3-actions run createBucket,upload -b reports -k a.csv -f a.csv
        s3-actions run download -b reports -k a.csv -o a.csv
        s3-actions run copy -b reports -k a.csv --destination-bucket archive \
            --destination-key a.csv
    """
    declared = []
    if file is not None:
        declared.append(FILE)
    if key is not None:
        declared.append(FILE_NAME)
    if destination_key is not None:
        declared.append(DESTINATION_FILE_NAME)
    if content_type is not None:
        declared.append(CONTENT_TYPE)

    session: dict[str, Any] = {}
    try:
        config = SenderConfig(
            name="s3-actions-cli",
            actions=actions,
            bucket_name=bucket,
            destination_bucket_name=destination_bucket,
            client_region=region_name,
            bucket_region=bucket_region,
            accelerate_mode_enabled=accelerate,
            force_global_bucket_access=force_global_bucket_access,
            bucket_creation_enabled=create_missing_buckets,
            tolerate_existing_bucket=tolerate_existing_bucket,
            parameters=declared,
        )
        client_config = S3ClientConfig(
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            session_token=session_token,
            endpoint_url=endpoint_url,
            aws_profile=aws_profile,
        )
        sender = S3Sender(config, client_config)
        sender.configure()
        sender.open()

        with ExitStack() as stack:
            stack.callback(sender.close)
            # Runs before sender.close, also when a later action fails
            stack.callback(
                lambda: close_handle(session.get(config.store_result_in_session_key))
            )
            values: dict[str, Any] = {
                FILE_NAME: key,
                DESTINATION_FILE_NAME: destination_key,
                CONTENT_TYPE: content_type,
            }
            if file is not None:
                values[FILE] = stack.enter_context(file.open("rb"))

            result = sender.send_message(key, values, session)

            # The content handle must be drained before the client closes
            handle = session.get(config.store_result_in_session_key)
            if handle is not None:
                _save_download(handle, output)

        typer.echo(f"Result: {result}")

    except S3ActionsError as e:
        typer.echo(f"Error [{e.kind.value}]: {e}", err=True)
        raise typer.Exit(1)
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("list-actions")
def list_actions_cmd(
    actions: Annotated[
        Optional[str],
        typer.Argument(help="Optional action list to check instead of listing"),
    ] = None,
) -> None:
    """
    List supported actions, or check that an action list parses.
    """
    if actions is None:
        for name in valid_actions():
            typer.echo(name)
        return

    try:
        kinds = parse_actions(actions)
    except S3ActionsError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    for index, kind in enumerate(kinds, start=1):
        marker = " (needs object key)" if kind.needs_object_key else ""
        typer.echo(f"{index}. {kind.value}{marker}")


@app.command("list-regions")
def list_regions_cmd() -> None:
    """
    List supported client regions.
    """
    for region in sorted_regions():
        typer.echo(region)


if __name__ == "__main__":
    app()
