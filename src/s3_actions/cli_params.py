"""Shared CLI parameter definitions.

Connection options are declared once here and reused by the commands in
:mod:`s3_actions.cli`, so names and help text stay consistent.

Usage:

    @app.command()
    def my_command(region: RegionOption = DEFAULT_CLIENT_REGION):
        pass
"""

from typing import Annotated, Optional

import typer

AccessKeyOption = Annotated[
    Optional[str],
    typer.Option("--access-key-id", help="AWS access key ID"),
]

SecretKeyOption = Annotated[
    Optional[str],
    typer.Option("--secret-access-key", help="AWS secret access key"),
]

SessionTokenOption = Annotated[
    Optional[str],
    typer.Option("--session-token", help="AWS session token"),
]

RegionOption = Annotated[
    str,
    typer.Option("--region", help="Region endpoint for the client"),
]

EndpointUrlOption = Annotated[
    Optional[str],
    typer.Option("--endpoint-url", help="Custom S3 endpoint URL"),
]

ProfileOption = Annotated[
    Optional[str],
    typer.Option("--aws-profile", help="AWS CLI profile name"),
]

BucketOption = Annotated[
    str,
    typer.Option("--bucket", "-b", help="Bucket the actions operate on"),
]

AccelerateOption = Annotated[
    bool,
    typer.Option(
        "--accelerate/--no-accelerate",
        help="Use transfer acceleration and accelerate created buckets",
    ),
]

BucketCreationOption = Annotated[
    bool,
    typer.Option(
        "--create-missing-buckets/--no-create-missing-buckets",
        help="Create missing buckets on upload and copy",
    ),
]
