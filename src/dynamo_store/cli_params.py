"""Shared CLI parameter definitions.

Every command connects to DynamoDB the same way, so the connection options
are declared once here as typed ``Annotated`` aliases and reused in each
command signature:

    @app.command()
    def my_command(
        region: RegionOption = None,
        endpoint: EndpointOption = None,
    ):
        pass
"""

from typing import Annotated, Optional

import typer

RegionOption = Annotated[
    Optional[str],
    typer.Option("--region", help="AWS region name ('local' for DynamoDB Local)"),
]

EndpointOption = Annotated[
    Optional[str], typer.Option("--endpoint", help="Custom DynamoDB endpoint URL")
]

AccessKeyOption = Annotated[
    Optional[str], typer.Option("--access-key-id", help="AWS access key ID")
]

SecretKeyOption = Annotated[
    Optional[str], typer.Option("--secret-access-key", help="AWS secret access key")
]

SessionTokenOption = Annotated[
    Optional[str], typer.Option("--session-token", help="AWS session token")
]

ProfileOption = Annotated[
    Optional[str], typer.Option("--aws-profile", help="AWS CLI profile name")
]

TimeoutOption = Annotated[
    float, typer.Option("--timeout", help="Connect/read timeout in seconds")
]

MaxRetriesOption = Annotated[
    int, typer.Option("--max-retries", help="Maximum SDK retry attempts")
]

DebugOption = Annotated[
    bool, typer.Option("--debug", help="Log translated DynamoDB errors")
]
