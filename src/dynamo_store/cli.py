"""Command-line interface for dynamo-store.

Commands:
    - check: Validate configuration and probe DynamoDB connectivity
    - list-tables: List table names
    - describe-table: Describe a single table
    - wait-for: Wait for a table to reach a state
    - call: Run any forwarded operation with JSON parameters

Results are printed as JSON.
"""

import json
from typing import Annotated, Any, NoReturn, Optional

import typer

from . import __version__
from .cli_params import (
    AccessKeyOption,
    DebugOption,
    EndpointOption,
    MaxRetriesOption,
    ProfileOption,
    RegionOption,
    SecretKeyOption,
    SessionTokenOption,
    TimeoutOption,
)
from .core.exceptions import DataError
from .store import DynamoStore

app = typer.Typer(
    name="dynamo-store",
    help="DynamoDB store operations from the command line.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"dynamo-store {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, help="Show version."),
    ] = None,
) -> None:
    """
    dynamo-store: configured DynamoDB access with DYNAMO.* error codes.
    """
    pass


def _create_store(
    region: Optional[str] = None,
    endpoint: Optional[str] = None,
    access_key_id: Optional[str] = None,
    secret_access_key: Optional[str] = None,
    session_token: Optional[str] = None,
    aws_profile: Optional[str] = None,
    timeout: float = 5.0,
    max_retries: int = 5,
    debug: bool = False,
) -> DynamoStore:
    """Create a store from command-line options."""
    return DynamoStore(
        {
            "region": region,
            "endpoint": endpoint,
            "access_key_id": access_key_id,
            "secret_access_key": secret_access_key,
            "session_token": session_token,
            "aws_profile": aws_profile,
            "timeout": timeout,
            "max_retries": max_retries,
            "debug": debug,
        }
    )


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, default=str))


def _parse_params(raw: Optional[str]) -> dict[str, Any]:
    if not raw:
        return {}
    try:
        params = json.loads(raw)
    except json.JSONDecodeError as e:
        raise DataError(f"--params is not valid JSON: {e}")
    if not isinstance(params, dict):
        raise DataError("--params must be a JSON object")
    return params


def _fail(error: Exception) -> NoReturn:
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(1)


@app.command("check")
def check_cmd(
    region: RegionOption = None,
    endpoint: EndpointOption = None,
    access_key_id: AccessKeyOption = None,
    secret_access_key: SecretKeyOption = None,
    session_token: SessionTokenOption = None,
    aws_profile: ProfileOption = None,
    timeout: TimeoutOption = 5.0,
    max_retries: MaxRetriesOption = 5,
    debug: DebugOption = False,
) -> None:
    """
    Validate configuration and probe DynamoDB with a single list-tables call.

    Examples:
        dynamo-store check --region local
        dynamo-store check --region eu-west-1 --aws-profile myprofile
    """
    try:
        with _create_store(
            region=region,
            endpoint=endpoint,
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            session_token=session_token,
            aws_profile=aws_profile,
            timeout=timeout,
            max_retries=max_retries,
            debug=debug,
        ) as store:
            store.run()
            endpoint_url = store.config.endpoint_url or "default"
    except Exception as e:
        _fail(e)

    typer.echo(f"✓ Connected to DynamoDB ({region}, endpoint: {endpoint_url})")


@app.command("list-tables")
def list_tables_cmd(
    limit: Annotated[
        Optional[int], typer.Option("--limit", help="Maximum number of tables")
    ] = None,
    region: RegionOption = None,
    endpoint: EndpointOption = None,
    access_key_id: AccessKeyOption = None,
    secret_access_key: SecretKeyOption = None,
    session_token: SessionTokenOption = None,
    aws_profile: ProfileOption = None,
    timeout: TimeoutOption = 5.0,
    max_retries: MaxRetriesOption = 5,
    debug: DebugOption = False,
) -> None:
    """
    List DynamoDB table names.

    Examples:
        dynamo-store list-tables --region local
    """
    params: dict[str, Any] = {}
    if limit is not None:
        params["Limit"] = limit

    try:
        with _create_store(
            region=region,
            endpoint=endpoint,
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            session_token=session_token,
            aws_profile=aws_profile,
            timeout=timeout,
            max_retries=max_retries,
            debug=debug,
        ) as store:
            response = store.call("list_tables", params)
    except Exception as e:
        _fail(e)

    _echo_json(response.get("TableNames", []))


@app.command("describe-table")
def describe_table_cmd(
    table: Annotated[str, typer.Argument(help="Table name")],
    region: RegionOption = None,
    endpoint: EndpointOption = None,
    access_key_id: AccessKeyOption = None,
    secret_access_key: SecretKeyOption = None,
    session_token: SessionTokenOption = None,
    aws_profile: ProfileOption = None,
    timeout: TimeoutOption = 5.0,
    max_retries: MaxRetriesOption = 5,
    debug: DebugOption = False,
) -> None:
    """
    Describe a DynamoDB table.

    Examples:
        dynamo-store describe-table users --region local
    """
    try:
        with _create_store(
            region=region,
            endpoint=endpoint,
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            session_token=session_token,
            aws_profile=aws_profile,
            timeout=timeout,
            max_retries=max_retries,
            debug=debug,
        ) as store:
            response = store.call("describe_table", TableName=table)
    except Exception as e:
        _fail(e)

    _echo_json(response.get("Table", {}))


@app.command("wait-for")
def wait_for_cmd(
    state: Annotated[
        str, typer.Argument(help="State to wait for: table_exists or table_not_exists")
    ],
    table: Annotated[str, typer.Argument(help="Table name")],
    delay: Annotated[
        int, typer.Option("--delay", help="Seconds between polls")
    ] = 20,
    max_attempts: Annotated[
        int, typer.Option("--max-attempts", help="Maximum number of polls")
    ] = 25,
    region: RegionOption = None,
    endpoint: EndpointOption = None,
    access_key_id: AccessKeyOption = None,
    secret_access_key: SecretKeyOption = None,
    session_token: SessionTokenOption = None,
    aws_profile: ProfileOption = None,
    timeout: TimeoutOption = 5.0,
    max_retries: MaxRetriesOption = 5,
    debug: DebugOption = False,
) -> None:
    """
    Wait until a table reaches the given state.

    Examples:
        dynamo-store wait-for table_exists users --region local --delay 1
    """
    params = {
        "TableName": table,
        "WaiterConfig": {"Delay": delay, "MaxAttempts": max_attempts},
    }

    try:
        with _create_store(
            region=region,
            endpoint=endpoint,
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            session_token=session_token,
            aws_profile=aws_profile,
            timeout=timeout,
            max_retries=max_retries,
            debug=debug,
        ) as store:
            store.wait_for(state, params).result()
    except Exception as e:
        _fail(e)

    typer.echo(f"✓ Table {table} reached state {state}")


@app.command("call")
def call_cmd(
    operation: Annotated[
        str, typer.Argument(help="Operation name, e.g. put_item or putItem")
    ],
    params: Annotated[
        Optional[str],
        typer.Option("--params", "-p", help="Request parameters as a JSON object"),
    ] = None,
    region: RegionOption = None,
    endpoint: EndpointOption = None,
    access_key_id: AccessKeyOption = None,
    secret_access_key: SecretKeyOption = None,
    session_token: SessionTokenOption = None,
    aws_profile: ProfileOption = None,
    timeout: TimeoutOption = 5.0,
    max_retries: MaxRetriesOption = 5,
    debug: DebugOption = False,
) -> None:
    """
    Run a forwarded DynamoDB operation.

    Examples:
        dynamo-store call get_item --region local \
            -p '{"TableName": "users", "Key": {"id": {"S": "1"}}}'
    """
    try:
        request = _parse_params(params)
        with _create_store(
            region=region,
            endpoint=endpoint,
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            session_token=session_token,
            aws_profile=aws_profile,
            timeout=timeout,
            max_retries=max_retries,
            debug=debug,
        ) as store:
            response = store.call(operation, request)
    except Exception as e:
        _fail(e)

    response.pop("ResponseMetadata", None)
    _echo_json(response)


if __name__ == "__main__":
    app()
