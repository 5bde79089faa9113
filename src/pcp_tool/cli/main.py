"""PCP Tool main entry point and command registration."""

from __future__ import annotations

import atexit
from pathlib import Path  # noqa: TC003
from typing import Annotated

import sentry_sdk
import typer

from pcp_tool.__about__ import __version__
from pcp_tool.cli.commands._shared import get_client
from pcp_tool.cli.commands.config import config_app
from pcp_tool.cli.commands.nodes import node_count_command, node_info_command
from pcp_tool.cli.commands.processes import proc_count_command, proc_info_command
from pcp_tool.cli.commands.watchdog import watchdog_command
from pcp_tool.cli.output import OutputFormat, OutputOptions
from pcp_tool.core.exceptions import PcpToolError
from pcp_tool.core.logging import setup_logging
from pcp_tool.core.monitoring import setup_sentry

app = typer.Typer(
    help="PCP Tool - pgpool-II PCP administration tool",
    no_args_is_help=True,
)

app.add_typer(config_app, name="config")
app.command("node-count")(node_count_command)
app.command("node-info")(node_info_command)
app.command("proc-count")(proc_count_command)
app.command("proc-info")(proc_info_command)
app.command("watchdog")(watchdog_command)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"pcp-tool {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable verbose logging"),
    ] = False,
    profile: Annotated[
        str | None,
        typer.Option("--profile", "-P", help="Named connection profile"),
    ] = None,
    host: Annotated[
        str | None,
        typer.Option("--host", "-H", help="pgpool PCP host"),
    ] = None,
    port: Annotated[
        int | None,
        typer.Option("--port", "-p", help="pgpool PCP port"),
    ] = None,
    user: Annotated[
        str | None,
        typer.Option("--user", "-U", help="PCP user name"),
    ] = None,
    password: Annotated[
        str | None,
        typer.Option("--password", "-W", help="PCP password"),
    ] = None,
    pass_file: Annotated[
        Path | None,
        typer.Option("--pass-file", help="pcppass file (pgpool-II 3.5+, mode 0600)"),
    ] = None,
    timeout: Annotated[
        int | None,
        typer.Option("--timeout", "-t", help="PCP timeout in seconds (pgpool < 3.5)"),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config file"),
    ] = None,
    format: Annotated[
        OutputFormat | None,
        typer.Option("--format", "-f", help="Output format: table|json|csv"),
    ] = None,
    table: Annotated[
        bool,
        typer.Option("--table", help="Shorthand for --format table"),
    ] = False,
    compact: Annotated[
        bool,
        typer.Option("--compact", help="Compact JSON output (no indentation)"),
    ] = False,
    width: Annotated[
        int,
        typer.Option("--width", help="Column width for table format"),
    ] = 40,
    no_header: Annotated[
        bool,
        typer.Option("--no-header", help="Suppress header row in CSV output"),
    ] = False,
) -> None:
    """PCP Tool - pgpool-II PCP administration tool."""
    setup_logging(verbose)
    if setup_sentry():
        transaction = sentry_sdk.start_transaction(
            op="cli", name=ctx.invoked_subcommand or "pcp-tool"
        )
        transaction.__enter__()

        def cleanup() -> None:
            transaction.__exit__(None, None, None)
            sentry_sdk.flush(timeout=2)

        atexit.register(cleanup)

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["profile"] = profile
    ctx.obj["host"] = host
    ctx.obj["port"] = port
    ctx.obj["user"] = user
    ctx.obj["password"] = password
    ctx.obj["pass_file"] = pass_file
    ctx.obj["timeout"] = timeout
    ctx.obj["config_file"] = config_file
    ctx.obj["output"] = OutputOptions.from_flags(
        format, table=table, compact=compact, width=width, no_header=no_header
    )


def run() -> None:
    """Entry point with global error handling."""
    try:
        app()
    except PcpToolError as e:
        sentry_sdk.capture_exception(e)
        typer.echo(f"Error: {e.message}", err=True)
        raise SystemExit(e.exit_code) from None
    except SystemExit:
        raise
    except KeyboardInterrupt:
        raise SystemExit(130) from None
    except Exception as e:
        sentry_sdk.capture_exception(e)
        typer.echo(f"Error: {e}", err=True)
        raise SystemExit(1) from None


@app.command("pgpool-version")
def pgpool_version_command(ctx: typer.Context) -> None:
    """Print the detected pgpool version and how credentials are passed."""
    with get_client(ctx) as client:
        typer.echo(f"pgpool {client.version}")
        typer.echo(f"credentials: {client.strategy.name}")
