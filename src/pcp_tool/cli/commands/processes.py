"""pgpool child process commands: proc-count and proc-info."""

from __future__ import annotations

from typing import Annotated

import typer

from pcp_tool.cli.commands._shared import get_client, output_result
from pcp_tool.cli.helpers import proc_count_table, proc_info_table, proc_summary_table


def proc_count_command(ctx: typer.Context) -> None:
    """List the tokens reported by pcp_proc_count."""
    with get_client(ctx) as client:
        tokens = client.proc_count()
    output_result(ctx, proc_count_table(tokens))


def proc_info_command(
    ctx: typer.Context,
    summary: Annotated[
        bool,
        typer.Option("--summary", help="Count connected and idle slots per database"),
    ] = False,
) -> None:
    """
    Show pgpool connection slots with database, user and connected flag.

    Use --summary for per-database active/inactive counts with a TOTAL row.
    """
    with get_client(ctx) as client:
        procs = client.proc_info()
        if summary:
            result = proc_summary_table(client.proc_info_summary(procs))
        else:
            result = proc_info_table(procs)

    output_result(ctx, result)
