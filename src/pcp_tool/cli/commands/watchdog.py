"""Watchdog cluster status command."""

from __future__ import annotations

import typer

from pcp_tool.cli.commands._shared import get_client, output_result
from pcp_tool.cli.helpers import watchdog_info_table


def watchdog_command(ctx: typer.Context) -> None:
    """Show watchdog cluster size, quorum state and local VIP status."""
    with get_client(ctx) as client:
        info = client.watchdog_info()
    output_result(ctx, watchdog_info_table(info))
