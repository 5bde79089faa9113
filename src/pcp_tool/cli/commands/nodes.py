"""Backend node commands: node-count and node-info.

Thin CLI layer; PCP execution and decoding live in core.client.
"""

from __future__ import annotations

from typing import Annotated

import typer

from pcp_tool.cli.commands._shared import get_client, output_result
from pcp_tool.cli.helpers import node_info_table


def node_count_command(ctx: typer.Context) -> None:
    """Print the number of backend nodes pgpool manages."""
    with get_client(ctx) as client:
        count = client.node_count()
    typer.echo(str(count))


def node_info_command(
    ctx: typer.Context,
    node_id: Annotated[
        int | None,
        typer.Argument(help="Backend node ID"),
    ] = None,
    all_nodes: Annotated[
        bool,
        typer.Option("--all", help="Show every node reported by pcp_node_count"),
    ] = False,
) -> None:
    """
    Show hostname, port, status, weight and role of backend nodes.

    Pass a NODE_ID for one node, or --all to query node IDs 0..N-1.
    """
    if node_id is None and not all_nodes:
        typer.echo("Error: Must specify NODE_ID or --all", err=True)
        raise typer.Exit(2)

    with get_client(ctx) as client:
        if all_nodes:
            node_ids = list(range(client.node_count()))
        else:
            node_ids = [node_id]  # type: ignore[list-item]
        nodes = [(nid, client.node_info(nid)) for nid in node_ids]

    output_result(ctx, node_info_table(nodes))
