"""Shared CLI plumbing for command modules.

Client creation from the resolved configuration, and result output.
Distinct from cli.helpers which converts models into ResultTable rows.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pcp_tool.cli.output import OutputOptions, write_output
from pcp_tool.core.client import PcpClient
from pcp_tool.core.config import load_config, resolve_config

if TYPE_CHECKING:
    import typer

    from pcp_tool.core.config import ResolvedConfig
    from pcp_tool.core.models import ResultTable

_CLI_KEYS = ("host", "port", "user", "password", "pass_file", "timeout")


def get_resolved_config(ctx: typer.Context) -> ResolvedConfig:
    obj = ctx.ensure_object(dict)
    config = load_config(obj.get("config_file"))

    cli_overrides: dict[str, Any] = {}
    for key in _CLI_KEYS:
        val = obj.get(key)
        if val is not None:
            cli_overrides[key] = val

    return resolve_config(config, profile_name=obj.get("profile"), **cli_overrides)


def get_client(ctx: typer.Context) -> PcpClient:
    resolved = get_resolved_config(ctx)
    return PcpClient(resolved.client_options(), commands=resolved.commands())


def output_result(ctx: typer.Context, result: ResultTable) -> None:
    options = ctx.ensure_object(dict).get("output") or OutputOptions()
    write_output(options.formatter(), result)
