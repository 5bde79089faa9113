"""Configuration management CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

import typer

from pcp_tool.cli.commands._shared import get_resolved_config
from pcp_tool.core.config import DEFAULT_CONFIG_PATH, load_config
from pcp_tool.core.credentials import validate_pass_file
from pcp_tool.core.exceptions import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

config_app = typer.Typer(help="Configuration management commands")


@config_app.callback(invoke_without_command=True)
def config_callback(ctx: typer.Context) -> None:
    if not ctx.invoked_subcommand:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _mask_password(value: str | None) -> str:
    if value is None:
        return "not set"
    return "***"


def _echo_section(title: str, rows: list[tuple[str, str, str]]) -> None:
    typer.echo(f"{title}:")
    for field_name, value, source in rows:
        typer.echo(f"  {field_name}: {value} ({source})")
    typer.echo("")


def _pass_file_status(path: Path) -> str:
    try:
        validate_pass_file(path)
    except ConfigError as e:
        return e.message
    return "ok"


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    """Display resolved configuration with source attribution."""
    resolved = get_resolved_config(ctx)
    config_path: Path | None = ctx.obj.get("config_file")
    sources = resolved.sources

    def row(field_name: str, value: str) -> tuple[str, str, str]:
        return field_name, value, sources.get(field_name, "default")

    _echo_section(
        "Connection Settings (resolved)",
        [
            row("hostname", resolved.hostname),
            row("port", str(resolved.port)),
            row("username", resolved.username or "not set"),
            row("password", _mask_password(resolved.password)),
            row("pass_file", str(resolved.pass_file) if resolved.pass_file else "not set"),
            row("timeout", f"{resolved.timeout}s"),
        ],
    )
    _echo_section(
        "Commands",
        [
            row("pcp_dir", str(resolved.pcp_dir)),
            row("pgpool_bin", resolved.pgpool_bin),
        ],
    )
    if resolved.pass_file:
        typer.echo(f"pcppass check: {_pass_file_status(resolved.pass_file)}")

    typer.echo(f"Active Profile: {resolved.active_profile or 'none'}")
    typer.echo(f"Config File: {config_path or DEFAULT_CONFIG_PATH}")


@config_app.command("profiles")
def config_profiles(ctx: typer.Context) -> None:
    """List available connection profiles."""
    config_path: Path | None = ctx.obj.get("config_file")
    app_config = load_config(config_path)
    active_profile = ctx.obj.get("profile") or app_config.default_profile

    if not app_config.profiles:
        typer.echo("No profiles configured.")
        display_path = config_path or DEFAULT_CONFIG_PATH
        typer.echo(f"Add profiles to: {display_path}")
        return

    typer.echo("Available Profiles:")
    typer.echo("")
    for name, profile in sorted(app_config.profiles.items()):
        is_active = name == active_profile
        marker = "* " if is_active else "  "
        label = " (active)" if is_active else ""
        typer.echo(f"{marker}{name}{label}")

        display_fields = [
            ("hostname", profile.hostname),
            ("port", str(profile.port)),
        ]
        if profile.username:
            display_fields.append(("username", profile.username))
        if profile.pass_file:
            display_fields.append(("pass_file", str(profile.pass_file)))

        for field_name, value in display_fields:
            typer.echo(f"      {field_name}: {value}")
        typer.echo("")
