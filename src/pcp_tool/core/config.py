"""Configuration management for PCP Tool.

Handles TOML config files, environment variables, named profiles,
and configuration precedence resolution.

Precedence order (highest to lowest):
1. CLI flags (--host, --port, etc.)
2. Environment variables (PCPHOST, PCPPORT, PCPUSER, PCPPASSWORD,
   PCPPASSFILE, PCP_TIMEOUT)
3. Named profile (--profile or PCP_PROFILE env var)
4. Config file defaults
5. Built-in defaults
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, field_validator

from pcp_tool.core.exceptions import ConfigError

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "pcp-tool" / "config.toml"

DEFAULT_PCP_DIR = Path("/usr/sbin")
DEFAULT_PGPOOL_BIN = "pgpool"

_PCP_ENV_VARS: dict[str, str] = {
    "PCPHOST": "hostname",
    "PCPPORT": "port",
    "PCPUSER": "username",
    "PCPPASSWORD": "password",  # pragma: allowlist secret
    "PCPPASSFILE": "pass_file",
    "PCP_TIMEOUT": "timeout",
}

_INT_FIELDS = {"port", "timeout"}

_PROFILE_DEFAULTS: dict[str, Any] = {
    "hostname": "localhost",
    "port": 9898,
    "username": None,
    "password": None,
    "pass_file": None,
    "timeout": 10,
}


class ClientOptions(BaseModel):
    """Connection settings handed to PcpClient.

    Not validated here: PcpClient checks them at construction so the
    failure is a ConfigError rather than a pydantic ValidationError.
    """

    hostname: str
    port: int = 9898
    username: str
    password: str | None = None
    pass_file: Path | None = None
    timeout: int = 10


class PcpCommands(BaseModel):
    """Executable paths for the PCP tools and the pgpool binary."""

    pgpool: str = DEFAULT_PGPOOL_BIN
    node_count: str = str(DEFAULT_PCP_DIR / "pcp_node_count")
    node_info: str = str(DEFAULT_PCP_DIR / "pcp_node_info")
    proc_count: str = str(DEFAULT_PCP_DIR / "pcp_proc_count")
    proc_info: str = str(DEFAULT_PCP_DIR / "pcp_proc_info")
    watchdog_info: str = str(DEFAULT_PCP_DIR / "pcp_watchdog_info")

    @classmethod
    def in_dir(cls, pcp_dir: Path, pgpool: str = DEFAULT_PGPOOL_BIN) -> PcpCommands:
        return cls(
            pgpool=pgpool,
            node_count=str(pcp_dir / "pcp_node_count"),
            node_info=str(pcp_dir / "pcp_node_info"),
            proc_count=str(pcp_dir / "pcp_proc_count"),
            proc_info=str(pcp_dir / "pcp_proc_info"),
            watchdog_info=str(pcp_dir / "pcp_watchdog_info"),
        )


class PcpProfile(BaseModel):
    hostname: str = "localhost"
    port: int = 9898
    username: str | None = None
    password: str | None = None
    pass_file: Path | None = None
    timeout: int = 10

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if not (1 <= v <= 65535):
            msg = f"Invalid port: {v}. Must be 1-65535"
            raise ValueError(msg)
        return v


class AppConfig(BaseModel):
    default_profile: str | None = None
    pcp_dir: Path = DEFAULT_PCP_DIR
    pgpool_bin: str = DEFAULT_PGPOOL_BIN
    profiles: dict[str, PcpProfile] = {}


class ResolvedConfig(BaseModel):
    hostname: str = "localhost"
    port: int = 9898
    username: str | None = None
    password: str | None = None
    pass_file: Path | None = None
    timeout: int = 10
    pcp_dir: Path = DEFAULT_PCP_DIR
    pgpool_bin: str = DEFAULT_PGPOOL_BIN
    active_profile: str | None = None
    sources: dict[str, str] = {}

    def client_options(self) -> ClientOptions:
        return ClientOptions(
            hostname=self.hostname,
            port=self.port,
            username=self.username or "",
            password=self.password,
            pass_file=self.pass_file,
            timeout=self.timeout,
        )

    def commands(self) -> PcpCommands:
        return PcpCommands.in_dir(self.pcp_dir, pgpool=self.pgpool_bin)


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load configuration from TOML file.

    Returns default AppConfig if file doesn't exist.
    Raises ConfigError on malformed TOML or invalid config.
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    if not config_path.exists():
        return AppConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Malformed TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return AppConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid configuration in {config_path}: {e}"
        raise ConfigError(msg) from e


def resolve_config(
    config: AppConfig,
    profile_name: str | None = None,
    **cli_overrides: Any,
) -> ResolvedConfig:
    """Resolve configuration using precedence chain.

    CLI > env > profile > config defaults > built-in defaults.
    """
    sources: dict[str, str] = {}
    resolved: dict[str, Any] = {}

    # Layer 1: Built-in defaults
    resolved.update(_PROFILE_DEFAULTS)
    resolved["pcp_dir"] = DEFAULT_PCP_DIR
    resolved["pgpool_bin"] = DEFAULT_PGPOOL_BIN
    for key in resolved:
        sources[key] = "default"

    # Layer 2: Config file global defaults
    if config.pcp_dir != DEFAULT_PCP_DIR:
        resolved["pcp_dir"] = config.pcp_dir
        sources["pcp_dir"] = "config"
    if config.pgpool_bin != DEFAULT_PGPOOL_BIN:
        resolved["pgpool_bin"] = config.pgpool_bin
        sources["pgpool_bin"] = "config"

    # Layer 3: Named profile
    effective_profile = profile_name
    if not effective_profile:
        effective_profile = os.environ.get("PCP_PROFILE")
    if not effective_profile:
        effective_profile = config.default_profile

    if effective_profile:
        if effective_profile not in config.profiles:
            available = (
                ", ".join(sorted(config.profiles.keys())) if config.profiles else "none"
            )
            msg = f"Unknown profile: '{effective_profile}'. Available profiles: {available}"
            raise ConfigError(msg)
        profile = config.profiles[effective_profile]
        for key in profile.model_fields_set:
            if key in resolved:
                resolved[key] = getattr(profile, key)
                sources[key] = f"profile: {effective_profile}"

    # Layer 4: Environment variables
    for env_var, field_name in _PCP_ENV_VARS.items():
        value = os.environ.get(env_var)
        if value is None:
            continue
        if field_name in _INT_FIELDS:
            try:
                resolved[field_name] = int(value)
            except ValueError:
                msg = f"Invalid {env_var} value: '{value}'. Must be an integer"
                raise ConfigError(msg) from None
        elif field_name == "pass_file":
            resolved[field_name] = Path(value)
        else:
            resolved[field_name] = value
        sources[field_name] = f"env: {env_var}"

    # Layer 5: CLI flags (highest priority)
    cli_to_field = {
        "host": "hostname",
        "port": "port",
        "user": "username",
        "password": "password",  # pragma: allowlist secret
        "pass_file": "pass_file",
        "timeout": "timeout",
    }
    for cli_name, field_name in cli_to_field.items():
        value = cli_overrides.get(cli_name)
        if value is not None:
            resolved[field_name] = value
            sources[field_name] = f"cli: --{cli_name.replace('_', '-')}"

    resolved["active_profile"] = effective_profile
    resolved["sources"] = sources
    return ResolvedConfig(**resolved)
