"""Credential delivery for PCP commands.

pgpool-II 3.5 and above read the password from a pcppass file named by
PCPPASSFILE. Older releases take it as a positional argument:

    pcp_command [options] timeout hostname port username password [args]

The strategy is chosen once per client from the detected pgpool version.
"""

from __future__ import annotations

import os
import stat
import tempfile
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from pydantic import BaseModel

from pcp_tool.core.exceptions import ConfigError
from pcp_tool.core.logging import get_logger

if TYPE_CHECKING:
    from pcp_tool.core.config import ClientOptions

PASS_FILE_ENV = "PCPPASSFILE"
PASS_FILE_MODE = 0o600
TEMP_FILE_PREFIX = "pgpool2"

_MASK = "***"


class Invocation(BaseModel):
    """Final argv tail and extra environment for one PCP command."""

    args: list[str]
    env: dict[str, str] = {}


class CredentialStrategy(Protocol):
    name: str

    def build(self, args: Sequence[str]) -> Invocation: ...

    def node_id_args(self, node_id: int) -> list[str]: ...


class PassFileStrategy:
    """Long options plus --no-password; the secret travels via PCPPASSFILE."""

    name = "pass_file"

    def __init__(self, options: ClientOptions, pass_file: Path) -> None:
        self.options = options
        self.pass_file = pass_file

    def build(self, args: Sequence[str]) -> Invocation:
        common = [
            f"--username={self.options.username}",
            f"--host={self.options.hostname}",
            f"--port={self.options.port}",
            # never prompt for a password
            "--no-password",
        ]
        return Invocation(
            args=[*common, *args],
            env={PASS_FILE_ENV: str(self.pass_file)},
        )

    def node_id_args(self, node_id: int) -> list[str]:
        return [f"--node-id={node_id}"]


class PositionalStrategy:
    """Legacy argv: flags, then the credential tuple, then positional args.

    The PCP tools parse this shape strictly by position, so caller flags
    have to be hoisted in front of the credential tuple.
    """

    name = "positional"

    def __init__(self, options: ClientOptions) -> None:
        self.options = options

    def build(self, args: Sequence[str]) -> Invocation:
        flags = [arg for arg in args if arg.startswith("-")]
        positional = [arg for arg in args if not arg.startswith("-")]
        credentials = [
            str(self.options.timeout),
            self.options.hostname,
            str(self.options.port),
            self.options.username,
            self.options.password or "",
        ]
        return Invocation(args=[*flags, *credentials, *positional])

    def node_id_args(self, node_id: int) -> list[str]:
        return [str(node_id)]


class PassFile(BaseModel):
    """A pcppass file path and whether this process created it."""

    path: Path
    owned: bool = False


def validate_pass_file(path: Path) -> None:
    """Require an existing regular file with mode 0600.

    Raises ConfigError otherwise.
    """
    try:
        info = path.stat()
    except FileNotFoundError:
        raise ConfigError(f"pcppass {path} does not exist") from None
    except OSError as e:
        raise ConfigError(f"Cannot retrieve file mode of {path}: {e}") from e

    if not stat.S_ISREG(info.st_mode):
        raise ConfigError(f"pcppass {path} must be a file")

    mode = stat.S_IMODE(info.st_mode)
    if mode != PASS_FILE_MODE:
        msg = f"Unexpected file mode for '{path}': {stat.filemode(info.st_mode)} (expected -rw-------)"
        raise ConfigError(msg)


def create_temp_pass_file(options: ClientOptions) -> PassFile:
    """Write hostname:port:username:password to a new owner-only temp file."""
    log = get_logger(__name__)
    fd, name = tempfile.mkstemp(prefix=TEMP_FILE_PREFIX)
    try:
        with os.fdopen(fd, "w") as f:
            os.fchmod(f.fileno(), PASS_FILE_MODE)
            f.write(
                f"{options.hostname}:{options.port}:"
                f"{options.username}:{options.password or ''}"
            )
    except OSError as e:
        Path(name).unlink(missing_ok=True)
        raise ConfigError(f"Cannot write temporary pcppass file: {e}") from e

    log.debug("created temporary pcppass file", path=name)
    return PassFile(path=Path(name), owned=True)


def remove_pass_file(pass_file: PassFile) -> bool:
    """Delete pass_file if this process created it. Returns True if removed."""
    if not pass_file.owned:
        return False
    pass_file.path.unlink(missing_ok=True)
    get_logger(__name__).debug("removed temporary pcppass file", path=str(pass_file.path))
    return True


def mask_secret(args: Sequence[str], secret: str | None) -> list[str]:
    """Copy of args with any argument equal to secret replaced, for logging."""
    if not secret:
        return list(args)
    return [_MASK if arg == secret else arg for arg in args]
