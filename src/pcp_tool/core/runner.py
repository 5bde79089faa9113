"""External process execution for PCP commands.

PcpClient talks to pgpool only through a CommandRunner, so tests can swap
in a scripted runner and never launch real binaries.
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Mapping, Sequence
from typing import Protocol, runtime_checkable

from pydantic import BaseModel

from pcp_tool.core.exceptions import CommandError


class CommandOutput(BaseModel):
    """Captured result of one external command."""

    stdout: str = ""
    stderr: str = ""
    returncode: int = 0

    @property
    def ok(self) -> bool:
        return self.returncode == 0


@runtime_checkable
class CommandRunner(Protocol):
    def run(
        self,
        command: str,
        args: Sequence[str],
        env: Mapping[str, str] | None = None,
    ) -> CommandOutput:
        """Run command with args and extra env, capturing stdout and stderr.

        Raises CommandError when the command cannot be launched at all or
        its output cannot be decoded.
        Non-zero exit status is reported through CommandOutput.returncode.
        """
        ...


class SubprocessRunner:
    """CommandRunner backed by subprocess.run.

    Extra environment variables are layered over the current process
    environment.
    """

    def run(
        self,
        command: str,
        args: Sequence[str],
        env: Mapping[str, str] | None = None,
    ) -> CommandOutput:
        full_env = None
        if env:
            full_env = {**os.environ, **env}

        try:
            completed = subprocess.run(
                [command, *args],
                env=full_env,
                capture_output=True,
                encoding="utf-8",
                check=False,
            )
        except OSError as e:
            raise CommandError(f"Failed to run {command}: {e}") from e
        except UnicodeDecodeError as e:
            msg = f"{command} produced output that is not valid text: {e}"
            raise CommandError(msg) from e

        return CommandOutput(
            stdout=completed.stdout,
            stderr=completed.stderr,
            returncode=completed.returncode,
        )
