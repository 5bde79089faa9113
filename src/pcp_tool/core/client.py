"""PCP client for PCP Tool.

Runs pgpool's PCP command-line tools, passing credentials the way the
installed pgpool version expects, and decodes their output into models.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

import sentry_sdk

from pcp_tool.core.config import PcpCommands
from pcp_tool.core.credentials import (
    PassFile,
    PassFileStrategy,
    PositionalStrategy,
    create_temp_pass_file,
    mask_secret,
    remove_pass_file,
    validate_pass_file,
)
from pcp_tool.core.decoders import (
    decode_node_count,
    decode_node_info,
    decode_proc_count,
    decode_proc_info,
    decode_watchdog_info,
)
from pcp_tool.core.exceptions import CommandError, ConfigError, VersionError
from pcp_tool.core.logging import get_logger
from pcp_tool.core.models import ProcInfoSummary
from pcp_tool.core.runner import SubprocessRunner
from pcp_tool.core.version import parse_version, supports_pass_file

if TYPE_CHECKING:
    from collections.abc import Iterable

    from packaging.version import Version

    from pcp_tool.core.config import ClientOptions
    from pcp_tool.core.credentials import CredentialStrategy
    from pcp_tool.core.models import NodeInfo, ProcInfo, WatchdogInfo
    from pcp_tool.core.runner import CommandRunner


class PcpClient:
    """Synchronous client for pgpool's PCP tools.

    Construction probes `pgpool --version`, validates the options and picks
    the credential strategy. With pgpool 3.5+ and no caller-supplied pcppass
    file, a temporary one is written; clean() (or leaving the context
    manager) removes it. Caller-supplied files are never removed.

    Not thread-safe; use one client per thread.
    """

    def __init__(
        self,
        options: ClientOptions,
        runner: CommandRunner | None = None,
        commands: PcpCommands | None = None,
    ) -> None:
        self.options = options
        self.runner = runner or SubprocessRunner()
        self.commands = commands or PcpCommands()
        self._log = get_logger(__name__).bind(
            pgpool=f"{options.hostname}:{options.port}"
        )
        self.pass_file: PassFile | None = None

        self.version: Version = self._probe_version()
        self.supports_pass_file = supports_pass_file(self.version)

        if options.pass_file is not None:
            self.pass_file = PassFile(path=options.pass_file, owned=False)
        self._validate()

        self.strategy: CredentialStrategy
        if self.supports_pass_file:
            if self.pass_file is None:
                self.pass_file = create_temp_pass_file(options)
            self.strategy = PassFileStrategy(options, self.pass_file.path)
        else:
            self.strategy = PositionalStrategy(options)

        self._log.debug(
            "pcp client ready",
            pgpool_version=str(self.version),
            strategy=self.strategy.name,
        )

    def __enter__(self) -> PcpClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.clean()

    @property
    def pass_file_owned_by_caller(self) -> bool:
        return self.pass_file is not None and not self.pass_file.owned

    def _probe_version(self) -> Version:
        try:
            output = self.runner.run(self.commands.pgpool, ["--version"])
        except CommandError as e:
            msg = f"Error getting version information: {e.message}"
            raise VersionError(msg) from e
        if not output.ok:
            msg = (
                f"Error getting version information: {self.commands.pgpool} "
                f"exited with status {output.returncode} ({output.stderr.strip()})"
            )
            raise VersionError(msg)

        version = parse_version(output.stdout)
        self._log.debug("detected pgpool version", version=str(version))
        return version

    def _validate(self) -> None:
        if not self.options.hostname:
            raise ConfigError("PCP hostname must be specified")
        if not self.options.username:
            raise ConfigError("PCP username must be specified")
        if self.options.port <= 0:
            raise ConfigError("PCP port must be greater than zero")

        if self.pass_file is not None:
            validate_pass_file(self.pass_file.path)
            if not self.supports_pass_file and not self.options.password:
                msg = (
                    f"pgpool {self.version} does not support pcppass files "
                    "(pgpool-II 3.5 and above); a PCP password must be specified"
                )
                raise ConfigError(msg)
        elif not self.options.password:
            raise ConfigError(
                "PCP password or pcppass file (pgpool-II 3.5 and above) must be specified"
            )

    def clean(self) -> None:
        """Remove the temporary pcppass file if this client created it."""
        if self.pass_file is not None and remove_pass_file(self.pass_file):
            self.pass_file = None

    def _exec(self, command: str, *args: str) -> str:
        """Run a PCP command through the active strategy and return stdout."""
        invocation = self.strategy.build(args)
        self._log.debug(
            "executing pcp command",
            command=command,
            args=mask_secret(invocation.args, self.options.password),
        )
        with sentry_sdk.start_span(op="pcp.command", description=command) as span:
            start_time = time.monotonic()
            output = self.runner.run(command, invocation.args, invocation.env)
            duration_ms = (time.monotonic() - start_time) * 1000
            span.set_data("duration_ms", duration_ms)
            span.set_data("returncode", output.returncode)

            if not output.ok:
                stderr = output.stderr.strip()
                span.set_status("internal_error")
                self._log.error(
                    "pcp command failed",
                    command=command,
                    returncode=output.returncode,
                    stderr=stderr,
                )
                msg = f"{command} exited with status {output.returncode} ({stderr})"
                raise CommandError(msg, stderr=stderr)

            self._log.debug(
                "pcp command complete",
                command=command,
                duration_ms=f"{duration_ms:.1f}",
            )
        return output.stdout

    def node_count(self) -> int:
        return decode_node_count(self._exec(self.commands.node_count))

    def node_info(self, node_id: int) -> NodeInfo:
        args = [*self.strategy.node_id_args(node_id), "-v"]
        return decode_node_info(self._exec(self.commands.node_info, *args))

    def proc_count(self) -> list[str]:
        return decode_proc_count(self._exec(self.commands.proc_count))

    def proc_info(self) -> list[ProcInfo]:
        return decode_proc_info(self._exec(self.commands.proc_info, "--all"))

    def proc_info_summary(
        self, rows: Iterable[ProcInfo] | None = None
    ) -> ProcInfoSummary:
        """Tally connected / idle slots per database.

        Runs pcp_proc_info when rows are not given.
        """
        if rows is None:
            rows = self.proc_info()
        return ProcInfoSummary.from_proc_info(rows)

    def watchdog_info(self) -> WatchdogInfo:
        return decode_watchdog_info(self._exec(self.commands.watchdog_info, "-v"))
