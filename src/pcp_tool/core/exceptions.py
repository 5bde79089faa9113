"""Exception hierarchy for PCP Tool.

All exceptions carry an exit_code for CLI return value mapping.
Exit codes are defined in exit_codes.py.
"""

from pcp_tool.core.exit_codes import ExitCode


class PcpToolError(Exception):
    """Base exception for all PCP Tool errors."""

    exit_code: int = ExitCode.GENERAL_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigError(PcpToolError):
    """Missing host or user, bad port, unusable pcppass file."""

    exit_code: int = ExitCode.CONFIG_ERROR


class VersionError(PcpToolError):
    """pgpool version could not be determined."""

    exit_code: int = ExitCode.VERSION_ERROR


class CommandError(PcpToolError):
    """PCP command failed to launch or exited with non-zero status."""

    exit_code: int = ExitCode.COMMAND_ERROR

    def __init__(self, message: str, stderr: str = "") -> None:
        self.stderr = stderr
        super().__init__(message)


class DecodeError(PcpToolError):
    """PCP command output could not be read."""

    exit_code: int = ExitCode.DECODE_ERROR
