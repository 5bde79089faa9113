"""Standard exit codes for PCP Tool.

Exit codes follow Unix conventions.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for PCP Tool commands."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    USAGE_ERROR = 2
    DECODE_ERROR = 3
    COMMAND_ERROR = 4
    CONFIG_ERROR = 5
    VERSION_ERROR = 6
