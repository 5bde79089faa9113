"""Tests for exception hierarchy and exit codes."""

import pytest

from pcp_tool.core.exceptions import (
    CommandError,
    ConfigError,
    DecodeError,
    PcpToolError,
    VersionError,
)
from pcp_tool.core.exit_codes import ExitCode


@pytest.mark.unit
class TestExitCodes:
    def test_exit_code_values(self):
        assert ExitCode.SUCCESS == 0
        assert ExitCode.GENERAL_ERROR == 1
        assert ExitCode.USAGE_ERROR == 2
        assert ExitCode.DECODE_ERROR == 3
        assert ExitCode.COMMAND_ERROR == 4
        assert ExitCode.CONFIG_ERROR == 5
        assert ExitCode.VERSION_ERROR == 6


@pytest.mark.unit
class TestPcpToolError:
    def test_base_exception(self):
        err = PcpToolError("test error")
        assert str(err) == "test error"
        assert err.message == "test error"
        assert err.exit_code == ExitCode.GENERAL_ERROR


@pytest.mark.unit
class TestSubclasses:
    @pytest.mark.parametrize(
        ("exc_class", "code"),
        [
            (ConfigError, ExitCode.CONFIG_ERROR),
            (VersionError, ExitCode.VERSION_ERROR),
            (CommandError, ExitCode.COMMAND_ERROR),
            (DecodeError, ExitCode.DECODE_ERROR),
        ],
    )
    def test_exit_code_and_base(self, exc_class, code):
        err = exc_class("boom")
        assert err.exit_code == code
        assert isinstance(err, PcpToolError)
        assert err.message == "boom"

    def test_command_error_keeps_stderr(self):
        err = CommandError("pcp_node_count exited with status 1", stderr="FATAL: auth failed")
        assert err.stderr == "FATAL: auth failed"

    def test_catch_all_by_base(self):
        for exc_class in [ConfigError, VersionError, CommandError, DecodeError]:
            with pytest.raises(PcpToolError):
                raise exc_class("test")
