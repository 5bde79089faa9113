"""Tests for credential strategies and pcppass file handling."""

import stat

import pytest

from pcp_tool.core.config import ClientOptions
from pcp_tool.core.credentials import (
    PASS_FILE_ENV,
    PassFile,
    PassFileStrategy,
    PositionalStrategy,
    create_temp_pass_file,
    mask_secret,
    remove_pass_file,
    validate_pass_file,
)
from pcp_tool.core.exceptions import ConfigError


@pytest.mark.unit
class TestPositionalStrategy:
    def test_flags_hoisted_before_credentials(self):
        options = ClientOptions(
            hostname="h", port=10, username="u", password="p", timeout=5  # pragma: allowlist secret
        )
        invocation = PositionalStrategy(options).build(["-v", "42"])
        assert invocation.args == ["-v", "5", "h", "10", "u", "p", "42"]

    def test_no_args(self, options):
        invocation = PositionalStrategy(options).build([])
        assert invocation.args == ["5", "pgpool", "9898", "admin", "secret"]

    def test_only_flags(self, options):
        invocation = PositionalStrategy(options).build(["--all", "-d"])
        assert invocation.args == ["--all", "-d", "5", "pgpool", "9898", "admin", "secret"]

    def test_relative_order_preserved(self, options):
        invocation = PositionalStrategy(options).build(["1", "-v", "2", "-d"])
        assert invocation.args == ["-v", "-d", "5", "pgpool", "9898", "admin", "secret", "1", "2"]

    def test_no_environment(self, options):
        assert PositionalStrategy(options).build(["-v"]).env == {}

    def test_node_id_is_positional(self, options):
        assert PositionalStrategy(options).node_id_args(3) == ["3"]


@pytest.mark.unit
class TestPassFileStrategy:
    def test_long_options_then_command_args(self, options, pass_file):
        invocation = PassFileStrategy(options, pass_file).build(["--node-id=1", "-v"])
        assert invocation.args == [
            "--username=admin",
            "--host=pgpool",
            "--port=9898",
            "--no-password",
            "--node-id=1",
            "-v",
        ]

    def test_secret_not_in_args(self, options, pass_file):
        invocation = PassFileStrategy(options, pass_file).build(["--all"])
        assert "secret" not in " ".join(invocation.args)

    def test_pass_file_in_environment(self, options, pass_file):
        invocation = PassFileStrategy(options, pass_file).build([])
        assert invocation.env == {PASS_FILE_ENV: str(pass_file)}
        assert PASS_FILE_ENV == "PCPPASSFILE"

    def test_node_id_is_long_option(self, options, pass_file):
        assert PassFileStrategy(options, pass_file).node_id_args(3) == ["--node-id=3"]


@pytest.mark.unit
class TestValidatePassFile:
    def test_valid_file(self, pass_file):
        validate_pass_file(pass_file)

    def test_missing_file(self, temp_dir):
        with pytest.raises(ConfigError, match="does not exist"):
            validate_pass_file(temp_dir / "nope")

    def test_directory(self, temp_dir):
        directory = temp_dir / "pcppass.d"
        directory.mkdir()
        with pytest.raises(ConfigError, match="must be a file"):
            validate_pass_file(directory)

    @pytest.mark.parametrize("mode", [0o644, 0o640, 0o400, 0o700])
    def test_wrong_mode(self, pass_file, mode):
        pass_file.chmod(mode)
        with pytest.raises(ConfigError, match="Unexpected file mode"):
            validate_pass_file(pass_file)


@pytest.mark.unit
class TestTempPassFile:
    def test_contents_and_mode(self, options):
        pass_file = create_temp_pass_file(options)
        try:
            assert pass_file.owned is True
            assert pass_file.path.name.startswith("pgpool2")
            assert pass_file.path.read_text() == "pgpool:9898:admin:secret"
            assert stat.S_IMODE(pass_file.path.stat().st_mode) == 0o600
            validate_pass_file(pass_file.path)
        finally:
            pass_file.path.unlink(missing_ok=True)

    def test_remove_owned(self, options):
        pass_file = create_temp_pass_file(options)
        assert remove_pass_file(pass_file) is True
        assert not pass_file.path.exists()

    def test_remove_caller_owned_is_noop(self, pass_file):
        assert remove_pass_file(PassFile(path=pass_file, owned=False)) is False
        assert pass_file.exists()

    def test_remove_twice(self, options):
        pass_file = create_temp_pass_file(options)
        remove_pass_file(pass_file)
        assert remove_pass_file(pass_file) is True


@pytest.mark.unit
class TestMaskSecret:
    def test_masks_password(self):
        assert mask_secret(["5", "h", "u", "p", "42"], "p") == ["5", "h", "u", "***", "42"]

    def test_no_secret(self):
        assert mask_secret(["-v", "1"], None) == ["-v", "1"]
        assert mask_secret(["-v", ""], "") == ["-v", ""]
