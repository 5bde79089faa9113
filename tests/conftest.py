"""Shared test fixtures for PCP Tool."""

from pathlib import Path
from tempfile import TemporaryDirectory

import pytest
from typer.testing import CliRunner

from pcp_tool.core.config import ClientOptions
from tests.fakes import PGPOOL_34, FakeRunner


@pytest.fixture
def runner():
    """Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def temp_dir():
    """Temporary directory for test files."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fake_runner():
    """FakeRunner reporting pgpool 4.2.3 (pcppass file supported)."""
    return FakeRunner()


@pytest.fixture
def legacy_runner():
    """FakeRunner reporting pgpool 3.4.0 (positional password)."""
    return FakeRunner(version_output=PGPOOL_34)


@pytest.fixture
def options():
    return ClientOptions(
        hostname="pgpool",
        port=9898,
        username="admin",
        password="secret",  # pragma: allowlist secret
        timeout=5,
    )


@pytest.fixture
def pass_file(temp_dir):
    """A valid caller-owned pcppass file (mode 0600)."""
    path = temp_dir / "pcppass"
    path.write_text("pgpool:9898:admin:secret")
    path.chmod(0o600)
    return path
