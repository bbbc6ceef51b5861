"""Compose lifecycle against a real docker daemon."""

import shutil
from pathlib import Path

import pytest

from dockertest.compose import ComposeRunner
from dockertest.core.errors import ExecutionError

COMPOSE_FILE = Path(__file__).parent.parent / "fixtures" / "compose.yml"

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(shutil.which("docker") is None, reason="docker not installed"),
]


@pytest.fixture
def runner():
    runner = ComposeRunner()
    try:
        runner.run(COMPOSE_FILE, "config", "--quiet")
    except ExecutionError as e:
        pytest.skip(f"docker compose not usable: {e}")
    return runner


def test_up_then_down(runner):
    runner.up(COMPOSE_FILE)
    try:
        ps = runner.run(COMPOSE_FILE, "ps")
        assert "sleeper" in ps.output
    finally:
        runner.down(COMPOSE_FILE)


def test_unknown_subcommand_fails_with_output(runner):
    with pytest.raises(ExecutionError) as excinfo:
        runner.run(COMPOSE_FILE, "no-such-subcommand")

    assert excinfo.value.exit_code != 0
    assert excinfo.value.output
    assert f"Exit code {excinfo.value.exit_code}" in str(excinfo.value)
