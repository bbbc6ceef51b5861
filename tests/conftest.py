"""Pytest configuration and fixtures for dockertest tests."""

import tempfile
from pathlib import Path

import pytest

from dockertest.core.config import Settings
from dockertest.core.log import ConsoleSink, setup_logger
from dockertest.core.result import CommandInvocation, CommandResult


@pytest.fixture(autouse=True, scope="session")
def configure_logging():
    """Console-only logging at debug level for the test session."""
    test_log_root = Path(tempfile.gettempdir()) / "dockertest-tests"
    setup_logger(
        log_root=test_log_root,
        session="test",
        console=ConsoleSink(level="debug"),
    )


class FakeExecutor:
    """ProcessExecutor double that records invocations.

    Queued responses are returned in order; once the queue is
    empty every call gets the default exit code and output.
    """

    def __init__(self, exit_code: int = 0, output: str = ""):
        self.exit_code = exit_code
        self.output = output
        self.calls: list[CommandInvocation] = []
        self._queue: list[tuple[int, str]] = []

    def respond(self, exit_code: int, output: str = "") -> "FakeExecutor":
        self._queue.append((exit_code, output))
        return self

    def execute(self, invocation: CommandInvocation) -> CommandResult:
        self.calls.append(invocation)
        if self._queue:
            exit_code, output = self._queue.pop(0)
        else:
            exit_code, output = self.exit_code, self.output
        return CommandResult(
            exit_code=exit_code, output=output, invocation=invocation
        )

    @property
    def argvs(self) -> list[list[str]]:
        return [list(call.argv) for call in self.calls]


@pytest.fixture
def executor():
    return FakeExecutor()


@pytest.fixture
def settings(monkeypatch, tmp_path):
    """Settings built from defaults only.

    Runs from an empty directory with DOCKERTEST_ variables
    removed so local config files cannot leak in.
    """
    import os

    for name in list(os.environ):
        if name.startswith("DOCKERTEST_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(
        "dockertest.core.config.config_files",
        lambda: [tmp_path / "dockertest.yaml"],
    )
    return Settings()


@pytest.fixture
def manifest_dir(tmp_path):
    """Directory with a single deployment manifest."""
    directory = tmp_path / "k8s"
    directory.mkdir()
    (directory / "deployment.yaml").write_text("kind: Deployment\n")
    return directory


@pytest.fixture
def compose_file(tmp_path):
    path = tmp_path / "compose.yml"
    path.write_text("services: {}\n")
    return path
