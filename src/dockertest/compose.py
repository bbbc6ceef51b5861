"""docker compose lifecycle commands for integration tests."""

from __future__ import annotations

from pathlib import Path

from dockertest.core.config import Settings
from dockertest.core.log import logger
from dockertest.core.result import CommandResult
from dockertest.core.runner import ProcessExecutor, Runner, run_checked
from dockertest.core.validation import require_file


class ComposeRunner:
    """Starts and stops services described by a compose file.

    Every operation checks that the compose file exists before
    starting docker, runs in the file's directory, and raises
    ExecutionError when docker exits non-zero.
    """

    def __init__(
        self,
        executor: ProcessExecutor | None = None,
        settings: Settings | None = None,
    ):
        self.executor = executor or Runner()
        self.settings = settings or Settings()

    def up(self, compose_file: Path) -> CommandResult:
        """Start services and block until they are healthy.

        Equivalent to ``docker compose -f <file> up --wait``.
        """
        logger.trace("Starting compose services", file=str(compose_file))
        result = self.run(compose_file, "up", "--wait")
        logger.trace("Compose services started")
        return result

    def down(self, compose_file: Path) -> CommandResult:
        """Stop services and remove their volumes.

        Equivalent to ``docker compose -f <file> down -v``.
        """
        logger.trace("Stopping compose services", file=str(compose_file))
        result = self.run(compose_file, "down", "-v")
        logger.trace("Compose services stopped")
        return result

    def run(self, compose_file: Path, *args: str) -> CommandResult:
        """Run ``docker compose -f <file> <args...>``.

        Args:
            compose_file: Compose file; must exist
            *args: Arguments after the file option

        Returns:
            CommandResult of the successful command

        Raises:
            PreconditionError: If the compose file does not exist
            ExecutionError: If docker exits non-zero
        """
        compose_file = require_file(compose_file)
        argv = [*self.settings.docker.command, "-f", str(compose_file), *args]
        return run_checked(
            self.executor, "docker compose", argv, compose_file.parent
        )
