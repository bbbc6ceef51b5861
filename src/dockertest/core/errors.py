"""Exceptions raised by the compose and kubectl runners."""

from __future__ import annotations

from pathlib import Path

from dockertest.core.result import CommandResult


class DockertestError(Exception):
    """Base class for all dockertest errors."""


class PreconditionError(DockertestError):
    """A required path check failed; no process was started."""

    def __init__(self, reason: str, path: Path):
        self.reason = reason
        self.path = path
        super().__init__(f"{reason}: {path}")


class ExecutionError(DockertestError):
    """A command exited with a non-zero code.

    The message carries the exit code and the full combined
    output so the tool's own diagnostics are never lost.
    """

    def __init__(self, tool: str, result: CommandResult):
        self.tool = tool
        self.result = result
        super().__init__(
            f"Failed to execute {tool} command: "
            f"Exit code {result.exit_code}, output: {result.output}"
        )

    @property
    def exit_code(self) -> int:
        return self.result.exit_code

    @property
    def output(self) -> str:
        return self.result.output


class ClusterUnavailableError(DockertestError):
    """kubectl is missing or the cluster cannot be reached."""


__all__ = [
    "DockertestError",
    "PreconditionError",
    "ExecutionError",
    "ClusterUnavailableError",
]
