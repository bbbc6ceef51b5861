"""Drive docker compose and kubectl from integration tests."""

from dockertest.compose import ComposeRunner
from dockertest.core.config import Settings
from dockertest.core.errors import (
    ClusterUnavailableError,
    DockertestError,
    ExecutionError,
    PreconditionError,
)
from dockertest.core.result import CommandInvocation, CommandResult
from dockertest.core.runner import ProcessExecutor, Runner
from dockertest.kubernetes import KubectlRunner

__all__ = [
    "ClusterUnavailableError",
    "CommandInvocation",
    "CommandResult",
    "ComposeRunner",
    "DockertestError",
    "ExecutionError",
    "KubectlRunner",
    "PreconditionError",
    "ProcessExecutor",
    "Runner",
    "Settings",
]
