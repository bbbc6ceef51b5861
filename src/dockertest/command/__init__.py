"""CLI subcommands for dockertest."""

from dockertest.command.compose import DownCommand, UpCommand
from dockertest.command.kube import (
    ApplyCommand,
    CheckCommand,
    DeleteCommand,
    StatusCommand,
    WaitCommand,
)

__all__ = [
    "ApplyCommand",
    "CheckCommand",
    "DeleteCommand",
    "DownCommand",
    "StatusCommand",
    "UpCommand",
    "WaitCommand",
]
