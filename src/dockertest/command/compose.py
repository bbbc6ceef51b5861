"""Compose subcommands - bring services up or down."""

from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import CliPositionalArg

from dockertest.compose import ComposeRunner


class UpCommand(BaseModel):
    """Start the services in a compose file and wait until healthy.

    Runs `docker compose -f <file> up --wait` in the file's
    directory.
    """

    compose_file: CliPositionalArg[Path] = Field(
        description="Path to the compose file"
    )

    def run(self, settings) -> int:
        ComposeRunner(settings=settings).up(self.compose_file)
        return 0


class DownCommand(BaseModel):
    """Stop the services in a compose file and remove volumes.

    Runs `docker compose -f <file> down -v` in the file's
    directory.
    """

    compose_file: CliPositionalArg[Path] = Field(
        description="Path to the compose file"
    )

    def run(self, settings) -> int:
        ComposeRunner(settings=settings).down(self.compose_file)
        return 0
