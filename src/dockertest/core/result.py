"""Command invocation and result types."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict


class CommandInvocation(BaseModel):
    """A program and its arguments, run in one working directory."""

    model_config = ConfigDict(frozen=True)

    argv: tuple[str, ...]
    cwd: Path
    merge_stderr: bool = True

    def __str__(self) -> str:
        return " ".join(self.argv)


class CommandResult(BaseModel):
    """Exit code and combined output of one finished invocation."""

    model_config = ConfigDict(frozen=True)

    exit_code: int
    output: str
    invocation: CommandInvocation | None = None

    @property
    def ok(self) -> bool:
        return self.exit_code == 0
