"""Blocking command execution on top of invoke."""

from __future__ import annotations

import shlex
from pathlib import Path
from typing import Protocol, runtime_checkable

from invoke import Context

from dockertest.core.errors import ExecutionError
from dockertest.core.log import logger
from dockertest.core.result import CommandInvocation, CommandResult


@runtime_checkable
class ProcessExecutor(Protocol):
    """Anything that can run an invocation to completion."""

    def execute(self, invocation: CommandInvocation) -> CommandResult:
        ...


class Runner(Context):
    """Default ProcessExecutor, a thin layer over invoke.Context.

    invoke reads the child's output on background threads while
    it waits for exit, so chatty commands cannot block on a full
    pipe. Stderr of both the directory change and the command is
    merged into stdout by the shell (``( ... ) 2>&1``), which keeps
    both streams in their original order.
    """

    def execute(self, invocation: CommandInvocation) -> CommandResult:
        """Run an invocation and wait for it to finish.

        Args:
            invocation: Program, arguments and working directory

        Returns:
            CommandResult with the exit code and captured output.
            A non-zero exit is returned, not raised.
        """
        # invoke.Context.cd only escapes spaces, so quote the directory here
        command = (
            f"cd {shlex.quote(str(invocation.cwd))} && "
            f"{shlex.join(invocation.argv)}"
        )
        if invocation.merge_stderr:
            command = f"( {command} ) 2>&1"

        logger.trace(
            "Starting process", command=command, cwd=str(invocation.cwd)
        )
        result = self.run(command, hide=True, warn=True, in_stream=False)

        output = result.stdout
        if not invocation.merge_stderr:
            output += result.stderr

        logger.trace("Process exited", exit_code=result.exited, output=output)
        return CommandResult(
            exit_code=result.exited,
            output=output,
            invocation=invocation,
        )


def run_logged(
    executor: ProcessExecutor,
    tool: str,
    argv: list[str],
    cwd: Path,
) -> CommandResult:
    """Execute argv in cwd, logging the command line and its outcome.

    A non-zero exit is returned, not raised.
    """
    invocation = CommandInvocation(argv=tuple(argv), cwd=cwd)
    logger.trace("Executing command", tool=tool, command=str(invocation))

    result = executor.execute(invocation)
    logger.trace("Command finished", tool=tool, exit_code=result.exit_code)
    return result


def run_checked(
    executor: ProcessExecutor,
    tool: str,
    argv: list[str],
    cwd: Path,
) -> CommandResult:
    """Execute argv in cwd and raise ExecutionError on non-zero exit.

    Args:
        executor: Executor that spawns the process
        tool: Label used in log and error messages
        argv: Program followed by its arguments
        cwd: Working directory

    Returns:
        CommandResult of the successful invocation

    Raises:
        ExecutionError: If the command exits non-zero
    """
    result = run_logged(executor, tool, argv, cwd)
    if not result.ok:
        logger.error(
            "Command failed",
            tool=tool,
            exit_code=result.exit_code,
            output=result.output,
        )
        raise ExecutionError(tool, result)
    return result
