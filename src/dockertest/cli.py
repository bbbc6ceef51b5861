#!/usr/bin/env python3
"""dockertest CLI - run compose and kubectl lifecycle commands."""

import sys

from pydantic_settings import (
    CliApp,
    CliSubCommand,
    SettingsConfigDict,
    get_subcommand,
)

from dockertest.command import (
    ApplyCommand,
    CheckCommand,
    DeleteCommand,
    DownCommand,
    StatusCommand,
    UpCommand,
    WaitCommand,
)
from dockertest.core.config import Settings
from dockertest.core.errors import DockertestError
from dockertest.core.log import install_logger, logger


class CliState(Settings):
    """Drive docker compose and kubectl the way integration tests do.

    Configuration sources (in priority order):
    1. Command-line arguments (--kubectl.namespace value)
    2. Environment variables (DOCKERTEST_KUBECTL__NAMESPACE=value)
    3. .env file
    4. dockertest.yaml in the current directory
    5. dockertest.yaml in the user config directory
    """

    up: CliSubCommand[UpCommand]
    down: CliSubCommand[DownCommand]
    apply: CliSubCommand[ApplyCommand]
    delete: CliSubCommand[DeleteCommand]
    wait: CliSubCommand[WaitCommand]
    status: CliSubCommand[StatusCommand]
    check: CliSubCommand[CheckCommand]

    model_config = SettingsConfigDict(
        cli_implicit_flags=True,
        cli_use_class_docs_for_groups=True,
    )

    def cli_cmd(self):
        """Dispatch to the active subcommand, or show help."""
        subcommand = get_subcommand(self, is_required=False)

        if subcommand is None:
            CliApp.run(CliState, cli_args=['--help'])
            sys.exit(1)

        install_logger(self.logger, self.log_root, "cli")
        with logger:
            try:
                exit_code = subcommand.run(self)
            except DockertestError as e:
                logger.error("Command failed", error=str(e))
                exit_code = 1
            raise SystemExit(exit_code)


def main():
    """Main entry point for CLI."""
    CliApp.run(CliState)


if __name__ == "__main__":
    main()
