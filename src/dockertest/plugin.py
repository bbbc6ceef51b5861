"""pytest fixtures for tests that need compose services or a cluster.

Registered through the ``pytest11`` entry point, so installing the
package makes the fixtures available everywhere.
"""

from pathlib import Path

import pytest

from dockertest.compose import ComposeRunner
from dockertest.core.config import Settings
from dockertest.core.errors import DockertestError
from dockertest.core.log import logger
from dockertest.core.validation import require_file
from dockertest.kubernetes import KubectlRunner


@pytest.fixture(scope="session")
def dockertest_settings():
    """Settings loaded from environment and dockertest.yaml."""
    return Settings()


@pytest.fixture
def compose_runner(dockertest_settings):
    return ComposeRunner(settings=dockertest_settings)


@pytest.fixture
def kubectl_runner(dockertest_settings):
    return KubectlRunner(settings=dockertest_settings)


@pytest.fixture
def compose_services(compose_runner):
    """Factory that brings a compose file up and tears it down later.

    Usage:
        def test_api(compose_services):
            compose_services(Path("compose.yml"))
    """
    started: list[Path] = []

    def _start(compose_file: Path):
        compose_file = require_file(compose_file)
        # Registered before up so a failed --wait still gets torn down
        started.append(compose_file)
        return compose_runner.up(compose_file)

    yield _start

    errors: list[DockertestError] = []
    for compose_file in reversed(started):
        try:
            compose_runner.down(compose_file)
        except DockertestError as e:
            logger.error(
                "Compose teardown failed", file=str(compose_file), error=str(e)
            )
            errors.append(e)
    if errors:
        raise errors[0]
