"""kubectl lifecycle commands for integration tests."""

from __future__ import annotations

from pathlib import Path

from dockertest.core.config import Settings
from dockertest.core.errors import ClusterUnavailableError, DockertestError
from dockertest.core.log import logger
from dockertest.core.result import CommandResult
from dockertest.core.runner import (
    ProcessExecutor,
    Runner,
    run_checked,
    run_logged,
)
from dockertest.core.validation import require_directory, require_manifests

STATUS_FAILURE_PREFIX = "Failed to get resource status: "


class KubectlRunner:
    """Applies, deletes and waits for Kubernetes resources.

    Directory operations require an existing directory with at
    least one manifest file. Namespace and timeout default to the
    values in Settings.kubectl.
    """

    def __init__(
        self,
        executor: ProcessExecutor | None = None,
        settings: Settings | None = None,
    ):
        self.executor = executor or Runner()
        self.settings = settings or Settings()

    @property
    def config(self):
        return self.settings.kubectl

    def apply_directory(self, path: Path) -> CommandResult:
        """kubectl apply every manifest in a directory."""
        path = self._manifest_directory(path)
        logger.trace("Applying Kubernetes resources", path=str(path))
        result = self.run(path.parent, "apply", "-f", str(path))
        logger.trace("Kubernetes resources applied")
        return result

    def apply_directory_and_wait(
        self, path: Path, timeout: str | None = None
    ) -> CommandResult:
        """kubectl apply a directory with --wait."""
        timeout = timeout or self.config.timeout
        path = self._manifest_directory(path)
        logger.trace(
            "Applying Kubernetes resources and waiting",
            path=str(path),
            timeout=timeout,
        )
        result = self.run(
            path.parent, "apply", "-f", str(path),
            "--wait", f"--timeout={timeout}",
        )
        logger.trace("Kubernetes resources applied and ready")
        return result

    def delete_directory(self, path: Path) -> CommandResult:
        """kubectl delete every manifest in a directory.

        Resources that are already gone are not an error.
        """
        path = self._manifest_directory(path)
        logger.trace("Deleting Kubernetes resources", path=str(path))
        result = self.run(
            path.parent, "delete", "-f", str(path), "--ignore-not-found=true"
        )
        logger.trace("Kubernetes resources deleted")
        return result

    def apply_file(self, path: Path) -> CommandResult:
        """kubectl apply a single manifest file.

        The file itself is not checked; kubectl reports a missing
        file through its exit code.
        """
        path = Path(path).absolute()
        logger.trace("Applying Kubernetes resource file", path=str(path))
        return self.run(path.parent, "apply", "-f", str(path))

    def delete_file(self, path: Path) -> CommandResult:
        """kubectl delete the resources in a single manifest file."""
        path = Path(path).absolute()
        logger.trace("Deleting Kubernetes resource file", path=str(path))
        return self.run(
            path.parent, "delete", "-f", str(path), "--ignore-not-found=true"
        )

    def wait_for_deployments(
        self, namespace: str | None = None, timeout: str | None = None
    ) -> CommandResult:
        """Block until every deployment in namespace is available."""
        return self._wait("available", "deployment", namespace, timeout)

    def wait_for_pods(
        self, namespace: str | None = None, timeout: str | None = None
    ) -> CommandResult:
        """Block until every pod in namespace is ready."""
        return self._wait("ready", "pod", namespace, timeout)

    def check_availability(self) -> None:
        """Verify kubectl is installed and the cluster answers.

        Raises:
            ClusterUnavailableError: wrapping the first failure
        """
        logger.trace("Checking kubectl availability and cluster connection")
        try:
            self.run(Path("."), "version", "--client")
            self.run(Path("."), "cluster-info")
        except DockertestError as e:
            logger.error(
                "kubectl is not available or cluster is not accessible",
                error=str(e),
            )
            raise ClusterUnavailableError(
                "kubectl is not available or cluster is not accessible"
            ) from e
        logger.trace("kubectl is available and cluster is accessible")

    def get_status(self, namespace: str | None = None) -> str:
        """Return ``kubectl get all`` output for a namespace.

        Meant for diagnostics, so a failing kubectl does not raise:
        the output comes back prefixed with STATUS_FAILURE_PREFIX.
        """
        namespace = namespace or self.config.namespace
        logger.trace("Getting resource status", namespace=namespace)
        result = run_logged(
            self.executor,
            "kubectl",
            [self.config.command, "get", "all", "-n", namespace],
            Path(".").absolute(),
        )
        if not result.ok:
            logger.warn("Could not get resource status", output=result.output)
            return STATUS_FAILURE_PREFIX + result.output
        logger.trace("Resource status retrieved", namespace=namespace)
        return result.output

    def run(self, working_directory: Path, *args: str) -> CommandResult:
        """Run ``kubectl <args...>`` in working_directory.

        Raises:
            PreconditionError: If working_directory does not exist
            ExecutionError: If kubectl exits non-zero
        """
        working_directory = require_directory(working_directory)
        return run_checked(
            self.executor,
            "kubectl",
            [self.config.command, *args],
            working_directory,
        )

    def _wait(
        self,
        condition: str,
        resource: str,
        namespace: str | None,
        timeout: str | None,
    ) -> CommandResult:
        namespace = namespace or self.config.namespace
        timeout = timeout or self.config.timeout
        logger.trace(
            "Waiting for resources",
            resource=resource,
            namespace=namespace,
            timeout=timeout,
        )
        result = self.run(
            Path("."),
            "wait", f"--for=condition={condition}", f"--timeout={timeout}",
            resource, "--all", "-n", namespace,
        )
        logger.trace("Resources ready", resource=resource, namespace=namespace)
        return result

    def _manifest_directory(self, path: Path) -> Path:
        require_manifests(path, self.config.manifest_extensions)
        return Path(path).absolute()
