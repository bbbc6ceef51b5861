"""kubectl subcommands - apply, delete, wait, status, check."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import CliPositionalArg

from dockertest.kubernetes import KubectlRunner


class ApplyCommand(BaseModel):
    """Apply a manifest file or a directory of manifests."""

    path: CliPositionalArg[Path] = Field(
        description="Manifest file or directory"
    )
    wait: bool = Field(
        default=False,
        description="Wait for applied resources (directories only)",
    )
    timeout: str | None = Field(
        default=None,
        description="kubectl --timeout value, e.g. 60s",
    )

    def run(self, settings) -> int:
        runner = KubectlRunner(settings=settings)
        if not self.path.is_dir():
            runner.apply_file(self.path)
        elif self.wait:
            runner.apply_directory_and_wait(self.path, self.timeout)
        else:
            runner.apply_directory(self.path)
        return 0


class DeleteCommand(BaseModel):
    """Delete the resources in a manifest file or directory."""

    path: CliPositionalArg[Path] = Field(
        description="Manifest file or directory"
    )

    def run(self, settings) -> int:
        runner = KubectlRunner(settings=settings)
        if self.path.is_dir():
            runner.delete_directory(self.path)
        else:
            runner.delete_file(self.path)
        return 0


class WaitCommand(BaseModel):
    """Wait until all deployments are available or pods are ready."""

    resource: CliPositionalArg[Literal["deployments", "pods"]] = Field(
        description="What to wait for"
    )
    namespace: str | None = Field(default=None, description="Namespace")
    timeout: str | None = Field(
        default=None,
        description="kubectl --timeout value, e.g. 60s",
    )

    def run(self, settings) -> int:
        runner = KubectlRunner(settings=settings)
        if self.resource == "deployments":
            runner.wait_for_deployments(self.namespace, self.timeout)
        else:
            runner.wait_for_pods(self.namespace, self.timeout)
        return 0


class StatusCommand(BaseModel):
    """Print `kubectl get all` for a namespace."""

    namespace: str | None = Field(default=None, description="Namespace")

    def run(self, settings) -> int:
        print(KubectlRunner(settings=settings).get_status(self.namespace))
        return 0


class CheckCommand(BaseModel):
    """Check that kubectl is installed and the cluster is reachable."""

    def run(self, settings) -> int:
        KubectlRunner(settings=settings).check_availability()
        print("kubectl is available and cluster is accessible")
        return 0
