"""Tests for Settings sources and defaults."""

import pytest
from pydantic import ValidationError

from dockertest.core.config import KubectlConfig, Settings


def test_defaults(settings):
    assert settings.docker.command == ["docker", "compose"]
    assert settings.kubectl.command == "kubectl"
    assert settings.kubectl.namespace == "default"
    assert settings.kubectl.timeout == "300s"
    assert settings.kubectl.manifest_extensions == [".yml", ".yaml", ".json"]


def test_yaml_file_overrides_defaults(settings, tmp_path):
    (tmp_path / "dockertest.yaml").write_text(
        "kubectl:\n"
        "  namespace: staging\n"
        "  timeout: 120s\n"
        "docker:\n"
        "  command: [podman, compose]\n"
    )

    loaded = Settings()

    assert loaded.kubectl.namespace == "staging"
    assert loaded.kubectl.timeout == "120s"
    assert loaded.docker.command == ["podman", "compose"]


def test_environment_overrides_yaml(settings, tmp_path, monkeypatch):
    (tmp_path / "dockertest.yaml").write_text(
        "kubectl:\n  namespace: staging\n"
    )
    monkeypatch.setenv("DOCKERTEST_KUBECTL__NAMESPACE", "from-env")

    assert Settings().kubectl.namespace == "from-env"


def test_init_arguments_win(settings, monkeypatch):
    monkeypatch.setenv("DOCKERTEST_KUBECTL__NAMESPACE", "from-env")

    loaded = Settings(kubectl=KubectlConfig(namespace="explicit"))

    assert loaded.kubectl.namespace == "explicit"


def test_empty_manifest_extensions_rejected():
    with pytest.raises(ValidationError):
        KubectlConfig(manifest_extensions=[])


def test_settings_close_closes_logger(settings, tmp_path):
    """Closing Settings cascades to the file sink."""
    from dockertest.core.log import FileSink

    settings.logger.file = FileSink(
        enabled=True, path=str(tmp_path / "cascade.log")
    )
    settings.logger.file._processor = settings.logger.file.create_processor(
        tmp_path, "test"
    )

    with settings:
        assert not settings.logger.file._file.closed

    assert settings.logger.file._file.closed
