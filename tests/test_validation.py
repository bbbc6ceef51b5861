"""Tests for path precondition checks."""

import pytest

from dockertest.core.errors import PreconditionError
from dockertest.core.validation import (
    TargetKind,
    ValidationTarget,
    require_directory,
    require_file,
    require_manifests,
    validate,
)


def test_require_file_returns_absolute_path(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "compose.yml").write_text("services: {}\n")

    path = require_file("compose.yml")

    assert path.is_absolute()
    assert path == tmp_path / "compose.yml"


def test_require_file_missing(tmp_path):
    missing = tmp_path / "missing.yml"

    with pytest.raises(PreconditionError) as excinfo:
        require_file(missing)

    assert "File not found" in str(excinfo.value)
    assert str(missing) in str(excinfo.value)
    assert excinfo.value.path == missing


def test_require_directory_missing(tmp_path):
    with pytest.raises(PreconditionError, match="Working directory not found"):
        require_directory(tmp_path / "nope")


def test_require_manifests_missing_directory(tmp_path):
    with pytest.raises(PreconditionError, match="K8s directory not found"):
        require_manifests(tmp_path / "nope")


def test_require_manifests_not_a_directory(tmp_path):
    path = tmp_path / "deployment.yaml"
    path.write_text("kind: Deployment\n")

    with pytest.raises(PreconditionError, match="not a directory"):
        require_manifests(path)


def test_require_manifests_empty_directory(tmp_path):
    with pytest.raises(PreconditionError) as excinfo:
        require_manifests(tmp_path)

    assert "No YAML/JSON files found" in str(excinfo.value)
    assert str(tmp_path) in str(excinfo.value)


def test_require_manifests_ignores_other_files(tmp_path):
    (tmp_path / "README.md").write_text("docs")
    (tmp_path / "service.json").write_text("{}")
    (tmp_path / "notes.txt").write_text("x")

    manifests = require_manifests(tmp_path)

    assert manifests == [tmp_path / "service.json"]


def test_require_manifests_only_non_matching_files(tmp_path):
    (tmp_path / "README.md").write_text("docs")

    with pytest.raises(PreconditionError, match="No YAML/JSON files found"):
        require_manifests(tmp_path)


@pytest.mark.parametrize(
    "name", ["app.yml", "app.yaml", "app.json", "APP.YAML", "App.Json"]
)
def test_require_manifests_extensions_case_insensitive(tmp_path, name):
    (tmp_path / name).write_text("{}")

    assert require_manifests(tmp_path) == [tmp_path / name]


def test_require_manifests_custom_extensions(tmp_path):
    (tmp_path / "app.yaml").write_text("{}")

    with pytest.raises(PreconditionError):
        require_manifests(tmp_path, extensions=[".jsonnet"])


def test_validate_dispatches_on_kind(tmp_path):
    (tmp_path / "app.yaml").write_text("{}")

    assert validate(ValidationTarget(path=tmp_path, kind=TargetKind.MANIFESTS)) == tmp_path
    assert validate(ValidationTarget(path=tmp_path, kind=TargetKind.DIRECTORY)) == tmp_path
    assert (
        validate(ValidationTarget(path=tmp_path / "app.yaml", kind=TargetKind.FILE))
        == tmp_path / "app.yaml"
    )

    with pytest.raises(PreconditionError, match="File not found"):
        validate(ValidationTarget(path=tmp_path / "x.yaml", kind="file"))
