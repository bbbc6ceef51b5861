"""Filesystem precondition checks run before any command starts."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from pathlib import Path

from pydantic import BaseModel

from dockertest.core.errors import PreconditionError
from dockertest.core.log import logger

FILE_NOT_FOUND = "File not found"
WORKDIR_NOT_FOUND = "Working directory not found"
DIRECTORY_NOT_FOUND = "K8s directory not found"
NOT_A_DIRECTORY = "K8s path is not a directory"
NO_MANIFESTS = "No YAML/JSON files found in directory"

DEFAULT_MANIFEST_EXTENSIONS = (".yml", ".yaml", ".json")


class TargetKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"
    MANIFESTS = "manifests"


class ValidationTarget(BaseModel):
    """A path together with the check it has to pass."""

    path: Path
    kind: TargetKind
    extensions: tuple[str, ...] = DEFAULT_MANIFEST_EXTENSIONS


def require_file(path: Path) -> Path:
    """Return the absolute path of an existing file."""
    path = Path(path).absolute()
    logger.trace("Searching file", path=str(path))
    if not path.exists():
        logger.error("File not found", path=str(path))
        raise PreconditionError(FILE_NOT_FOUND, path)
    return path


def require_directory(path: Path, reason: str = WORKDIR_NOT_FOUND) -> Path:
    """Return the absolute path of an existing directory."""
    path = Path(path).absolute()
    if not path.is_dir():
        logger.error(reason, path=str(path))
        raise PreconditionError(reason, path)
    return path


def require_manifests(
    path: Path,
    extensions: Iterable[str] = DEFAULT_MANIFEST_EXTENSIONS,
) -> list[Path]:
    """Check that path is a directory holding manifest files.

    Args:
        path: Directory to inspect
        extensions: Accepted suffixes, compared case-insensitively

    Returns:
        Sorted list of matching files

    Raises:
        PreconditionError: naming the check that failed
    """
    path = Path(path).absolute()
    if not path.exists():
        raise PreconditionError(DIRECTORY_NOT_FOUND, path)
    if not path.is_dir():
        raise PreconditionError(NOT_A_DIRECTORY, path)

    suffixes = tuple(ext.lower() for ext in extensions)
    manifests = sorted(
        entry for entry in path.iterdir()
        if entry.name.lower().endswith(suffixes)
    )
    if not manifests:
        raise PreconditionError(NO_MANIFESTS, path)

    logger.trace(
        "Found manifest files", count=len(manifests), path=str(path)
    )
    return manifests


def validate(target: ValidationTarget) -> Path:
    """Run the check for target and return its absolute path."""
    if target.kind is TargetKind.FILE:
        return require_file(target.path)
    if target.kind is TargetKind.DIRECTORY:
        return require_directory(target.path)
    require_manifests(target.path, target.extensions)
    return Path(target.path).absolute()
