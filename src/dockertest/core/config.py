"""Settings for the compose and kubectl runners."""

from __future__ import annotations

from pathlib import Path

import platformdirs
from pydantic import Field, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from dockertest.core.base import BaseConfig
from dockertest.core.log import Logger
from dockertest.core.validation import DEFAULT_MANIFEST_EXTENSIONS

CONFIG_FILENAME = "dockertest.yaml"


def config_files() -> list[Path]:
    """YAML files to read, lowest priority first."""
    user_config = (
        Path(platformdirs.user_config_dir("dockertest", appauthor=False))
        / CONFIG_FILENAME
    )
    return [user_config, Path(CONFIG_FILENAME)]


class ComposeConfig(BaseConfig):
    """docker compose invocation settings."""

    command: list[str] = Field(
        default_factory=lambda: ["docker", "compose"],
        description=(
            "Program and leading arguments used to reach compose "
            "(e.g., ['docker', 'compose'] or ['podman', 'compose'])"
        ),
    )


class KubectlConfig(BaseConfig):
    """kubectl invocation settings and operation defaults."""

    command: str = Field(
        default="kubectl",
        description="kubectl executable name or path",
    )
    namespace: str = Field(
        default="default",
        description="Namespace used when an operation is not given one",
    )
    timeout: str = Field(
        default="300s",
        description="Value passed to kubectl --timeout when not given",
    )
    manifest_extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_MANIFEST_EXTENSIONS),
        description=(
            "File suffixes that count as manifests when validating "
            "a directory (case-insensitive)"
        ),
    )

    @model_validator(mode='after')
    def _require_extensions(self) -> 'KubectlConfig':
        if not self.manifest_extensions:
            raise ValueError("manifest_extensions must not be empty")
        return self


class Settings(BaseSettings, BaseConfig):
    """All dockertest settings.

    Sources (highest priority first):
    1. Arguments passed to Settings(...)
    2. Environment variables (DOCKERTEST_KUBECTL__NAMESPACE=...)
    3. .env file
    4. ./dockertest.yaml
    5. dockertest.yaml in the platform user config directory
    """

    docker: ComposeConfig = Field(
        default_factory=ComposeConfig,
        description="docker compose settings",
    )
    kubectl: KubectlConfig = Field(
        default_factory=KubectlConfig,
        description="kubectl settings",
    )
    logger: Logger = Field(
        default_factory=Logger,
        description="Logger configuration",
    )
    log_root: Path = Field(
        default_factory=(
            lambda: Path(platformdirs.user_state_dir()) / "dockertest"
        ),
        description="Root directory for log files",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="DOCKERTEST_",
        env_nested_delimiter="__",
        extra='ignore',
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls, yaml_file=config_files()),
            file_secret_settings,
        )


__all__ = ["Settings", "ComposeConfig", "KubectlConfig"]
