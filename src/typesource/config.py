"""Configuration loading and validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from typesource.errors import ConfigError, ConfigNotFoundError
from typesource.utils.pattern import compile_globs, matches_any

__all__ = ["Config", "DiscoverySettings", "ScanSettings", "build_exclusion_predicate"]


class DiscoverySettings(BaseModel):
    """The ``discovery`` section: which classes to hand to the generator."""

    model_config = ConfigDict(extra="forbid")

    class_names: list[str] | None = None
    class_name_patterns: list[str] | None = None
    application_class_name: str | None = None
    automatic_application: bool = False
    exclude_class_names: list[str] = []
    exclude_class_name_patterns: list[str] = []


class ScanSettings(BaseModel):
    """The ``scan`` section: where the class inventory comes from."""

    model_config = ConfigDict(extra="forbid")

    packages: list[str] = []
    search_paths: list[str] = []
    skip_private: bool = True


class Config:
    """Configuration accessor with dot-path key support."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}

    @classmethod
    def from_yaml(cls, path: str | Path) -> Config:
        """Load configuration from a YAML file.

        Raises:
            ConfigNotFoundError: If the file does not exist.
            ConfigError: If the file is not valid YAML or not a mapping.
        """
        path = Path(path)
        if not path.exists():
            raise ConfigNotFoundError(config_path=str(path))

        content = path.read_text(encoding="utf-8")
        try:
            parsed = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(message=f"Invalid YAML in config file: {path}") from e

        if parsed is None:
            return cls()
        if not isinstance(parsed, dict):
            raise ConfigError(message=f"Config file must be a YAML mapping: {path}")
        return cls(parsed)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-path key."""
        parts = key.split(".")
        current: Any = self._data
        for part in parts:
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current

    @property
    def discovery(self) -> DiscoverySettings:
        return self._section("discovery", DiscoverySettings)

    @property
    def scan(self) -> ScanSettings:
        return self._section("scan", ScanSettings)

    def _section(self, key: str, model: type[BaseModel]) -> Any:
        raw = self.get(key) or {}
        try:
            return model.model_validate(raw)
        except ValidationError as e:
            raise ConfigError(message=f"Invalid '{key}' section: {e}") from e


def build_exclusion_predicate(
    class_names: list[str] | None = None,
    class_name_patterns: list[str] | None = None,
) -> Callable[[str], bool]:
    """Build a predicate that is True for excluded class names.

    A name is excluded when it is listed verbatim or matches one of the globs.
    """
    excluded = set(class_names or [])
    patterns = compile_globs(class_name_patterns or [])

    def is_excluded(name: str) -> bool:
        return name in excluded or matches_any(name, patterns)

    return is_excluded
