"""Config resolution for funsig.

Layers, lowest to highest:

- built-in model defaults
- ``~/.config/funsig/config.yaml``
- ``<root>/.funsig.yaml``
- ``FUNSIG__<SECTION>__<KEY>`` environment variables
- keyword arguments to ``load_config``

The two YAML files are deep-merged before pydantic-settings sees them, so a
project file can override one key of a section without restating the rest.
"""

from __future__ import annotations

from functools import reduce
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from funsig.config.models import ExtractionConfig, FunsigConfig, LoggingConfig
from funsig.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path("~/.config/funsig/config.yaml").expanduser()
PROJECT_CONFIG_NAME = ".funsig.yaml"


def _load_yaml(path: Path) -> dict[str, Any]:
    """Mapping stored in ``path``; ``{}`` when the file is absent or empty."""
    if not path.is_file():
        return {}
    try:
        loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError.parse_error(str(path), "top level must be a mapping")
    return loaded


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """New dict: ``override`` on top of ``base``, recursing into nested mappings."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        both_maps = isinstance(current, dict) and isinstance(value, dict)
        merged[key] = _deep_merge(current, value) if both_maps else value
    return merged


class _YamlSource(PydanticBaseSettingsSource):
    """Feeds an already merged YAML mapping to pydantic-settings."""

    def __init__(self, settings_cls: type[BaseSettings], data: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._data = data

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:  # noqa: ARG002
        value = self._data.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        return {key: value for key, value in self._data.items() if value is not None}


def _make_settings_class(yaml_data: dict[str, Any]) -> type[BaseSettings]:
    """Settings class bound to one load's YAML data.

    A class per load keeps concurrent loads with different roots apart.
    """

    class FunsigSettings(BaseSettings):
        model_config = SettingsConfigDict(
            env_prefix="FUNSIG__",
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        extraction: ExtractionConfig = ExtractionConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            # Earlier sources win
            return init_settings, env_settings, _YamlSource(settings_cls, yaml_data)

    return FunsigSettings


def load_config(root: Path | None = None, **overrides: Any) -> FunsigConfig:
    """Resolve the configuration for a project directory.

    Args:
        root: Directory that may hold ``.funsig.yaml``; defaults to the
            current working directory.
        **overrides: Section values that beat every other layer, e.g.
            ``extraction=ExtractionConfig(legacy_dependencies=True)``.

    Raises:
        ConfigError: A YAML file is malformed or a value fails validation.
    """
    project_dir = root if root is not None else Path.cwd()
    layers = [_load_yaml(GLOBAL_CONFIG_PATH), _load_yaml(project_dir / PROJECT_CONFIG_NAME)]
    yaml_data = reduce(_deep_merge, layers, {})

    try:
        settings = _make_settings_class(yaml_data)(**overrides)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise ConfigError.invalid_value(location, first.get("input"), first["msg"]) from e
    return FunsigConfig.model_validate(settings.model_dump())
