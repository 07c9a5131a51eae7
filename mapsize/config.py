"""Loading and validation of analyzer settings files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import voluptuous as vol
import yaml

from mapsize.analyze_map import AnalyzerSettings
from mapsize.analyze_map.const import (
    IGNORED_REGIONS,
    MEMORY_CONFIG_MARKER,
    MEMORY_MAP_MARKER,
    OBJECT_FILE_SUFFIXES,
    TRAILER_MARKER,
)
from mapsize.const import (
    CONF_EARLY_EXIT,
    CONF_IGNORED_REGIONS,
    CONF_MEMORY_CONFIG_MARKER,
    CONF_MEMORY_MAP_MARKER,
    CONF_OBJECT_SUFFIXES,
    CONF_TRAILER_MARKER,
)
from mapsize.core import InvalidSettings

_LOGGER = logging.getLogger(__name__)


def marker(value: Any) -> str:
    """Validate a heading marker: a non-empty single line."""
    if not isinstance(value, str):
        raise vol.Invalid("Marker must be a string")
    if not value.strip():
        raise vol.Invalid("Marker must not be empty")
    if "\n" in value:
        raise vol.Invalid("Marker must be a single line")
    return value


def object_suffix(value: Any) -> str:
    """Validate an object file suffix such as ".o" or ".obj"."""
    if not isinstance(value, str):
        raise vol.Invalid("Object file suffix must be a string")
    if not value.startswith(".") or len(value) < 2:
        raise vol.Invalid(f"Object file suffix must start with a dot: {value!r}")
    if any(c.isspace() or c in "()" for c in value):
        raise vol.Invalid(
            f"Object file suffix must not contain whitespace or parentheses: {value!r}"
        )
    return value


CONFIG_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_MEMORY_CONFIG_MARKER, default=MEMORY_CONFIG_MARKER): marker,
        vol.Optional(CONF_MEMORY_MAP_MARKER, default=MEMORY_MAP_MARKER): marker,
        vol.Optional(CONF_TRAILER_MARKER, default=TRAILER_MARKER): marker,
        vol.Optional(CONF_EARLY_EXIT, default=True): bool,
        vol.Optional(
            CONF_OBJECT_SUFFIXES, default=list(OBJECT_FILE_SUFFIXES)
        ): vol.All([object_suffix], vol.Length(min=1)),
        vol.Optional(CONF_IGNORED_REGIONS, default=sorted(IGNORED_REGIONS)): [str],
    }
)


def settings_from_config(config: dict[str, Any] | None) -> AnalyzerSettings:
    """Validate a settings mapping and build :class:`AnalyzerSettings`."""
    try:
        config = CONFIG_SCHEMA(config or {})
    except vol.Invalid as err:
        raise InvalidSettings(f"Invalid settings: {err}") from err
    return AnalyzerSettings(
        memory_config_marker=config[CONF_MEMORY_CONFIG_MARKER],
        memory_map_marker=config[CONF_MEMORY_MAP_MARKER],
        trailer_marker=config[CONF_TRAILER_MARKER],
        early_exit=config[CONF_EARLY_EXIT],
        object_suffixes=tuple(config[CONF_OBJECT_SUFFIXES]),
        ignored_regions=frozenset(config[CONF_IGNORED_REGIONS]),
    )


def load_settings(path: str | Path) -> AnalyzerSettings:
    """Load analyzer settings from a YAML file.

    Raises:
        InvalidSettings: The file cannot be read, is not valid YAML or does
            not match the schema.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as err:
        raise InvalidSettings(f"Could not read settings file {path}: {err}") from err
    except yaml.YAMLError as err:
        raise InvalidSettings(f"Invalid YAML in settings file {path}: {err}") from err

    if data is not None and not isinstance(data, dict):
        raise InvalidSettings(f"Settings file {path} must contain a mapping")
    _LOGGER.debug("Loaded settings from %s", path)
    return settings_from_config(data)
