# Copyright 2026 habconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the habconf converter configuration file."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from habconf.render.options import DEFAULT_VENDOR_TYPE_OVERRIDES, RenderOptions
from habconf.render.writer import DEFAULT_DEVICES_FILE, DEFAULT_VARIABLES_FILE

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".habconf.yaml"


class ConfigError(Exception):
    """Raised when a converter configuration file is invalid or cannot be loaded."""


@dataclass
class InlineSettings:
    """Which property lists are rendered on a single line."""

    container_properties: bool = False
    device_properties: bool = False
    endpoint_properties: bool = True
    variable_entries: bool = False


@dataclass
class ConverterConfig:
    """The parsed converter configuration.

    Attributes:
        input_directory: JSON database folder, relative to the config file.
        output_directory: Folder receiving the rendered files.
        devices_file: File name of the device/container stream.
        variables_file: File name of the variable stream.
        name_filter: Regular expression selecting records by name.
        include_default_endpoints: Also write endpoints without properties.
        inline: Single-line switches per entity kind.
        vendor_type_overrides: Fixed header type ids per namespace.
    """

    input_directory: str = "jsondb"
    output_directory: str = "conf"
    devices_file: str = DEFAULT_DEVICES_FILE
    variables_file: str = DEFAULT_VARIABLES_FILE
    name_filter: str | None = None
    include_default_endpoints: bool = False
    inline: InlineSettings = field(default_factory=InlineSettings)
    vendor_type_overrides: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_VENDOR_TYPE_OVERRIDES))

    def render_options(self) -> RenderOptions:
        """Return the render options described by this configuration."""
        return RenderOptions(
            container_properties_inline=self.inline.container_properties,
            device_properties_inline=self.inline.device_properties,
            endpoint_properties_inline=self.inline.endpoint_properties,
            variable_entries_inline=self.inline.variable_entries,
            include_default_endpoints=self.include_default_endpoints,
            vendor_type_overrides=dict(self.vendor_type_overrides),
        )


def load_converter_config(path: Path) -> ConverterConfig:
    """Load and parse a habconf configuration file.

    Args:
        path: Path to the `.habconf.yaml` file.

    Returns:
        A ConverterConfig instance populated from the file.

    Raises:
        ConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read config file: {exc}") from exc

    return parse_converter_config(text, source_label=str(path))


def parse_converter_config(text: str, source_label: str = "<string>") -> ConverterConfig:
    """Parse configuration YAML text into a ConverterConfig.

    An empty document yields the defaults.

    Raises:
        ConfigError: If the YAML is invalid or a field has the wrong type.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return ConverterConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{source_label}: configuration must be a YAML mapping")

    unknown = set(data) - _TOP_LEVEL_KEYS
    if unknown:
        raise ConfigError(f"{source_label}: unknown field(s): {', '.join(sorted(unknown))}")

    config = ConverterConfig()
    config.input_directory = _optional_string(data, "input-directory", source_label, config.input_directory)
    config.output_directory = _optional_string(data, "output-directory", source_label, config.output_directory)
    config.devices_file = _optional_string(data, "devices-file", source_label, config.devices_file)
    config.variables_file = _optional_string(data, "variables-file", source_label, config.variables_file)
    config.include_default_endpoints = _optional_bool(
        data, "include-default-endpoints", source_label, config.include_default_endpoints
    )

    if data.get("name-filter") is not None:
        name_filter = _optional_string(data, "name-filter", source_label, "")
        try:
            re.compile(name_filter)
        except re.error as exc:
            raise ConfigError(f"{source_label}: 'name-filter' is not a valid regular expression: {exc}") from exc
        config.name_filter = name_filter or None

    if "inline" in data:
        config.inline = _parse_inline(data["inline"], source_label)

    if "vendor-type-overrides" in data:
        config.vendor_type_overrides = _parse_overrides(data["vendor-type-overrides"], source_label)

    return config


def default_config_text() -> str:
    """Return the YAML text written by ``habconf init``."""
    overrides = "".join(f"  {ns}: {type_id}\n" for ns, type_id in DEFAULT_VENDOR_TYPE_OVERRIDES.items())
    return (
        "# habconf converter configuration\n"
        "input-directory: jsondb\n"
        "output-directory: conf\n"
        f"devices-file: {DEFAULT_DEVICES_FILE}\n"
        f"variables-file: {DEFAULT_VARIABLES_FILE}\n"
        "include-default-endpoints: false\n"
        "inline:\n"
        "  container-properties: false\n"
        "  device-properties: false\n"
        "  endpoint-properties: true\n"
        "  variable-entries: false\n"
        "vendor-type-overrides:\n"
        f"{overrides}"
    )


# ################
# Implementation
# ################

_TOP_LEVEL_KEYS = {
    "input-directory",
    "output-directory",
    "devices-file",
    "variables-file",
    "name-filter",
    "include-default-endpoints",
    "inline",
    "vendor-type-overrides",
}

_INLINE_KEYS = {
    "container-properties": "container_properties",
    "device-properties": "device_properties",
    "endpoint-properties": "endpoint_properties",
    "variable-entries": "variable_entries",
}


def _optional_string(mapping: dict[str, object], key: str, source_label: str, default: str) -> str:
    """Extract an optional string field, raising ConfigError on a wrong type."""
    if mapping.get(key) is None:
        return default
    value = mapping[key]
    if not isinstance(value, str):
        raise ConfigError(f"{source_label}: '{key}' must be a string")
    return value


def _optional_bool(mapping: dict[str, object], key: str, source_label: str, default: bool) -> bool:
    """Extract an optional boolean field, raising ConfigError on a wrong type."""
    if mapping.get(key) is None:
        return default
    value = mapping[key]
    if not isinstance(value, bool):
        raise ConfigError(f"{source_label}: '{key}' must be true or false")
    return value


def _parse_inline(entry: object, source_label: str) -> InlineSettings:
    """Parse the ``inline`` mapping."""
    if not isinstance(entry, dict):
        raise ConfigError(f"{source_label}: 'inline' must be a YAML mapping")
    unknown = set(entry) - set(_INLINE_KEYS)
    if unknown:
        raise ConfigError(f"{source_label}: unknown 'inline' field(s): {', '.join(sorted(unknown))}")

    settings = InlineSettings()
    for key, attribute in _INLINE_KEYS.items():
        current = getattr(settings, attribute)
        setattr(settings, attribute, _optional_bool(entry, key, f"{source_label}: inline", current))
    return settings


def _parse_overrides(entry: object, source_label: str) -> dict[str, str]:
    """Parse the ``vendor-type-overrides`` mapping."""
    if entry is None:
        return {}
    if not isinstance(entry, dict):
        raise ConfigError(f"{source_label}: 'vendor-type-overrides' must be a YAML mapping")
    overrides: dict[str, str] = {}
    for namespace, type_id in entry.items():
        if not isinstance(namespace, str) or not isinstance(type_id, str):
            raise ConfigError(f"{source_label}: 'vendor-type-overrides' entries must map strings to strings")
        overrides[namespace] = type_id
    return overrides
