# Copyright 2026 habconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Converter configuration for habconf."""

from habconf.config.settings import (
    CONFIG_FILE_NAME,
    ConfigError,
    ConverterConfig,
    InlineSettings,
    default_config_text,
    load_converter_config,
    parse_converter_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigError",
    "ConverterConfig",
    "InlineSettings",
    "default_config_text",
    "load_converter_config",
    "parse_converter_config",
]
