# Copyright 2026 habconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Rendering of configuration entities into the platform's file syntax."""

from habconf.render.options import CRLF, DEFAULT_VENDOR_TYPE_OVERRIDES, RenderOptions
from habconf.render.text import (
    render,
    render_annotation,
    render_container,
    render_device,
    render_endpoint,
    render_link,
    render_properties,
    render_value,
    render_variable,
)
from habconf.render.writer import (
    DEFAULT_DEVICES_FILE,
    DEFAULT_VARIABLES_FILE,
    OUTPUT_ENCODING,
    ExportError,
    encode_text,
    export_catalog,
    render_devices_text,
    render_variables_text,
    sort_device_entries,
    sort_variables,
)

__all__ = [
    "CRLF",
    "DEFAULT_DEVICES_FILE",
    "DEFAULT_VARIABLES_FILE",
    "DEFAULT_VENDOR_TYPE_OVERRIDES",
    "OUTPUT_ENCODING",
    "ExportError",
    "RenderOptions",
    "encode_text",
    "export_catalog",
    "render",
    "render_annotation",
    "render_container",
    "render_device",
    "render_devices_text",
    "render_endpoint",
    "render_link",
    "render_properties",
    "render_value",
    "render_variable",
    "render_variables_text",
    "sort_device_entries",
    "sort_variables",
]
