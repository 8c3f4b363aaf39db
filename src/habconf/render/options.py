# Copyright 2026 habconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Formatting options passed explicitly into every render call."""

from __future__ import annotations

from dataclasses import dataclass, field

# ###############
# Public Interface
# ###############

CRLF = "\r\n"

# Some bindings expect one fixed type id in standalone device headers,
# whatever per-model type id the database records.
DEFAULT_VENDOR_TYPE_OVERRIDES: dict[str, str] = {"shelly": "shellydevice"}


@dataclass(frozen=True)
class RenderOptions:
    """Pure formatting switches. They never change what is rendered, only how.

    Attributes:
        container_properties_inline: Render container properties on one line.
        device_properties_inline: Render device properties on one line.
        endpoint_properties_inline: Render endpoint properties on one line.
        variable_entries_inline: Render a variable's links and annotations
            (and their properties) on one line instead of a block.
        include_default_endpoints: Also render endpoints without properties.
        newline: Line terminator used for every rendered line.
        vendor_type_overrides: Mapping from namespace id to the type id used
            in standalone device headers of that namespace.
    """

    container_properties_inline: bool = False
    device_properties_inline: bool = False
    endpoint_properties_inline: bool = True
    variable_entries_inline: bool = False
    include_default_endpoints: bool = False
    newline: str = CRLF
    vendor_type_overrides: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_VENDOR_TYPE_OVERRIDES))

    def device_type_id(self, namespace_id: str, type_id: str) -> str:
        """Return the type id to write in a standalone device header."""
        return self.vendor_type_overrides.get(namespace_id, type_id)
