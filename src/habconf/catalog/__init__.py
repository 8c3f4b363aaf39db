# Copyright 2026 habconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Input records and the catalog builders that consume them."""

from habconf.catalog.build import (
    CatalogError,
    build_catalog,
    build_devices,
    build_variables,
    compile_name_filter,
)
from habconf.catalog.records import (
    AnnotationRecord,
    DeviceRecord,
    EndpointRecord,
    LinkRecord,
    RecordProperty,
    RecordSet,
    VariableRecord,
    parse_property_definition,
)

__all__ = [
    "AnnotationRecord",
    "CatalogError",
    "DeviceRecord",
    "EndpointRecord",
    "LinkRecord",
    "RecordProperty",
    "RecordSet",
    "VariableRecord",
    "build_catalog",
    "build_devices",
    "build_variables",
    "compile_name_filter",
    "parse_property_definition",
]
