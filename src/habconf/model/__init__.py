# Copyright 2026 habconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Configuration model for habconf (values, devices, variables, etc.)."""

from habconf.model.entities import (
    Annotation,
    Catalog,
    Container,
    Device,
    Endpoint,
    Link,
    Variable,
    VariableEntry,
)
from habconf.model.values import (
    PropertyList,
    TypedValue,
    ValueType,
    infer_value_type,
    normalize_decimal,
)

__all__ = [
    # Values
    "ValueType",
    "TypedValue",
    "PropertyList",
    "infer_value_type",
    "normalize_decimal",
    # Entities
    "Endpoint",
    "Device",
    "Container",
    "Link",
    "Annotation",
    "VariableEntry",
    "Variable",
    "Catalog",
]
