# Copyright 2026 habconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Typed input records delivered by a database reader.

The catalog builder never inspects raw JSON. Readers translate their source
into these records: named property bags whose configuration values carry
a declared type name alongside the raw text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from habconf.model.values import ValueType

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class RecordProperty:
    """One configuration entry: ``name``, declared type name, and raw text.

    Attributes:
        name: The configuration key.
        declared_type: Type name reported by the source (``"Int64"``,
            ``"System.String"``, ...). Empty when unknown.
        raw: The raw textual value.
    """

    name: str
    declared_type: str
    raw: str

    def value_type(self) -> ValueType | None:
        """Map the declared type name to a :class:`ValueType`.

        Returns ``None`` for unknown names, in which case the type is
        inferred from the raw text.
        """
        key = self.declared_type.strip().lower()
        key = key.removeprefix("system.")
        return _DECLARED_TYPES.get(key)


def parse_property_definition(definition: str) -> RecordProperty:
    """Parse a type-annotated definition string ``<type> <key>=<value>``.

    Example: ``"System.String host=192.168.1.10"``.

    Raises:
        ValueError: If the string does not have the expected shape.
    """
    match = _DEFINITION_PATTERN.fullmatch(definition.strip())
    if match is None:
        raise ValueError(f"Malformed property definition: {definition!r}")
    return RecordProperty(name=match["name"], declared_type=match["type"], raw=match["raw"])


@dataclass
class EndpointRecord:
    """Source data of a single endpoint."""

    uid: str
    kind: str = "STATE"
    item_type: str | None = None
    label: str | None = None
    properties: list[RecordProperty] = field(default_factory=list)


@dataclass
class DeviceRecord:
    """Source data of a device or container.

    Attributes:
        name: The record name (normally equal to ``uid``).
        uid: Hierarchical id, three segments (standalone or container) or
            four segments (child of a container).
        bridge_uid: Three-part id of the hosting container, if any.
        is_bridge: True if the record describes a container.
    """

    name: str
    uid: str
    label: str | None = None
    location: str | None = None
    bridge_uid: str | None = None
    is_bridge: bool = False
    properties: list[RecordProperty] = field(default_factory=list)
    endpoints: list[EndpointRecord] = field(default_factory=list)


@dataclass
class VariableRecord:
    """Source data of a variable; ``name`` is the record name."""

    name: str
    item_type: str
    label: str | None = None
    category: str | None = None
    icon_name: str | None = None
    groups: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    base_item_type: str | None = None
    function_name: str | None = None
    function_params: list[str] = field(default_factory=list)


@dataclass
class LinkRecord:
    """Source data of a variable-to-endpoint link.

    ``item_name`` may be empty; the variable name is then taken from a
    record name of the form ``Variable -> endpoint:id``.
    """

    name: str
    channel_uid: str
    item_name: str | None = None
    properties: list[RecordProperty] = field(default_factory=list)


@dataclass
class AnnotationRecord:
    """Source data of an annotation; ``name`` has the form ``namespace:variable``."""

    name: str
    value: str = ""
    properties: list[RecordProperty] = field(default_factory=list)


@dataclass
class RecordSet:
    """All input records of one database, per category, in source order."""

    devices: list[DeviceRecord] = field(default_factory=list)
    variables: list[VariableRecord] = field(default_factory=list)
    links: list[LinkRecord] = field(default_factory=list)
    annotations: list[AnnotationRecord] = field(default_factory=list)


# ################
# Implementation
# ################

_DECLARED_TYPES: dict[str, ValueType] = {
    "string": ValueType.STRING,
    "int": ValueType.INT,
    "int16": ValueType.INT,
    "int32": ValueType.INT,
    "int64": ValueType.INT,
    "integer": ValueType.INT,
    "long": ValueType.INT,
    "decimal": ValueType.DECIMAL,
    "double": ValueType.DECIMAL,
    "float": ValueType.DECIMAL,
    "bigdecimal": ValueType.DECIMAL,
    "bool": ValueType.BOOL,
    "boolean": ValueType.BOOL,
}

_DEFINITION_PATTERN = re.compile(r"(?P<type>[\w.\[\]]+)\s+(?P<name>[^=\s]+)=(?P<raw>.*)", re.DOTALL)
