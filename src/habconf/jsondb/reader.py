# Copyright 2026 habconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Reader for the platform's JSON database folder.

The platform persists each object category in its own JSON document: an
object mapping record names to ``{"class": ..., "value": {...}}`` entries.
This module turns those documents into :mod:`habconf.catalog.records`
records, preserving source order.
"""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path
from typing import Any

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

# ###############
# Public Interface
# ###############

DEVICES_FILE = "org.openhab.core.thing.Thing.json"
VARIABLES_FILE = "org.openhab.core.items.Item.json"
LINKS_FILE = "org.openhab.core.thing.link.ItemChannelLink.json"
ANNOTATIONS_FILE = "org.openhab.core.items.Metadata.json"

DATABASE_FILES = (DEVICES_FILE, VARIABLES_FILE, LINKS_FILE, ANNOTATIONS_FILE)


class JsonDbError(Exception):
    """Raised when the JSON database cannot be read or has an unexpected shape."""


def load_database(folder: Path) -> RecordSet:
    """Read all record categories from a JSON database folder.

    Missing category files yield empty categories.

    Args:
        folder: Directory holding the JSON database files.

    Returns:
        A :class:`RecordSet` with all records in source order.

    Raises:
        JsonDbError: If the folder holds none of the database files, or a
            file cannot be read or parsed.
    """
    if not folder.is_dir():
        raise JsonDbError(f"Database folder not found: {folder}")
    if not any((folder / name).exists() for name in DATABASE_FILES):
        raise JsonDbError(f"No JSON database files found in '{folder}'")

    return RecordSet(
        devices=[_device_record(n, v) for n, v in _load_category(folder / DEVICES_FILE)],
        variables=[_variable_record(n, v) for n, v in _load_category(folder / VARIABLES_FILE)],
        links=[_link_record(n, v) for n, v in _load_category(folder / LINKS_FILE)],
        annotations=[_annotation_record(n, v) for n, v in _load_category(folder / ANNOTATIONS_FILE)],
    )


def parse_category(text: str, source_label: str = "<string>") -> list[tuple[str, dict[str, Any]]]:
    """Parse one JSON database document into ``(record name, value)`` pairs.

    Decimal numbers are kept exact; wrapped ``{"class", "value"}`` entries
    are unwrapped.

    Raises:
        JsonDbError: If the text is not a JSON object of objects.
    """
    try:
        data = json.loads(text, parse_float=Decimal)
    except json.JSONDecodeError as exc:
        raise JsonDbError(f"Invalid JSON in {source_label}: {exc}") from exc
    if not isinstance(data, dict):
        raise JsonDbError(f"{source_label}: database document must be a JSON object")

    entries: list[tuple[str, dict[str, Any]]] = []
    for name, entry in data.items():
        if isinstance(entry, dict) and isinstance(entry.get("value"), dict):
            entry = entry["value"]
        if not isinstance(entry, dict):
            raise JsonDbError(f"{source_label}: record '{name}' must be a JSON object")
        entries.append((name, entry))
    return entries


def to_record_properties(configuration: Any) -> list[RecordProperty]:
    """Convert a configuration value into typed record properties.

    The configuration is either a JSON object, whose value types give the
    declared types, or a list of ``"<type> <key>=<value>"`` definition
    strings.

    Raises:
        JsonDbError: If a definition string is malformed.
    """
    if isinstance(configuration, list):
        return [_definition(item) for item in configuration if item is not None]
    if not isinstance(configuration, dict):
        return []
    # Older snapshots nest the values one level deeper.
    if set(configuration) == {"properties"} and isinstance(configuration["properties"], dict):
        configuration = configuration["properties"]

    result: list[RecordProperty] = []
    for key, value in configuration.items():
        converted = _declared(value)
        if converted is not None:
            declared_type, raw = converted
            result.append(RecordProperty(name=key, declared_type=declared_type, raw=raw))
    return result


# ################
# Implementation
# ################


def _load_category(path: Path) -> list[tuple[str, dict[str, Any]]]:
    if not path.exists():
        return []
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise JsonDbError(f"Cannot read database file '{path}': {exc}") from exc
    return parse_category(text, source_label=str(path))


def _definition(item: Any) -> RecordProperty:
    try:
        return parse_property_definition(str(item))
    except ValueError as exc:
        raise JsonDbError(str(exc)) from exc


def _declared(value: Any) -> tuple[str, str] | None:
    """Return ``(declared type, raw text)`` for a JSON value, or None to skip it."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "Bool", "true" if value else "false"
    if isinstance(value, int):
        return "Int", str(value)
    if isinstance(value, (Decimal, float)):
        return "Decimal", str(value)
    if isinstance(value, list):
        parts = [_declared(item) for item in value]
        return "String", ",".join(raw for _, raw in filter(None, parts))
    if isinstance(value, dict):
        return "String", json.dumps(value, default=str)
    return "String", str(value)


def _uid(value: Any) -> str:
    """Return a hierarchical id given either as a string or as ``{"segments": [...]}``."""
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        segments = value.get("segments")
        if isinstance(segments, list):
            return ":".join(str(s) for s in segments)
        for key in ("uid", "UID", "id"):
            if isinstance(value.get(key), str):
                return value[key]
    return ""


def _text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text else None


def _strings(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item is not None]


def _first(entry: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if entry.get(key) is not None:
            return entry[key]
    return None


def _endpoint_record(entry: Any) -> EndpointRecord:
    if not isinstance(entry, dict):
        return EndpointRecord(uid="")
    return EndpointRecord(
        uid=_uid(_first(entry, "uid", "UID")),
        kind=str(entry.get("kind") or "STATE"),
        item_type=_text(_first(entry, "itemType", "acceptedItemType")),
        label=_text(entry.get("label")),
        properties=to_record_properties(entry.get("configuration")),
    )


def _device_record(name: str, entry: dict[str, Any]) -> DeviceRecord:
    uid = _uid(_first(entry, "UID", "uid")) or name
    channels = entry.get("channels")
    return DeviceRecord(
        name=name,
        uid=uid,
        label=_text(entry.get("label")),
        location=_text(entry.get("location")),
        bridge_uid=_uid(_first(entry, "bridgeUID", "bridgeUid")) or None,
        is_bridge=bool(_first(entry, "isBridge", "bridge")),
        properties=to_record_properties(entry.get("configuration")),
        endpoints=[_endpoint_record(c) for c in channels] if isinstance(channels, list) else [],
    )


def _variable_record(name: str, entry: dict[str, Any]) -> VariableRecord:
    return VariableRecord(
        name=str(entry.get("name") or name),
        item_type=str(entry.get("itemType") or ""),
        label=_text(entry.get("label")),
        category=_text(entry.get("category")),
        icon_name=_text(entry.get("iconName")),
        groups=_strings(entry.get("groupNames")),
        tags=_strings(entry.get("tags")),
        base_item_type=_text(entry.get("baseItemType")),
        function_name=_text(entry.get("functionName")),
        function_params=_strings(entry.get("functionParams")),
    )


def _link_record(name: str, entry: dict[str, Any]) -> LinkRecord:
    return LinkRecord(
        name=name,
        channel_uid=_uid(_first(entry, "channelUID", "uid", "UID")),
        item_name=_text(entry.get("itemName")),
        properties=to_record_properties(entry.get("configuration")),
    )


def _annotation_record(name: str, entry: dict[str, Any]) -> AnnotationRecord:
    key = _uid(entry.get("key"))
    return AnnotationRecord(
        name=key or name,
        value=str(entry.get("value") or ""),
        properties=to_record_properties(entry.get("configuration")),
    )
