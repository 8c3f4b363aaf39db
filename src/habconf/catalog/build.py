# Copyright 2026 habconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Catalog builders: turn input records into configuration entities.

Both builders work in two phases. Phase one materialises the entities that
others refer to (containers; links and annotations) and indexes them by
their identity key. Phase two materialises the remaining entities and
attaches them through the index.

Structural problems in the source data (wrong number of id segments,
unknown container references, malformed numeric values) raise
:class:`CatalogError`; there is no partial catalog. Missing optional
fields simply leave the corresponding entity field empty.
"""

from __future__ import annotations

import re

from pydantic import ValidationError

from habconf.catalog.records import (
    AnnotationRecord,
    DeviceRecord,
    EndpointRecord,
    LinkRecord,
    RecordProperty,
    RecordSet,
    VariableRecord,
)
from habconf.model.entities import Annotation, Catalog, Container, Device, Endpoint, Link, Variable
from habconf.model.values import PropertyList

# ###############
# Public Interface
# ###############

NameFilter = str | re.Pattern[str] | None


class CatalogError(Exception):
    """Raised when the input records cannot be turned into a consistent catalog."""


def compile_name_filter(name_filter: NameFilter) -> re.Pattern[str] | None:
    """Compile a name filter; ``None`` and ``""`` match every record.

    Raises:
        CatalogError: If the pattern is not a valid regular expression.
    """
    if name_filter is None or isinstance(name_filter, re.Pattern):
        return name_filter
    if name_filter == "":
        return None
    try:
        return re.compile(name_filter)
    except re.error as exc:
        raise CatalogError(f"Invalid name filter {name_filter!r}: {exc}") from exc


def build_devices(
    records: list[DeviceRecord],
    name_filter: NameFilter = None,
) -> tuple[list[Container], list[Device]]:
    """Build containers and standalone devices from device records.

    Containers are built first. Every other record that matches
    *name_filter* becomes a device; a device with a container reference is
    appended to that container's children. A container is kept if it
    matches the filter itself or received at least one child.

    Returns:
        ``(containers, standalone_devices)``, both in source order.

    Raises:
        CatalogError: On malformed ids or unknown container references.
    """
    pattern = compile_name_filter(name_filter)

    containers: list[Container] = []
    container_index: dict[str, Container] = {}
    selected: set[str] = set()
    for record in records:
        if not record.is_bridge:
            continue
        container = _build_container(record)
        containers.append(container)
        container_index.setdefault(container.uid, container)
        if _matches(pattern, record.name):
            selected.add(container.uid)

    devices: list[Device] = []
    for record in records:
        if record.is_bridge or not _matches(pattern, record.name):
            continue
        device = _build_device(record)
        if record.bridge_uid:
            owner = container_index.get(record.bridge_uid)
            if owner is None:
                raise CatalogError(
                    f"Device '{record.name}': container '{record.bridge_uid}' referenced by 'bridgeUID' does not exist"
                )
            owner.children.append(device)
            selected.add(owner.uid)
        else:
            devices.append(device)

    kept = [c for c in containers if c.uid in selected]
    return kept, devices


def build_variables(
    variables: list[VariableRecord],
    links: list[LinkRecord],
    annotations: list[AnnotationRecord],
    name_filter: NameFilter = None,
) -> list[Variable]:
    """Build variables and attach their links and annotations.

    Every matching link and annotation is built first and indexed by the
    name of the variable it belongs to. Each matching variable then
    receives all of its links followed by all of its annotations, each
    group in source order.

    Raises:
        CatalogError: On records whose owning variable cannot be determined
            or whose property values are malformed.
    """
    pattern = compile_name_filter(name_filter)

    links_by_variable: dict[str, list[Link]] = {}
    for link_record in links:
        if _matches(pattern, link_record.name):
            link = _build_link(link_record)
            links_by_variable.setdefault(link.variable_name, []).append(link)

    annotations_by_variable: dict[str, list[Annotation]] = {}
    for annotation_record in annotations:
        if _matches(pattern, annotation_record.name):
            annotation = _build_annotation(annotation_record)
            annotations_by_variable.setdefault(annotation.variable_name, []).append(annotation)

    result: list[Variable] = []
    for record in variables:
        if not _matches(pattern, record.name):
            continue
        variable = _build_variable(record)
        variable.entries.extend(links_by_variable.get(variable.name, []))
        variable.entries.extend(annotations_by_variable.get(variable.name, []))
        result.append(variable)
    return result


def build_catalog(records: RecordSet, name_filter: NameFilter = None) -> Catalog:
    """Build the complete catalog from one set of input records."""
    pattern = compile_name_filter(name_filter)
    containers, devices = build_devices(records.devices, pattern)
    variables = build_variables(records.variables, records.links, records.annotations, pattern)
    return Catalog(containers=containers, devices=devices, variables=variables)


# ################
# Implementation
# ################

_LINK_NAME_SEPARATOR = " -> "


def _matches(pattern: re.Pattern[str] | None, name: str) -> bool:
    return pattern is None or pattern.search(name) is not None


def _split_uid(uid: str, expected: int, owner: str, field_name: str) -> list[str]:
    """Split a hierarchical id and check its segment count."""
    segments = uid.split(":")
    if len(segments) != expected or not all(segments):
        raise CatalogError(
            f"{owner}: '{field_name}' value '{uid}' must have {expected} colon-separated segments, "
            f"found {len(segments)}"
        )
    return segments


def _property_list(
    properties: list[RecordProperty],
    owner: str,
    *,
    metadata_mode: bool = False,
) -> PropertyList:
    result = PropertyList()
    for prop in properties:
        try:
            result.add(prop.name, prop.raw, prop.value_type(), metadata_mode=metadata_mode)
        except ValidationError as exc:
            reason = "; ".join(err["msg"] for err in exc.errors())
            raise CatalogError(f"{owner}: invalid value for property '{prop.name}': {reason}") from exc
    return result


def _build_container(record: DeviceRecord) -> Container:
    owner = f"Container '{record.name}'"
    namespace_id, type_id, container_id = _split_uid(record.uid, 3, owner, "UID")
    return Container(
        namespace_id=namespace_id,
        container_type_id=type_id,
        container_id=container_id,
        display_name=record.label or None,
        location=record.location or None,
        properties=_property_list(record.properties, owner),
    )


def _build_device(record: DeviceRecord) -> Device:
    owner = f"Device '{record.name}'"
    if record.bridge_uid:
        _split_uid(record.bridge_uid, 3, owner, "bridgeUID")
        namespace_id, type_id, container_id, device_id = _split_uid(record.uid, 4, owner, "UID")
    else:
        namespace_id, type_id, device_id = _split_uid(record.uid, 3, owner, "UID")
        container_id = None
    return Device(
        namespace_id=namespace_id,
        type_id=type_id,
        container_id=container_id,
        device_id=device_id,
        display_name=record.label or None,
        location=record.location or None,
        properties=_property_list(record.properties, owner),
        endpoints=[_build_endpoint(endpoint, record.name) for endpoint in record.endpoints],
    )


def _build_endpoint(record: EndpointRecord, device_name: str) -> Endpoint:
    return Endpoint(
        kind=record.kind or "STATE",
        data_type=record.item_type or None,
        id=record.uid.rsplit(":", 1)[-1],
        display_name=record.label or None,
        properties=_property_list(record.properties, f"Endpoint '{record.uid}' of device '{device_name}'"),
    )


def _build_link(record: LinkRecord) -> Link:
    owner = f"Link '{record.name}'"
    variable_name = record.item_name
    if not variable_name and _LINK_NAME_SEPARATOR in record.name:
        variable_name = record.name.split(_LINK_NAME_SEPARATOR, 1)[0].strip()
    if not variable_name:
        raise CatalogError(f"{owner}: cannot determine the linked variable ('itemName' is missing)")
    if not record.channel_uid:
        raise CatalogError(f"{owner}: missing endpoint id ('channelUID')")
    return Link(
        name=record.name,
        endpoint_full_id=record.channel_uid,
        variable_name=variable_name,
        properties=_property_list(record.properties, owner, metadata_mode=True),
    )


def _build_annotation(record: AnnotationRecord) -> Annotation:
    owner = f"Annotation '{record.name}'"
    namespace, sep, variable_name = record.name.partition(":")
    if not sep or not namespace or not variable_name:
        raise CatalogError(f"{owner}: record name must have the form 'namespace:variable'")
    return Annotation(
        name=record.name,
        namespace=namespace,
        value=record.value,
        variable_name=variable_name,
        properties=_property_list(record.properties, owner, metadata_mode=True),
    )


def _build_variable(record: VariableRecord) -> Variable:
    if not record.item_type:
        raise CatalogError(f"Variable '{record.name}': missing 'itemType'")
    has_aggregate = bool(record.base_item_type)
    return Variable(
        data_type=record.item_type,
        name=record.name,
        display_name=record.label or None,
        category=record.category or None,
        icon_name=record.icon_name or record.category or None,
        groups=list(record.groups),
        tags=list(record.tags),
        aggregate_base_type=record.base_item_type if has_aggregate else None,
        aggregate_function=(record.function_name or None) if has_aggregate else None,
        aggregate_params=list(record.function_params) if has_aggregate else [],
    )
