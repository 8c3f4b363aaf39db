# Copyright 2026 habconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Configuration entities: devices, containers, endpoints, and variables."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel
from pydantic import Field as _Field

from habconf.model.values import PropertyList

# ###############
# Public Interface
# ###############

TRIGGER_KIND = "trigger"


class Endpoint(BaseModel):
    """A single data or command point of a device."""

    kind: str
    data_type: str | None = None
    id: str
    display_name: str | None = None
    properties: PropertyList = _Field(default_factory=PropertyList)

    @property
    def display_kind(self) -> str:
        """The kind keyword with a capital first letter (``STATE`` -> ``State``)."""
        return self.kind[:1].upper() + self.kind[1:].lower()

    @property
    def declared_type(self) -> str:
        """The data type written to the file.

        Trigger endpoints carry no payload type, so they are always declared
        as ``String``; the same applies when the source has no type at all.
        """
        if self.kind.lower() == TRIGGER_KIND or not self.data_type:
            return "String"
        return self.data_type


class Device(BaseModel):
    """A managed unit, either standalone or hosted by a container."""

    namespace_id: str
    type_id: str
    container_id: str | None = None
    device_id: str
    display_name: str | None = None
    location: str | None = None
    properties: PropertyList = _Field(default_factory=PropertyList)
    endpoints: list[Endpoint] = _Field(default_factory=list)

    @property
    def uid(self) -> str:
        """The fully qualified device id."""
        if self.container_id is not None:
            return f"{self.namespace_id}:{self.type_id}:{self.container_id}:{self.device_id}"
        return f"{self.namespace_id}:{self.type_id}:{self.device_id}"


class Container(BaseModel):
    """A device that hosts and addresses other devices."""

    namespace_id: str
    container_type_id: str
    container_id: str
    display_name: str | None = None
    location: str | None = None
    properties: PropertyList = _Field(default_factory=PropertyList)
    children: list[Device] = _Field(default_factory=list)

    @property
    def uid(self) -> str:
        """The three-part container id used by children to reference it."""
        return f"{self.namespace_id}:{self.container_type_id}:{self.container_id}"


class Link(BaseModel):
    """Associates a variable with the fully qualified id of an endpoint."""

    kind: Literal["link"] = "link"
    name: str
    endpoint_full_id: str
    variable_name: str
    properties: PropertyList = _Field(default_factory=PropertyList)


class Annotation(BaseModel):
    """A namespaced key/value fact attached to a variable."""

    kind: Literal["annotation"] = "annotation"
    name: str
    namespace: str
    value: str
    variable_name: str
    properties: PropertyList = _Field(default_factory=PropertyList)


# An entry in a variable's curly block; `kind` tells links and annotations apart.
VariableEntry = Annotated[Link | Annotation, _Field(discriminator="kind")]


class Variable(BaseModel):
    """A named logical value with its display data, links, and annotations.

    The aggregate fields only matter for group variables: ``aggregate_function``
    and ``aggregate_params`` are ignored unless ``aggregate_base_type`` is set.
    ``category`` is not written itself; it stands in for ``icon_name`` when
    the record has no icon of its own.
    """

    data_type: str
    name: str
    display_name: str | None = None
    category: str | None = None
    icon_name: str | None = None
    groups: list[str] = _Field(default_factory=list)
    tags: list[str] = _Field(default_factory=list)
    entries: list[VariableEntry] = _Field(default_factory=list)
    aggregate_base_type: str | None = None
    aggregate_function: str | None = None
    aggregate_params: list[str] = _Field(default_factory=list)


class Catalog(BaseModel):
    """The complete result of one build: everything that gets rendered."""

    containers: list[Container] = _Field(default_factory=list)
    devices: list[Device] = _Field(default_factory=list)
    variables: list[Variable] = _Field(default_factory=list)
