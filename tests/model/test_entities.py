# Copyright 2026 habconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""High-level tests demonstrating how to construct the configuration model."""

from habconf.model import (
    Annotation,
    Catalog,
    Container,
    Device,
    Endpoint,
    Link,
    PropertyList,
    Variable,
)


def test_endpoint_display_kind_is_capitalized() -> None:
    """The kind keyword is written with a capital first letter."""
    assert Endpoint(kind="STATE", id="power").display_kind == "State"
    assert Endpoint(kind="trigger", id="button").display_kind == "Trigger"


def test_trigger_endpoint_is_declared_as_string() -> None:
    """Trigger endpoints always declare the String type."""
    endpoint = Endpoint(kind="TRIGGER", data_type="Number", id="event")
    assert endpoint.declared_type == "String"


def test_state_endpoint_keeps_its_type() -> None:
    """State endpoints declare the type recorded in the source."""
    assert Endpoint(kind="STATE", data_type="Number:Power", id="load").declared_type == "Number:Power"


def test_endpoint_without_type_is_declared_as_string() -> None:
    """A missing data type falls back to String."""
    assert Endpoint(kind="STATE", id="raw").declared_type == "String"


def test_device_uid_standalone_and_child() -> None:
    """Device ids have three parts standalone and four parts inside a container."""
    standalone = Device(namespace_id="acme", type_id="switch", device_id="dev1")
    child = Device(namespace_id="acme", type_id="plug", container_id="hub", device_id="p1")

    assert standalone.uid == "acme:switch:dev1"
    assert child.uid == "acme:plug:hub:p1"


def test_container_uid() -> None:
    """A container id has three parts."""
    container = Container(namespace_id="acme", container_type_id="gateway", container_id="gw1")
    assert container.uid == "acme:gateway:gw1"
    assert container.children == []


def test_defaults_are_empty() -> None:
    """Collections default to empty lists and property lists."""
    device = Device(namespace_id="a", type_id="b", device_id="c")
    variable = Variable(data_type="Switch", name="Light")

    assert device.properties == PropertyList()
    assert device.endpoints == []
    assert variable.groups == []
    assert variable.tags == []
    assert variable.entries == []
    assert variable.aggregate_params == []


def test_variable_entries_mix_links_and_annotations() -> None:
    """A variable's entries hold links and annotations in one ordered list."""
    link = Link(name="Light -> a:b:c:power", endpoint_full_id="a:b:c:power", variable_name="Light")
    annotation = Annotation(name="alexa:Light", namespace="alexa", value="Switchable", variable_name="Light")
    variable = Variable(data_type="Switch", name="Light", entries=[annotation, link])

    assert [entry.kind for entry in variable.entries] == ["annotation", "link"]
    assert isinstance(variable.entries[1], Link)


def test_variable_entries_validate_from_dicts() -> None:
    """Entries given as mappings are told apart by their ``kind``."""
    variable = Variable.model_validate(
        {
            "data_type": "Number",
            "name": "Temp",
            "entries": [
                {"kind": "link", "name": "l", "endpoint_full_id": "a:b:c:t", "variable_name": "Temp"},
                {
                    "kind": "annotation",
                    "name": "unit:Temp",
                    "namespace": "unit",
                    "value": "°C",
                    "variable_name": "Temp",
                },
            ],
        }
    )
    assert isinstance(variable.entries[0], Link)
    assert isinstance(variable.entries[1], Annotation)


def test_catalog_groups_entities() -> None:
    """A catalog holds containers, standalone devices, and variables."""
    catalog = Catalog(
        containers=[Container(namespace_id="a", container_type_id="bridge", container_id="b1")],
        devices=[Device(namespace_id="a", type_id="t", device_id="d1")],
        variables=[Variable(data_type="Switch", name="S")],
    )
    assert len(catalog.containers) == 1
    assert len(catalog.devices) == 1
    assert len(catalog.variables) == 1
