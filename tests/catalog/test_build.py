# Copyright 2026 habconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the catalog builders."""

import re

import pytest

from habconf.catalog import (
    AnnotationRecord,
    CatalogError,
    DeviceRecord,
    EndpointRecord,
    LinkRecord,
    RecordProperty,
    RecordSet,
    VariableRecord,
    build_catalog,
    build_devices,
    build_variables,
    compile_name_filter,
)
from habconf.model import Annotation, Link, ValueType

# ###############
# Helpers
# ###############


def _bridge(uid: str, **kwargs: object) -> DeviceRecord:
    return DeviceRecord(name=uid, uid=uid, is_bridge=True, **kwargs)  # type: ignore[arg-type]


def _thing(uid: str, **kwargs: object) -> DeviceRecord:
    return DeviceRecord(name=uid, uid=uid, **kwargs)  # type: ignore[arg-type]


def _link(variable: str, channel: str, **kwargs: object) -> LinkRecord:
    return LinkRecord(name=f"{variable} -> {channel}", channel_uid=channel, **kwargs)  # type: ignore[arg-type]


# ###############
# Name filter
# ###############


def test_compile_name_filter_variants() -> None:
    assert compile_name_filter(None) is None
    assert compile_name_filter("") is None
    pattern = re.compile("x")
    assert compile_name_filter(pattern) is pattern
    assert compile_name_filter("^a").pattern == "^a"  # type: ignore[union-attr]


def test_compile_name_filter_rejects_invalid_pattern() -> None:
    with pytest.raises(CatalogError, match="Invalid name filter"):
        compile_name_filter("(")


# ###############
# Devices
# ###############


class TestBuildDevices:
    def test_standalone_device(self) -> None:
        record = _thing("acme:switch:dev1", label="Lamp", location="Living")
        containers, devices = build_devices([record])

        assert containers == []
        assert len(devices) == 1
        device = devices[0]
        assert (device.namespace_id, device.type_id, device.device_id) == ("acme", "switch", "dev1")
        assert device.container_id is None
        assert device.display_name == "Lamp"
        assert device.location == "Living"

    def test_child_is_attached_to_its_container(self) -> None:
        records = [
            _thing("hue:0210:b1:lamp1", bridge_uid="hue:bridge:b1", label="Lamp"),
            _bridge("hue:bridge:b1", label="Hue Bridge"),
        ]
        containers, devices = build_devices(records)

        assert devices == []
        assert len(containers) == 1
        container = containers[0]
        assert container.uid == "hue:bridge:b1"
        assert container.display_name == "Hue Bridge"
        assert [c.device_id for c in container.children] == ["lamp1"]
        child = container.children[0]
        assert child.type_id == "0210"
        assert child.container_id == "b1"

    def test_children_keep_discovery_order(self) -> None:
        records = [
            _bridge("hue:bridge:b1"),
            _thing("hue:0210:b1:z", bridge_uid="hue:bridge:b1"),
            _thing("hue:0210:b1:a", bridge_uid="hue:bridge:b1"),
        ]
        containers, _ = build_devices(records)
        assert [c.device_id for c in containers[0].children] == ["z", "a"]

    def test_unknown_container_is_fatal(self) -> None:
        records = [_thing("hue:0210:b9:lamp1", bridge_uid="hue:bridge:b9")]
        with pytest.raises(CatalogError, match="container 'hue:bridge:b9'.*does not exist"):
            build_devices(records)

    @pytest.mark.parametrize("uid", ["acme:switch", "acme:switch:dev1:extra", "acme::dev1"])
    def test_standalone_with_wrong_segment_count_is_fatal(self, uid: str) -> None:
        with pytest.raises(CatalogError, match=f"Device '{uid}'"):
            build_devices([_thing(uid)])

    def test_child_with_three_segments_is_fatal(self) -> None:
        records = [_bridge("hue:bridge:b1"), _thing("hue:0210:lamp1", bridge_uid="hue:bridge:b1")]
        with pytest.raises(CatalogError, match="must have 4 colon-separated segments"):
            build_devices(records)

    def test_container_with_wrong_segment_count_is_fatal(self) -> None:
        with pytest.raises(CatalogError, match="Container 'hue:bridge'"):
            build_devices([_bridge("hue:bridge")])

    def test_endpoints_are_built_in_order(self) -> None:
        record = _thing(
            "acme:sensor:s1",
            endpoints=[
                EndpointRecord(uid="acme:sensor:s1:temp", kind="STATE", item_type="Number", label="Temp"),
                EndpointRecord(uid="acme:sensor:s1:group#button", kind="TRIGGER"),
            ],
        )
        _, devices = build_devices([record])
        endpoints = devices[0].endpoints

        assert [e.id for e in endpoints] == ["temp", "group#button"]
        assert endpoints[0].data_type == "Number"
        assert endpoints[0].display_name == "Temp"
        assert endpoints[1].declared_type == "String"

    def test_properties_keep_declared_types(self) -> None:
        record = _thing(
            "acme:switch:dev1",
            properties=[
                RecordProperty(name="host", declared_type="String", raw="10.0.0.1"),
                RecordProperty(name="code", declared_type="String", raw="0042"),
                RecordProperty(name="factor", declared_type="Decimal", raw="1,5"),
                RecordProperty(name="other", declared_type="", raw="true"),
            ],
        )
        _, devices = build_devices([record])
        entries = devices[0].properties.entries

        assert [e.name for e in entries] == ["host", "code", "factor", "other"]
        assert [e.type for e in entries] == [ValueType.STRING, ValueType.STRING, ValueType.DECIMAL, ValueType.BOOL]
        assert not any(e.metadata_mode for e in entries)

    def test_malformed_numeric_property_is_fatal(self) -> None:
        record = _thing(
            "acme:switch:dev1",
            properties=[RecordProperty(name="interval", declared_type="Int64", raw="soon")],
        )
        with pytest.raises(CatalogError, match="Device 'acme:switch:dev1': invalid value for property 'interval'"):
            build_devices([record])

    def test_name_filter_applies_to_devices(self) -> None:
        records = [_thing("acme:switch:dev1"), _thing("acme:switch:dev2")]
        _, devices = build_devices(records, "dev2$")
        assert [d.device_id for d in devices] == ["dev2"]

    def test_filtered_container_kept_when_it_has_children(self) -> None:
        records = [
            _bridge("hue:bridge:b1"),
            _bridge("hue:bridge:b2"),
            _thing("hue:0210:b1:kitchen", bridge_uid="hue:bridge:b1"),
        ]
        containers, _ = build_devices(records, "kitchen")
        assert [c.uid for c in containers] == ["hue:bridge:b1"]

    def test_container_kept_when_it_matches_filter(self) -> None:
        records = [_bridge("hue:bridge:b1"), _thing("acme:switch:dev1")]
        containers, devices = build_devices(records, "hue")
        assert [c.uid for c in containers] == ["hue:bridge:b1"]
        assert devices == []


# ###############
# Variables
# ###############


class TestBuildVariables:
    def test_variable_with_link(self) -> None:
        variables = [VariableRecord(name="Light1", item_type="Switch", label="Living Room Light")]
        links = [_link("Light1", "acme:switch:dev1:power")]
        result = build_variables(variables, links, [])

        assert len(result) == 1
        variable = result[0]
        assert variable.display_name == "Living Room Light"
        assert len(variable.entries) == 1
        link = variable.entries[0]
        assert isinstance(link, Link)
        assert link.endpoint_full_id == "acme:switch:dev1:power"
        assert link.variable_name == "Light1"

    def test_links_come_before_annotations(self) -> None:
        variables = [VariableRecord(name="Temp", item_type="Number")]
        links = [_link("Temp", "a:b:c:t1"), _link("Other", "a:b:c:x"), _link("Temp", "a:b:c:t2")]
        annotations = [
            AnnotationRecord(name="unit:Temp", value="°C"),
            AnnotationRecord(name="alexa:Temp", value="TemperatureSensor"),
        ]
        result = build_variables(variables, links, annotations)
        entries = result[0].entries

        assert [type(e) for e in entries] == [Link, Link, Annotation, Annotation]
        assert [e.name for e in entries] == [
            "Temp -> a:b:c:t1",
            "Temp -> a:b:c:t2",
            "unit:Temp",
            "alexa:Temp",
        ]

    def test_annotation_name_is_split_on_first_colon(self) -> None:
        variables = [VariableRecord(name="Temp", item_type="Number")]
        annotations = [AnnotationRecord(name="stateDescription:Temp", value=" ")]
        entry = build_variables(variables, [], annotations)[0].entries[0]

        assert isinstance(entry, Annotation)
        assert entry.namespace == "stateDescription"
        assert entry.variable_name == "Temp"

    def test_annotation_without_namespace_is_fatal(self) -> None:
        with pytest.raises(CatalogError, match="Annotation 'Temp'"):
            build_variables([], [], [AnnotationRecord(name="Temp")])

    def test_link_variable_from_item_name(self) -> None:
        links = [LinkRecord(name="custom", channel_uid="a:b:c:d", item_name="V")]
        result = build_variables([VariableRecord(name="V", item_type="Switch")], links, [])
        assert len(result[0].entries) == 1

    def test_link_without_variable_is_fatal(self) -> None:
        with pytest.raises(CatalogError, match="Link 'custom'"):
            build_variables([], [LinkRecord(name="custom", channel_uid="a:b:c:d")], [])

    def test_entry_properties_use_metadata_mode(self) -> None:
        links = [
            _link("V", "a:b:c:d", properties=[RecordProperty(name="offset", declared_type="Decimal", raw="0,5")])
        ]
        annotations = [
            AnnotationRecord(
                name="homekit:V",
                value="Lighting",
                properties=[RecordProperty(name="inverted", declared_type="Boolean", raw="true")],
            )
        ]
        result = build_variables([VariableRecord(name="V", item_type="Dimmer")], links, annotations)
        entries = result[0].entries

        assert all(value.metadata_mode for entry in entries for value in entry.properties.entries)

    def test_aggregate_fields(self) -> None:
        record = VariableRecord(
            name="gCount",
            item_type="Group",
            base_item_type="Number",
            function_name="COUNT",
            function_params=["Status==1"],
        )
        variable = build_variables([record], [], [])[0]
        assert variable.aggregate_base_type == "Number"
        assert variable.aggregate_function == "COUNT"
        assert variable.aggregate_params == ["Status==1"]

    def test_aggregate_function_dropped_without_base_type(self) -> None:
        record = VariableRecord(name="g", item_type="Group", function_name="OR", function_params=["ON", "OFF"])
        variable = build_variables([record], [], [])[0]
        assert variable.aggregate_function is None
        assert variable.aggregate_params == []

    def test_icon_defaults_to_category(self) -> None:
        record = VariableRecord(name="V", item_type="Switch", category="light")
        variable = build_variables([record], [], [])[0]
        assert variable.category == "light"
        assert variable.icon_name == "light"

    def test_missing_item_type_is_fatal(self) -> None:
        with pytest.raises(CatalogError, match="Variable 'V': missing 'itemType'"):
            build_variables([VariableRecord(name="V", item_type="")], [], [])

    def test_name_filter_applies_to_all_categories(self) -> None:
        variables = [
            VariableRecord(name="Kitchen_Light", item_type="Switch"),
            VariableRecord(name="Bath", item_type="Switch"),
        ]
        links = [_link("Kitchen_Light", "a:b:c:d"), _link("Bath", "a:b:c:e")]
        annotations = [AnnotationRecord(name="alexa:Kitchen_Light", value="Switchable")]

        result = build_variables(variables, links, annotations, "Kitchen")
        assert [v.name for v in result] == ["Kitchen_Light"]
        assert len(result[0].entries) == 2


# ###############
# Whole catalog
# ###############


def test_build_catalog() -> None:
    records = RecordSet(
        devices=[
            _bridge("hue:bridge:b1"),
            _thing("hue:0210:b1:lamp1", bridge_uid="hue:bridge:b1"),
            _thing("acme:switch:dev1"),
        ],
        variables=[VariableRecord(name="Light1", item_type="Switch")],
        links=[_link("Light1", "acme:switch:dev1:power")],
        annotations=[AnnotationRecord(name="alexa:Light1", value="Switchable")],
    )
    catalog = build_catalog(records)

    assert [c.uid for c in catalog.containers] == ["hue:bridge:b1"]
    assert [d.uid for d in catalog.devices] == ["acme:switch:dev1"]
    assert [v.name for v in catalog.variables] == ["Light1"]
    assert len(catalog.variables[0].entries) == 2


def test_build_catalog_invalid_filter() -> None:
    with pytest.raises(CatalogError):
        build_catalog(RecordSet(), "[")
