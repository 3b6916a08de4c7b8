# Copyright 2021-2024 Nokia

import pytest

from schema_fixtures import binary_key_module, openconfig_interfaces, openconfig_simple

from yangstruct.classifier import find_mappable_entities
from yangstruct.config import CompressBehaviour, IROptions, TransformationOpts
from yangstruct.directory import (ListKey, build_directories, find_all_children, find_map_paths,
                                  find_schema_path)
from yangstruct.enum_registry import EnumSet
from yangstruct.exceptions import SchemaErrors, YangStructError
from yangstruct.go_mapper import GoLangMapper
from yangstruct.mapped_type import MappedType
from yangstruct.schema import container, leaf, module, yang_list
from yangstruct.schema_tree import SchemaTree
from yangstruct.yang_type import PrimitiveType, YangUnion

INTERFACE = "/openconfig-interfaces/interfaces/interface"


def build(m, behaviour=CompressBehaviour.PREFER_INTENDED_CONFIG):
    dir_nodes, enum_nodes = {}, {}
    find_mappable_entities(m, dir_nodes, enum_nodes, [], behaviour.compress_enabled(), [m], behaviour.state_excluded())
    opts = IROptions(transformation_options=TransformationOpts(compress_behaviour=behaviour))
    mapper = GoLangMapper()
    mapper.set_enum_set(EnumSet.from_options(opts))
    mapper.set_schema_tree(SchemaTree([m]))
    return build_directories(dir_nodes, behaviour, mapper, opts)


def test_prefer_intended_config():
    dirs, _ = build(openconfig_simple())
    d = dirs["/openconfig-simple/parent/child"]
    assert d.name == "Parent_Child"
    assert list(d.fields) == ["four", "one", "three", "two"]
    assert list(d.shadowed_fields) == ["four", "one", "three"]
    assert d.fields["one"].parent.name == "config"
    assert d.fields["two"].parent.name == "state"
    assert d.shadowed_fields["one"].parent.name == "state"


def test_prefer_operational_state():
    dirs, _ = build(openconfig_simple(), CompressBehaviour.PREFER_OPERATIONAL_STATE)
    d = dirs["/openconfig-simple/parent/child"]
    assert list(d.fields) == ["four", "one", "three", "two"]
    assert {f.parent.name for f in d.fields.values()} == {"state"}
    assert {f.parent.name for f in d.shadowed_fields.values()} == {"config"}


def test_exclude_derived_state():
    dirs, _ = build(openconfig_simple(), CompressBehaviour.EXCLUDE_DERIVED_STATE)
    d = dirs["/openconfig-simple/parent/child"]
    assert list(d.fields) == ["four", "one", "three"]
    assert d.shadowed_fields == {}


def test_uncompressed_fields_are_containers():
    dirs, leaf_types = build(openconfig_simple(), CompressBehaviour.UNCOMPRESSED)
    d = dirs["/openconfig-simple/parent/child"]
    assert d.name == "OpenconfigSimple_Parent_Child"
    assert list(d.fields) == ["config", "state"]
    assert leaf_types["/openconfig-simple/parent/child"] == {"config": None, "state": None}
    assert dirs["/openconfig-simple/parent/child/state"].list_keys is None


def test_list_fields_and_keys():
    dirs, leaf_types = build(openconfig_interfaces())
    d = dirs[INTERFACE]
    assert d.name == "Interface"
    assert d.is_list()
    assert d.path == ["", "openconfig-interfaces", "interfaces", "interface"]
    assert list(d.fields) == ["counters", "enabled", "mtu", "name", "subinterface", "type"]
    assert d.fields["name"].parent.name == "config"
    assert d.list_keys == {"name": ListKey("name", MappedType("string", zero_value='""'))}
    assert leaf_types[INTERFACE]["counters"] is None
    assert leaf_types[INTERFACE]["mtu"].native_type == "uint16"
    sub = dirs[INTERFACE + "/subinterfaces/subinterface"]
    assert sub.list_keys["index"].lang_type.native_type == "uint32"


def test_schema_paths():
    dirs, _ = build(openconfig_interfaces())
    d = dirs[INTERFACE]
    assert find_schema_path(d, "mtu") == ["config", "mtu"]
    assert find_schema_path(d, "mtu", shadow=True) == ["state", "mtu"]
    assert find_schema_path(d, "mtu", absolute=True) == ["", "interfaces", "interface", "config", "mtu"]
    assert find_schema_path(d, "counters", shadow=True) is None
    with pytest.raises(YangStructError, match="Interface does not have a field named speed"):
        find_schema_path(d, "speed")


def test_list_key_map_paths():
    dirs, _ = build(openconfig_interfaces())
    d = dirs[INTERFACE]
    paths, modules = find_map_paths(d, "name", compress=True)
    assert paths == [["config", "name"], ["name"]]
    assert modules == [["openconfig-interfaces", "openconfig-interfaces"], ["openconfig-interfaces"]]
    assert find_map_paths(d, "mtu", compress=True)[0] == [["config", "mtu"]]
    assert find_map_paths(d, "name", compress=True, shadow=True)[0] == [["state", "name"], ["name"]]


def test_absolute_map_paths():
    dirs, _ = build(openconfig_interfaces())
    d = dirs[INTERFACE]
    paths, modules = find_map_paths(d, "name", compress=True, absolute=True)
    assert paths == [
        ["", "interfaces", "interface", "config", "name"],
        ["", "interfaces", "interface", "name"],
    ]
    assert modules[0] == [""] + ["openconfig-interfaces"] * 4
    assert modules[1] == [""] + ["openconfig-interfaces"] * 3


def test_shadow_map_paths_of_unshadowed_field():
    dirs, _ = build(openconfig_interfaces())
    assert find_map_paths(dirs[INTERFACE], "counters", compress=True, shadow=True) == ([], [])


def multi_key_module():
    m = module("multi-keys")
    items = yang_list(m, "item", keys="name id")
    leaf(items, "name", "string")
    leaf(items, "id", "binary")
    return m


def union_key_module(*member_types):
    m = module("union-keys")
    items = yang_list(m, "item", keys="id")
    leaf(items, "id", YangUnion([PrimitiveType(t) for t in member_types]))
    return m


@pytest.mark.parametrize("m", [
    binary_key_module(),
    multi_key_module(),
    union_key_module("binary"),
    union_key_module("binary", "string"),
])
def test_binary_key(m):
    with pytest.raises(SchemaErrors, match="has binary key id") as exc:
        build(m)
    assert len(exc.value.errors) == 1


def test_missing_key():
    m = module("m")
    items = yang_list(m, "item", keys="id")
    leaf(items, "value", "string")
    with pytest.raises(SchemaErrors, match="names key id which is not a child"):
        build(m)


def test_duplicate_field_after_compression():
    m = module("m")
    top = container(m, "top")
    leaf(top, "item", "string")
    items = container(top, "items")
    leaf(yang_list(items, "item", keys="id"), "id", "string")
    fields, _, errs = find_all_children(top, CompressBehaviour.PREFER_INTENDED_CONFIG)
    assert list(fields) == ["item"]
    assert len(errs) == 1
    assert "item was a duplicate element in /m/top" in str(errs[0])
