# Copyright 2021-2024 Nokia

import pytest

from schema_fixtures import foo_module, openconfig_interfaces, openconfig_simple

from yangstruct.classifier import find_mappable_entities, find_root_entries
from yangstruct.config import CompressBehaviour
from yangstruct.directory import Directory, find_all_children, find_map_paths
from yangstruct.exceptions import NameCollisionError
from yangstruct.fakeroot import create_fake_root, is_fake_root, make_fake_root
from yangstruct.schema import container, leaf, module


def classified(*modules, compress=True):
    dirs, enums = {}, {}
    for m in modules:
        find_mappable_entities(m, dirs, enums, [], compress, list(modules), False)
    return dirs


def test_make_fake_root():
    root = make_fake_root("device")
    assert is_fake_root(root)
    assert root.path() == "/device"
    assert not is_fake_root(container(module("m"), "device"))
    assert not is_fake_root(None)


def test_root_holds_top_level_directories():
    m = openconfig_simple()
    dirs = classified(m)
    root = create_fake_root(dirs, [])
    assert dirs["/device"] is root
    assert [c.name for c in root.children] == ["parent", "remote-container"]
    # the schema parent is kept
    assert root.children[0].parent is m


def test_root_fields_and_paths():
    dirs = classified(openconfig_simple())
    root = create_fake_root(dirs, [])
    d = Directory("Device", root)
    assert d.is_fake_root
    assert d.path == ["", "device"]
    d.fields, d.shadowed_fields, errs = find_all_children(root, CompressBehaviour.PREFER_INTENDED_CONFIG)
    assert errs == []
    assert list(d.fields) == ["parent", "remote-container"]
    assert find_map_paths(d, "parent", compress=True) == ([["parent"]], [["openconfig-simple"]])


def test_compressed_list_in_surrounding_container():
    dirs = classified(openconfig_interfaces())
    root = create_fake_root(dirs, [], compress=True)
    assert [c.name for c in root.children] == ["interface"]


def test_uncompressed_keeps_surrounding_container():
    dirs = classified(openconfig_interfaces(), compress=False)
    root = create_fake_root(dirs, [], compress=False)
    assert [c.name for c in root.children] == ["interfaces"]


def test_root_leaves():
    m = module("system")
    hostname = leaf(m, "hostname", "string")
    container(m, "clock")
    dirs = classified(m)
    root = create_fake_root(dirs, find_root_entries([m]), root_name="target")
    assert root.path() == "/target"
    assert [c.name for c in root.children] == ["clock", "hostname"]
    assert root.child("hostname") is hostname


def test_default_root_name():
    dirs = classified(openconfig_simple())
    assert create_fake_root(dirs, [], root_name="").name == "device"


def test_overlapping_root_entries():
    dirs = classified(foo_module("a"), foo_module("b"))
    with pytest.raises(NameCollisionError, match="duplicate entry foo at the root"):
        create_fake_root(dirs, [])


def test_clash_with_existing_entity():
    m = module("m")
    dirs = {"/device": container(m, "device")}
    with pytest.raises(NameCollisionError, match="fake root device clashes with existing entity"):
        create_fake_root(dirs, [])
