# Copyright 2021-2024 Nokia

import pytest

from schema_fixtures import interface_type, openconfig_interfaces, openconfig_simple

from yangstruct.config import CompressBehaviour, IROptions, ProtoOpts, TransformationOpts
from yangstruct.enum_registry import EnumSet
from yangstruct.exceptions import ModelProcessingError
from yangstruct.mapped_type import MappedType
from yangstruct.proto_mapper import ProtoLangMapper
from yangstruct.schema import container, leaf, module, yang_list
from yangstruct.schema_tree import SchemaTree
from yangstruct.yang_type import Bits, PrimitiveType, YangUnion

COMPRESS = CompressBehaviour.PREFER_INTENDED_CONFIG


def proto_mapper(*modules, compress=True):
    behaviour = COMPRESS if compress else CompressBehaviour.UNCOMPRESSED
    opts = IROptions(transformation_options=TransformationOpts(compress_behaviour=behaviour))
    mapper = ProtoLangMapper()
    mapper.set_enum_set(EnumSet.from_options(opts))
    mapper.set_schema_tree(SchemaTree(modules))
    return mapper, opts


def test_from_options():
    mapper = ProtoLangMapper.from_options(ProtoOpts(package_name="oc", enum_package_name="types"))
    assert mapper.enum_prefix == "oc.types."


def test_message_names_and_packages():
    m = openconfig_simple()
    mapper, _ = proto_mapper(m)
    parent = m.child("parent")
    child = parent.child("child")
    assert mapper.directory_name(parent, COMPRESS) == "Parent"
    assert mapper.directory_name(child, COMPRESS) == "Child"
    assert mapper.directory_name(m.child("remote-container"), COMPRESS) == "RemoteContainer"
    assert mapper.package_name(parent, COMPRESS, False) == "openconfig_simple"
    assert mapper.package_name(child, COMPRESS, False) == "openconfig_simple.parent"


def test_nested_messages_share_the_top_level_package():
    m = openconfig_simple()
    mapper, _ = proto_mapper(m)
    child = m.child("parent").child("child")
    assert mapper.package_name(m.child("parent"), COMPRESS, True) == ""
    assert mapper.package_name(child, COMPRESS, True) == "openconfig_simple"


def test_list_package_skips_surrounding_container():
    m = openconfig_interfaces()
    mapper, _ = proto_mapper(m)
    interface = m.child("interfaces").child("interface")
    assert mapper.directory_name(interface, COMPRESS) == "Interface"
    assert mapper.package_name(interface, COMPRESS, False) == "openconfig_interfaces"
    subinterface = interface.child("subinterfaces").child("subinterface")
    assert mapper.package_name(subinterface, COMPRESS, False) == "openconfig_interfaces.interface"


def test_message_names_are_unique_per_package():
    m = module("m")
    a = container(m, "a")
    b = container(m, "b")
    x_in_a, x_in_b = container(a, "x"), container(b, "x")
    y, y2 = container(m, "y"), container(container(m, "z"), "y")
    mapper, _ = proto_mapper(m)
    assert mapper.directory_name(x_in_a, COMPRESS) == "X"
    assert mapper.directory_name(x_in_b, COMPRESS) == "X"
    assert mapper.directory_name(y, COMPRESS) == "Y"
    assert mapper.directory_name(y2, COMPRESS) == "Y"
    assert mapper.package_name(x_in_a, COMPRESS, False) == "m.a"
    assert mapper.package_name(x_in_b, COMPRESS, False) == "m.b"


def test_module_has_no_package():
    m = openconfig_simple()
    mapper, _ = proto_mapper(m)
    with pytest.raises(ModelProcessingError, match="protobuf messages are not generated for modules"):
        mapper.package_name(m, COMPRESS, False)


def test_leaf_types():
    m = openconfig_simple()
    mapper, opts = proto_mapper(m)
    cfg = m.child("parent").child("child").child("config")
    assert mapper.leaf_type(cfg.child("four"), opts) == MappedType("ywrapper.BytesValue")
    assert mapper.leaf_type(cfg.child("one"), opts) == MappedType("ywrapper.StringValue")
    three = mapper.leaf_type(cfg.child("three"), opts)
    assert three.native_type == "Three"
    assert three.is_enumerated_value
    assert three.enumerated_yang_type_key == "openconfig-simple:/openconfig-simple/child-config/three"


def test_identity_leaf():
    m = module("m")
    node = leaf(container(m, "c"), "type", interface_type())
    mapper, opts = proto_mapper(m)
    assert mapper.leaf_type(node, opts).native_type == "openconfig.enums.IetfInterfacesInterfaceType"


def test_key_types_are_scalar():
    m = openconfig_interfaces()
    mapper, opts = proto_mapper(m)
    interface = m.child("interfaces").child("interface")
    assert mapper.key_leaf_type(interface.child("name"), opts) == MappedType("string")
    subinterface = interface.child("subinterfaces").child("subinterface")
    assert mapper.key_leaf_type(subinterface.child("index"), opts) == MappedType("uint64")
    assert "bytes" in mapper.binary_types()


def test_invalid_key_type():
    m = module("m")
    items = yang_list(m, "item", keys="flags")
    key = leaf(items, "flags", Bits({"a"}))
    mapper, opts = proto_mapper(m)
    with pytest.raises(ModelProcessingError, match="did not have a valid proto type"):
        mapper.key_leaf_type(key, opts)


def test_union_of_scalars():
    m = module("m")
    node = leaf(container(m, "c"), "val", YangUnion([PrimitiveType("string"), PrimitiveType("int32")]))
    mapper, opts = proto_mapper(m)
    t = mapper.leaf_type(node, opts)
    assert t.native_type == ""
    assert t.union_types == {"sint64": 0, "string": 1}


def test_single_type_union():
    m = module("m")
    node = leaf(container(m, "c"), "val", YangUnion([PrimitiveType("uint8"), PrimitiveType("uint32")]))
    mapper, opts = proto_mapper(m)
    assert mapper.leaf_type(node, opts) == MappedType("ywrapper.UintValue")
    assert mapper.key_leaf_type(node, opts) == MappedType("uint64")
