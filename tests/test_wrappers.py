# Copyright 2021-2024 Nokia

import pytest

from runtime_fixtures import Device, E_Child_Three, E_Partial, Interface, Parent_Child

from yangstruct.exceptions import YangStructError
from yangstruct.singleton import Empty
from yangstruct.wrappers import EnumDefinition, FieldKind, GoEnum, GoStruct, Leaf, UnionKind, UnionValue


def test_unset_fields_read_as_defaults():
    c = Parent_Child()
    assert c.One is None
    assert c.Three is E_Child_Three.UNSET
    assert Device().Interface is None


def test_keyword_construction():
    i = Interface(Name="eth0", Mtu=1500)
    assert (i.Name, i.Mtu) == ("eth0", 1500)
    with pytest.raises(YangStructError, match="Interface does not have a field named Speed"):
        Interface(Speed=100)


def test_delete_field():
    i = Interface(Name="eth0")
    del i.Name
    assert i.Name is None


def test_fields():
    assert [f.name for f in Parent_Child.fields()] == ["Four", "One", "Three", "Two"]
    f = Device.field("Interface")
    assert f.kind is FieldKind.KEYED_LIST
    assert f.keys == ("name",)
    assert f.struct_type is Interface
    with pytest.raises(YangStructError):
        Device.field("Missing")


def test_inherited_fields():
    class Extended(Parent_Child):
        Five = Leaf("config/five")

    assert [f.name for f in Extended.fields()] == ["Four", "One", "Three", "Two", "Five"]
    assert Extended(Five="x").Five == "x"


def test_fake_root_marker():
    assert Device.is_fake_root()
    assert not Interface.is_fake_root()


def test_equality_and_repr():
    assert Interface(Name="eth0") == Interface(Name="eth0")
    assert Interface(Name="eth0") != Interface(Name="eth1")
    assert Interface(Name="eth0") != Parent_Child()
    assert repr(Interface(Name="eth0", Mtu=9000)) == "Interface(Mtu=9000, Name='eth0')"
    assert repr(Parent_Child()) == "Parent_Child()"


def test_validate_hook_default():
    assert Interface().validate() is None


def test_enum_names():
    assert E_Child_Three.ONE.enum_name() == "ONE"
    assert E_Child_Three.UNSET.enum_name() == ""
    assert E_Child_Three.TWO.definition() == EnumDefinition("TWO", "openconfig-simple")
    with pytest.raises(YangStructError, match="out-of-range E_Partial enum value: 2"):
        E_Partial.MISSING.enum_name()


def test_default_yang_map():
    class E_Speed(GoEnum):
        UNSET = 0
        SPEED_10GB = 1

    assert E_Speed.yang_map() == {1: EnumDefinition("SPEED_10GB")}
    assert E_Speed.SPEED_10GB.enum_name() == "SPEED_10GB"


def test_union_values():
    assert UnionValue.int64(5) == UnionValue(UnionKind.INT64, 5)
    assert UnionValue.int64(5) != UnionValue.uint64(5)
    assert UnionValue.enum(E_Child_Three.ONE) != UnionValue.enum(E_Partial.KNOWN)
    assert UnionValue.enum(E_Child_Three.ONE) == UnionValue.enum(E_Child_Three.ONE)
    assert UnionValue.empty().value is Empty
    assert repr(UnionValue.empty()) == "UnionValue.empty()"
    assert repr(UnionValue.string("a")) == "UnionValue(STRING, 'a')"
    assert UnionValue.enum(E_Child_Three.ONE).value is E_Child_Three.ONE


def test_struct_subclass_without_fields():
    class Bare(GoStruct):
        pass

    assert Bare.fields() == []
    assert Bare() == Bare()
