# Copyright 2021-2024 Nokia

"""Structs in the shape the code emitters produce, used by the runtime
tests."""

from yangstruct.wrappers import (Annotation, Container, EnumDefinition, EnumLeaf, GoEnum, GoStruct, KeyedList,
                                 Leaf, LeafList, UnionLeaf, UnkeyedList)

OC_SIMPLE = "openconfig-simple"
OC_IF = "openconfig-interfaces"


class E_Child_Three(GoEnum):
    UNSET = 0
    ONE = 1
    TWO = 2

    @classmethod
    def yang_map(cls):
        return {
            1: EnumDefinition("ONE", OC_SIMPLE),
            2: EnumDefinition("TWO", OC_SIMPLE),
        }


class E_Partial(GoEnum):
    UNSET = 0
    KNOWN = 1
    MISSING = 2

    @classmethod
    def yang_map(cls):
        return {1: EnumDefinition("known")}


class Parent_Child(GoStruct):
    Four = Leaf("config/four", shadow_path="state/four", module=f"{OC_SIMPLE}/{OC_SIMPLE}",
                shadow_module=f"{OC_SIMPLE}/{OC_SIMPLE}", yang_type="binary")
    One = Leaf("config/one", shadow_path="state/one", module=f"{OC_SIMPLE}/{OC_SIMPLE}",
               shadow_module=f"{OC_SIMPLE}/{OC_SIMPLE}")
    Three = EnumLeaf(E_Child_Three, "config/three", shadow_path="state/three", module=f"{OC_SIMPLE}/{OC_SIMPLE}",
                     shadow_module=f"{OC_SIMPLE}/{OC_SIMPLE}")
    Two = Leaf("state/two", module=f"{OC_SIMPLE}/{OC_SIMPLE}")


class Parent(GoStruct):
    Child = Container(Parent_Child, "child", module=OC_SIMPLE)


class Interface(GoStruct):
    Description = Leaf("config/description", module=f"{OC_IF}/{OC_IF}")
    InOctets = Leaf("state/counters/in-octets", module=f"{OC_IF}/{OC_IF}/{OC_IF}", yang_type="uint64")
    Mtu = Leaf("config/mtu", module=f"{OC_IF}/{OC_IF}")
    Name = Leaf("config/name|name", module=f"{OC_IF}/{OC_IF}|{OC_IF}")
    VlanId = Leaf("config/vlan-id", module=f"{OC_IF}/openconfig-vlan")


class Neighbor(GoStruct):
    Address = Leaf("address", module="test-bgp")
    Port = Leaf("port", module="test-bgp")


class Bundle(GoStruct):
    Counter = Leaf("counter", module="test-bundle", yang_type="int64")
    Flag = Leaf("flag", module="test-bundle", yang_type="empty")
    Members = UnkeyedList(Parent_Child, "members/member", module="test-bundle/test-bundle")
    Notes = Annotation()
    Tags = LeafList("tags", module="test-bundle")
    Value = UnionLeaf("value", module="test-bundle")
    Values = LeafList("values", module="test-bundle")


class Device(GoStruct):
    FAKE_ROOT = True

    Interface = KeyedList(Interface, ["name"], "interfaces/interface", module=f"{OC_IF}/{OC_IF}")
    Neighbor = KeyedList(Neighbor, ["address", "port"], "neighbors/neighbor", module="test-bgp/test-bgp")
    Parent = Container(Parent, "parent", module=OC_SIMPLE)


def device():
    """Device with two interfaces and the simple container tree set."""
    d = Device()
    d.Interface = {
        "eth0": Interface(Name="eth0", Mtu=1500, InOctets=42),
        "eth1": Interface(Name="eth1", Description="uplink"),
    }
    d.Parent = Parent(Child=Parent_Child(One="foo", Three=E_Child_Three.ONE))
    return d
