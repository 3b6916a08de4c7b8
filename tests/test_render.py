# Copyright 2021-2024 Nokia

import json

import pytest

from runtime_fixtures import Bundle, Device, E_Child_Three, Interface, Neighbor, Parent, Parent_Child, device

from yangstruct.exceptions import InvalidPathError, JsonEncodeError, MergeError, ValidationError
from yangstruct.render import (EmitJSONConfig, JSONFormat, RFC7951JSONConfig, construct_ietf_json,
                               construct_internal_json, emit_json, merge_json, merge_struct_json,
                               struct_tag_to_lib_paths)
from yangstruct.singleton import Empty
from yangstruct.wrappers import GoStruct, Leaf, UnionValue

RFC7951 = EmitJSONConfig(format=JSONFormat.RFC7951)


def test_struct_tag_to_lib_paths():
    assert struct_tag_to_lib_paths(Interface.field("Name")) == [["config", "name"], ["name"]]
    assert struct_tag_to_lib_paths(Parent_Child.field("One"), prefer_shadow=True) == [["state", "one"]]
    assert struct_tag_to_lib_paths(Parent_Child.field("Two"), prefer_shadow=True) == [["state", "two"]]
    assert struct_tag_to_lib_paths(Leaf("/a/b")) == [["a", "b"]]


@pytest.mark.parametrize("path", ["", None])
def test_empty_path_tag(path):
    with pytest.raises(InvalidPathError, match="field did not specify a path"):
        struct_tag_to_lib_paths(Leaf(path))


def test_invalid_path_tag():
    with pytest.raises(InvalidPathError, match="invalid path"):
        struct_tag_to_lib_paths(Leaf("a//b"))


def test_internal_json():
    assert construct_internal_json(device()) == {
        "interfaces": {
            "interface": {
                "eth0": {"config": {"mtu": 1500, "name": "eth0"}, "name": "eth0",
                         "state": {"counters": {"in-octets": 42}}},
                "eth1": {"config": {"description": "uplink", "name": "eth1"}, "name": "eth1"},
            },
        },
        "parent": {"child": {"config": {"one": "foo", "three": "ONE"}}},
    }


def test_ietf_json():
    d = device()
    d.Interface["eth0"].VlanId = 10
    assert construct_ietf_json(d) == {
        "openconfig-interfaces:interfaces": {
            "interface": [
                {"config": {"mtu": 1500, "name": "eth0", "openconfig-vlan:vlan-id": 10}, "name": "eth0",
                 "state": {"counters": {"in-octets": "42"}}},
                {"config": {"description": "uplink", "name": "eth1"}, "name": "eth1"},
            ],
        },
        "openconfig-simple:parent": {"child": {"config": {"one": "foo", "three": "ONE"}}},
    }


def test_ietf_json_module_of_nested_struct():
    assert construct_ietf_json(Parent(Child=Parent_Child(One="x"))) == {
        "openconfig-simple:child": {"config": {"one": "x"}},
    }


def test_ietf_json_options():
    p = Parent(Child=Parent_Child(One="x", Two="y", Three=E_Child_Three.TWO))
    cfg = RFC7951JSONConfig(append_module_name=True, prefer_shadow_path=True)
    assert construct_ietf_json(p, cfg) == {
        "openconfig-simple:child": {"state": {"one": "x", "three": "openconfig-simple:TWO", "two": "y"}},
    }


def test_multi_key_list():
    d = Device(Neighbor={("10.0.0.1", 179): Neighbor(Address="10.0.0.1", Port=179)})
    assert construct_internal_json(d) == {
        "neighbors": {"neighbor": {"10.0.0.1 179": {"address": "10.0.0.1", "port": 179}}},
    }
    assert construct_ietf_json(d) == {
        "test-bgp:neighbors": {"neighbor": [{"address": "10.0.0.1", "port": 179}]},
    }


def test_scalar_encodings():
    b = Bundle(Counter=7, Flag=Empty, Tags=["a", "b"], Value=UnionValue.int64(5), Notes=["not rendered"],
               Members=[Parent_Child(Four=b"\x00\x01")])
    assert construct_internal_json(b) == {
        "counter": 7,
        "flag": True,
        "members": {"member": [{"config": {"four": "AAE="}}]},
        "tags": ["a", "b"],
        "value": 5,
    }
    assert construct_ietf_json(b) == {
        "test-bundle:counter": "7",
        "test-bundle:flag": [None],
        "test-bundle:members": {"member": [{"openconfig-simple:config": {"four": "AAE="}}]},
        "test-bundle:tags": ["a", "b"],
        "test-bundle:value": "5",
    }


@pytest.mark.parametrize("value, internal, ietf", [
    (UnionValue.string("auto"), "auto", "auto"),
    (UnionValue.uint64(2 ** 63), 2 ** 63, str(2 ** 63)),
    (UnionValue.boolean(False), False, False),
    (UnionValue.empty(), True, [None]),
    (UnionValue.enum(E_Child_Three.TWO), "TWO", "TWO"),
    (E_Child_Three.ONE, "ONE", "ONE"),
])
def test_union_encodings(value, internal, ietf):
    b = Bundle(Value=value)
    assert construct_internal_json(b) == {"value": internal}
    assert construct_ietf_json(b) == {"test-bundle:value": ietf}


def test_empty_struct():
    assert construct_internal_json(Device()) == {}
    assert construct_internal_json(Device(Parent=Parent(Child=Parent_Child()))) == {}


def test_path_conflict():
    class Conflict(GoStruct):
        A = Leaf("a")
        B = Leaf("a/b")

    with pytest.raises(JsonEncodeError, match="ConstructInternalJSON error: path element a"):
        construct_internal_json(Conflict(A="x", B="y"))


def test_missing_path():
    class NoPath(GoStruct):
        X = Leaf()

    with pytest.raises(JsonEncodeError, match="X: field did not specify a path"):
        construct_internal_json(NoPath(X="a"))
    with pytest.raises(JsonEncodeError, match="ConstructIETFJSON error"):
        construct_ietf_json(NoPath(X="a"))


def test_emit_json():
    text = emit_json(device())
    assert json.loads(text) == construct_internal_json(device())
    assert text.startswith('{\n  "interfaces"')
    assert json.loads(emit_json(device(), RFC7951)) == construct_ietf_json(device())


def test_emit_json_escape_html():
    d = Device(Interface={"eth0": Interface(Name="eth0", Description="<b>&")})
    text = emit_json(d, EmitJSONConfig(escape_html=True))
    assert "\\u003cb\\u003e\\u0026" in text
    assert "<" not in text
    assert json.loads(text)["interfaces"]["interface"]["eth0"]["config"]["description"] == "<b>&"
    assert "<b>&" in emit_json(d)


def test_emit_json_validation():
    class Strict(Parent_Child):
        def validate(self):
            if self.One is None:
                raise ValidationError("one is mandatory")

    with pytest.raises(ValidationError, match="validation err: one is mandatory"):
        emit_json(Strict())
    assert json.loads(emit_json(Strict(), EmitJSONConfig(skip_validation=True))) == {}
    assert json.loads(emit_json(Strict(One="x"))) == {"config": {"one": "x"}}


def test_merge_json():
    a = {"a": {"b": 1}, "l": [1], "s": "x"}
    b = {"a": {"c": 2}, "l": [2], "s": "x"}
    assert merge_json(a, b) == {"a": {"b": 1, "c": 2}, "l": [1, 2], "s": "x"}
    assert a == {"a": {"b": 1}, "l": [1], "s": "x"}


def test_merge_json_conflicts():
    with pytest.raises(MergeError, match="unmergeable JSON values at 's'"):
        merge_json({"s": "x"}, {"s": "y"})
    with pytest.raises(MergeError, match="different types at 'a'"):
        merge_json({"a": {}}, {"a": 1})
    with pytest.raises(MergeError, match="requires two JSON objects"):
        merge_json([], {})


def test_merge_struct_json():
    res = merge_struct_json(Parent(Child=Parent_Child(One="x")), {"other": {"leaf": 1}})
    assert res == {"other": {"leaf": 1}, "child": {"config": {"one": "x"}}}
    res = merge_struct_json(Parent(Child=Parent_Child(One="x")), {"openconfig-simple:child": {"state": {"two": "y"}}},
                            RFC7951)
    assert res == {"openconfig-simple:child": {"config": {"one": "x"}, "state": {"two": "y"}}}


@pytest.mark.parametrize("config", [EmitJSONConfig(), RFC7951])
def test_emitted_json_merges_into_empty_object(config):
    b = Bundle(Counter=1, Tags=["a"], Members=[Parent_Child(One="m")])
    doc = json.loads(emit_json(b, config))
    assert merge_json({}, doc) == doc


def test_union_leaf_list():
    b = Bundle(Values=[UnionValue.string("a"), UnionValue.uint64(1), E_Child_Three.TWO])
    assert construct_internal_json(b) == {"values": ["a", 1, "TWO"]}
    assert construct_ietf_json(b) == {"test-bundle:values": ["a", "1", "TWO"]}


def test_merge_json_result_shares_nothing_with_inputs():
    a = {"a": {"b": [1]}}
    b = {"c": {"d": 1}}
    res = merge_json(a, b)
    res["a"]["b"].append(2)
    res["c"]["d"] = 2
    assert a == {"a": {"b": [1]}}
    assert b == {"c": {"d": 1}}
