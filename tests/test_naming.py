# Copyright 2021-2024 Nokia

import pytest

from yangstruct.naming import (camel_case, enum_value_name, join_name, make_name_unique,
                               safe_proto_identifier_name, trim_org_prefixes)


@pytest.mark.parametrize("name, expected", [
    ("openconfig-simple", "OpenconfigSimple"),
    ("remote-container", "RemoteContainer"),
    ("a_leaf", "A_leaf"),
    ("ten.gig-eth", "TenGigEth"),
    ("Already", "Already"),
])
def test_camel_case(name, expected):
    assert camel_case(name) == expected


def test_make_name_unique__numeric_suffix():
    """Repeated names get the lowest free numeric suffix."""
    defined = set()
    assert make_name_unique("Child", defined) == "Child"
    assert make_name_unique("Child", defined) == "Child_1"
    assert make_name_unique("Child", defined) == "Child_2"
    assert defined == {"Child", "Child_1", "Child_2"}


def test_make_name_unique__skips_taken_suffix():
    defined = {"Child", "Child_1"}
    assert make_name_unique("Child", defined) == "Child_2"


def test_safe_proto_identifier_name():
    assert safe_proto_identifier_name("openconfig-simple") == "openconfig_simple"
    assert safe_proto_identifier_name("a.b:c") == "a_b_c"


def test_trim_org_prefixes():
    assert trim_org_prefixes("openconfig-types", ["ietf", "openconfig"]) == "types"
    assert trim_org_prefixes("openconfig-types", ["open"]) == "openconfig-types"
    assert trim_org_prefixes("iana-if-type", []) == "iana-if-type"


def test_join_name():
    assert join_name(["Child", "", "Three"]) == "Child_Three"
    assert join_name(["Child", "Three"], use_underscores=False) == "ChildThree"


@pytest.mark.parametrize("name, expected", [
    ("ten-gig.eth", "TEN_GIG_ETH"),
    ("ONE", "ONE"),
    ("1g", "_1G"),
])
def test_enum_value_name(name, expected):
    assert enum_value_name(name) == expected
