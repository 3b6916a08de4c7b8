# Copyright 2021-2024 Nokia

from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple

from .errors import *


class MappedUnionSubtype:
    """Per-subtype information of a union.  ``enumerated_yang_type_key`` is
    the registry key of the subtype when it is an enumerated type."""
    __slots__ = ("enumerated_yang_type_key",)

    def __init__(self, enumerated_yang_type_key: str = ""):
        self.enumerated_yang_type_key = enumerated_yang_type_key

    def __eq__(self, other):
        return isinstance(other, MappedUnionSubtype) and self.enumerated_yang_type_key == other.enumerated_yang_type_key

    def __repr__(self):
        return f"MappedUnionSubtype({self.enumerated_yang_type_key!r})"


class MappedType:
    """Resolved native type of a YANG leaf.

    ``union_types`` maps the native name of each union member to its
    discriminant index, assigned in sorted name order.  It is ``None`` for
    every type that is not a multi-type union.
    """
    __slots__ = (
        "native_type",
        "is_enumerated_value",
        "union_types",
        "union_type_infos",
        "enumerated_yang_type_key",
        "zero_value",
        "default_value",
    )

    def __init__(self, native_type: str = "", *, is_enumerated_value=False, union_types: Optional[Dict[str, int]] = None,
                 union_type_infos: Optional[Dict[str, MappedUnionSubtype]] = None, enumerated_yang_type_key: str = "",
                 zero_value: str = "", default_value: Optional[str] = None):
        self.native_type = native_type
        self.is_enumerated_value = is_enumerated_value
        self.union_types = union_types
        self.union_type_infos = union_type_infos
        self.enumerated_yang_type_key = enumerated_yang_type_key
        self.zero_value = zero_value
        self.default_value = default_value

    def is_union(self) -> bool:
        return bool(self.union_types)

    def _key(self):
        return tuple(getattr(self, s) for s in self.__slots__)

    def __eq__(self, other):
        return isinstance(other, MappedType) and self._key() == other._key()

    def __repr__(self):
        args = [repr(self.native_type)]
        for s in self.__slots__[1:]:
            v = getattr(self, s)
            if v:
                args.append(f"{s}={v!r}")
        return f"MappedType({', '.join(args)})"

    def as_dict(self):
        res = {"native_type": self.native_type}
        if self.is_enumerated_value:
            res["is_enumerated_value"] = True
        if self.enumerated_yang_type_key:
            res["enumerated_yang_type_key"] = self.enumerated_yang_type_key
        if self.union_types:
            res["union_types"] = dict(sorted(self.union_types.items(), key=lambda kv: kv[1]))
            res["union_type_infos"] = {k: v.enumerated_yang_type_key for k, v in sorted(self.union_type_infos.items())}
        if self.zero_value:
            res["zero_value"] = self.zero_value
        if self.default_value is not None:
            res["default_value"] = self.default_value
        return res


def sorted_union_types(members: Dict[str, MappedType]) -> Tuple[Dict[str, int], Dict[str, MappedUnionSubtype]]:
    """Build the discriminant table of a union from its distinct members."""
    names = sorted(members)
    union_types = {n: i for i, n in enumerate(names)}
    infos = {n: MappedUnionSubtype(members[n].enumerated_yang_type_key) for n in names}
    return union_types, infos


class LangMapper(ABC):
    """Interface implemented by each target language to name directories and
    fields and to map YANG types onto native types."""

    def __init__(self):
        self.enum_set = None
        self.schema_tree = None

    def set_enum_set(self, enum_set):
        self.enum_set = enum_set

    def set_schema_tree(self, schema_tree):
        self.schema_tree = schema_tree

    @abstractmethod
    def directory_name(self, node, compress_behaviour) -> str:
        pass

    @abstractmethod
    def field_name(self, node) -> str:
        pass

    @abstractmethod
    def leaf_type(self, node, opts) -> MappedType:
        pass

    @abstractmethod
    def key_leaf_type(self, node, opts) -> MappedType:
        pass

    def package_name(self, node, compress_behaviour, nested_messages: bool) -> str:
        return ""

    @abstractmethod
    def binary_types(self) -> Tuple[str, ...]:
        """Native types that cannot be used as keys of a keyed list."""
        pass

    def resolve_leafref(self, node, yang_type):
        if self.schema_tree is None:
            raise make_exception(yangstruct_err_leafref_without_tree, path=yang_type.path, context=node.path())
        return self.schema_tree.resolve_leafref_target(yang_type.path, node)
