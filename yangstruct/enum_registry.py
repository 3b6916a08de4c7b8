# Copyright 2021-2024 Nokia

import logging
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from .errors import *
from .identifier import Identifier
from .naming import camel_case, join_name, make_name_unique, trim_org_prefixes
from .schema import SchemaNode
from .yang_type import (Enumeration, IdentityRef, Typedef, YangUnion,
                        resolve_typedefs_shallow)

logger = logging.getLogger(__name__)

__doc__ = """Registry of the generated names of enumerated types.

Every enumeration, identity and enumerated typedef found in the schema is
given one name.  Leaves sharing the same definition, because they use the
same typedef or were instantiated from the same grouping, share the name
unless deduplication is disabled.  A registry belongs to a single run.
"""


class EnumeratedValueKind(Enum):
    SIMPLE_ENUMERATION = "enumeration"
    DERIVED_ENUMERATION = "derived-enumeration"
    UNION_ENUMERATION = "union-enumeration"
    DERIVED_UNION_ENUMERATION = "derived-union-enumeration"
    IDENTITY = "identity"


class EnumValue:
    __slots__ = ("name", "value", "defining_module")

    def __init__(self, name: str, value: int, defining_module: str = ""):
        self.name = name
        self.value = value
        self.defining_module = defining_module

    def __eq__(self, other):
        return (isinstance(other, EnumValue) and self.name == other.name and self.value == other.value
                and self.defining_module == other.defining_module)

    def __repr__(self):
        return f"EnumValue({self.name!r}, {self.value!r}, {self.defining_module!r})"


class EnumeratedYANGType:
    """Definition of one generated enumerated type."""
    __slots__ = ("name", "kind", "key", "type_name", "identity_base_name", "values")

    def __init__(self, name: str, kind: EnumeratedValueKind, key: str, type_name: str = "",
                 identity_base_name: str = "", values: Iterable[EnumValue] = ()):
        self.name = name
        self.kind = kind
        self.key = key
        self.type_name = type_name
        self.identity_base_name = identity_base_name
        self.values: List[EnumValue] = list(values)

    def value_names(self) -> List[str]:
        return [v.name for v in self.values]

    def as_dict(self):
        return {
            "name": self.name,
            "kind": self.kind.value,
            "key": self.key,
            "type_name": self.type_name,
            "identity_base_name": self.identity_base_name,
            "values": [{"name": v.name, "value": v.value, "defining_module": v.defining_module} for v in self.values],
        }

    def __repr__(self):
        return f"EnumeratedYANGType({self.name!r}, {self.kind.name})"


def _enumeration_values(enumeration: Enumeration, module: str) -> List[EnumValue]:
    return [EnumValue(n, v, module) for n, v in sorted(enumeration.items(), key=lambda kv: (kv[1], kv[0]))]


def _identity_values(identityref: IdentityRef) -> List[EnumValue]:
    values = sorted(identityref.values, key=lambda i: (i.name, i.module or ""))
    return [EnumValue(i.name, idx, i.module or "") for idx, i in enumerate(values)]


class EnumSet:
    """Per-run table of enumerated type names.

    The maps from dedup key to generated name are kept per kind of
    enumerated type.  All generated names share one namespace.
    """

    def __init__(self, *, compress: bool = False, use_underscores: bool = False, skip_dedup: bool = False,
                 shorten_names: bool = False, use_defining_module_for_typedef_names: bool = False,
                 org_prefixes_to_trim: Iterable[str] = ()):
        self.compress = compress
        self.use_underscores = use_underscores
        self.skip_dedup = skip_dedup
        self.shorten_names = shorten_names
        self.use_defining_module_for_typedef_names = use_defining_module_for_typedef_names
        self.org_prefixes_to_trim = list(org_prefixes_to_trim)
        self.defined_names = set()
        self.unique_identity_names: Dict[str, str] = {}
        self.unique_typedef_names: Dict[str, str] = {}
        self.unique_leaf_names: Dict[str, str] = {}
        self.enums: Dict[str, EnumeratedYANGType] = {}

    @classmethod
    def from_options(cls, opts) -> "EnumSet":
        to = opts.transformation_options
        return cls(
            compress=to.compress_behaviour.compress_enabled(),
            use_underscores=to.enumerations_use_underscores,
            skip_dedup=opts.parse_options.skip_enum_deduplication,
            shorten_names=to.shorten_enum_leaf_names,
            use_defining_module_for_typedef_names=to.use_defining_module_for_typedef_enum_names,
            org_prefixes_to_trim=to.enum_org_prefixes_to_trim,
        )

    def _module_part(self, module: str) -> str:
        return camel_case(trim_org_prefixes(module, self.org_prefixes_to_trim))

    def _define(self, name: str, kind: EnumeratedValueKind, key: str, **kwargs) -> str:
        unique = make_name_unique(name, self.defined_names)
        self.enums[unique] = EnumeratedYANGType(unique, kind, key, **kwargs)
        return unique

    def _union_suffix(self) -> str:
        return "_Union" if self.use_underscores else "Union"

    def leaf_enum_key(self, node: SchemaNode, member_index: int = 0) -> str:
        if self.skip_dedup:
            key = node.path()
        else:
            key = f"{node.defining_module_name()}:{node.origin_key()}"
        if member_index:
            key = f"{key}#{member_index}"
        return key

    def _leaf_enum_base_name(self, node: SchemaNode) -> str:
        if not self.compress:
            return join_name(map(camel_case, node.schema_path_no_choice_case()), self.use_underscores)

        # The direct parent of an OpenConfig leaf is its config or state
        # container, so the closest named ancestor is used instead.
        ancestor = node.parent
        while ancestor is not None and (ancestor.is_config_state() or ancestor.is_choice_or_case()):
            ancestor = ancestor.parent
        if ancestor is None:
            raise make_exception(yangstruct_err_enum_bad_context, path=node.path())
        parts = []
        if not self.shorten_names:
            parts.append(self._module_part(node.defining_module_name()))
        if not ancestor.is_module() and not ancestor.is_fake_root:
            parts.append(camel_case(ancestor.name))
        parts.append(camel_case(node.name))
        return join_name(parts, self.use_underscores)

    def enum_name(self, node: SchemaNode, enumeration: Enumeration, in_union: bool = False,
                  member_index: int = 0) -> Tuple[str, str]:
        """Name of an enumeration defined inline in the type of ``node``."""
        if node is None:
            raise make_exception(yangstruct_err_enum_without_context, what="enumeration")
        key = self.leaf_enum_key(node, member_index)
        if key in self.unique_leaf_names:
            logger.debug("enumeration of %s deduplicated to %s", node.path(), self.unique_leaf_names[key])
            return self.unique_leaf_names[key], key
        name = self._leaf_enum_base_name(node)
        if in_union:
            name += self._union_suffix()
        kind = EnumeratedValueKind.UNION_ENUMERATION if in_union else EnumeratedValueKind.SIMPLE_ENUMERATION
        unique = self._define(name, kind, key, type_name="enumeration",
                              values=_enumeration_values(enumeration, node.defining_module_name()))
        self.unique_leaf_names[key] = unique
        return unique, key

    def typedef_enum_name(self, typedef: Typedef, node: SchemaNode, member_index: int = 0,
                          union_member: bool = False) -> Tuple[str, str]:
        """Name of an enumeration defined by ``typedef``, either directly or
        inline in a union that the typedef names."""
        module = typedef.module if self.use_defining_module_for_typedef_names else node.belonging_module()
        key = f"{module}:{typedef.name}"
        if member_index:
            key = f"{key}#{member_index}"
        if key in self.unique_typedef_names:
            return self.unique_typedef_names[key], key
        name = join_name([self._module_part(module), camel_case(typedef.name)], self.use_underscores)
        if union_member:
            enumeration = None
            for m in classify_enumerated(typedef):
                if m.kind == "enumeration" and m.owner is typedef and m.index == member_index:
                    enumeration = m.type
                    break
            kind = EnumeratedValueKind.DERIVED_UNION_ENUMERATION
        else:
            enumeration = resolve_typedefs_shallow(typedef)
            kind = EnumeratedValueKind.DERIVED_ENUMERATION
        values = _enumeration_values(enumeration, typedef.module) if isinstance(enumeration, Enumeration) else []
        unique = self._define(name, kind, key, type_name=typedef.name, values=values)
        self.unique_typedef_names[key] = unique
        return unique, key

    def identity_name(self, identityref: IdentityRef, node: Optional[SchemaNode] = None) -> Tuple[str, str]:
        """Name of the enumerated type holding the identities derived from
        the base of ``identityref``."""
        path = node.path() if node is not None else str(identityref)
        if not identityref.bases:
            raise make_exception(yangstruct_err_identity_no_base, path=path)
        if len(identityref.bases) > 1:
            raise make_exception(yangstruct_err_identity_multiple_bases, path=path, bases=", ".join(map(str, identityref.bases)))
        base: Identifier = identityref.bases[0]
        module = base.module or (node.defining_module_name() if node is not None else "")
        key = f"{module}/{base.name}"
        if key in self.unique_identity_names:
            existing = self.enums[self.unique_identity_names[key]]
            known = {(v.name, v.defining_module) for v in existing.values}
            merged = known | {(i.name, i.module or "") for i in identityref.values}
            if merged != known:
                existing.values = [EnumValue(n, idx, m) for idx, (n, m) in enumerate(sorted(merged))]
            return self.unique_identity_names[key], key
        name = join_name([self._module_part(module), camel_case(base.name)], self.use_underscores)
        unique = self._define(name, EnumeratedValueKind.IDENTITY, key, type_name="identityref",
                              identity_base_name=base.name, values=_identity_values(identityref))
        self.unique_identity_names[key] = unique
        return unique, key

    def register(self, node: SchemaNode) -> List[Tuple[str, str]]:
        """Register every enumerated type used by ``node`` and return their
        ``(name, key)`` pairs in type order."""
        return [self.resolve(node, member) for member in enumerated_members(node.yang_type)]

    def resolve(self, node: SchemaNode, member: "EnumeratedMember") -> Tuple[str, str]:
        if member.kind == "identity":
            return self.identity_name(member.type, node)
        if member.kind == "typedef":
            return self.typedef_enum_name(member.type, node)
        if member.owner is not None:
            return self.typedef_enum_name(member.owner, node, member.index, union_member=True)
        return self.enum_name(node, member.type, member.in_union, member.index)


class EnumeratedMember:
    """Enumerated type found within the type of a leaf.

    ``kind`` is ``identity``, ``typedef``, ``enumeration`` or ``scalar``.  ``owner`` is
    the typedef naming the union an inline enumeration belongs to, and
    ``index`` counts inline enumerations within the same union.
    """
    __slots__ = ("kind", "type", "in_union", "owner", "index")

    def __init__(self, kind, yang_type, in_union=False, owner=None, index=0):
        self.kind = kind
        self.type = yang_type
        self.in_union = in_union
        self.owner = owner
        self.index = index


def classify_enumerated(t, in_union: bool = False, owner: Optional[Typedef] = None,
                        counter: Optional[Dict[int, int]] = None,
                        all_members: bool = False) -> Iterable[EnumeratedMember]:
    """Walk the type ``t`` and yield each enumerated type it uses.  With
    ``all_members`` every other member type is yielded too, with kind
    ``scalar``."""
    if t is None:
        return
    if counter is None:
        counter = {}
    resolved = resolve_typedefs_shallow(t)
    if isinstance(t, Typedef) and isinstance(resolved, IdentityRef):
        yield EnumeratedMember("identity", resolved, in_union)
    elif isinstance(t, Typedef) and isinstance(resolved, Enumeration):
        yield EnumeratedMember("typedef", t, in_union)
    elif isinstance(resolved, YangUnion):
        new_owner = t if isinstance(t, Typedef) else owner
        for member in resolved:
            yield from classify_enumerated(member, True, new_owner, counter, all_members)
    elif isinstance(resolved, Enumeration):
        owner_id = id(owner)
        index = counter.get(owner_id, 0)
        counter[owner_id] = index + 1
        yield EnumeratedMember("enumeration", resolved, in_union, owner, index)
    elif isinstance(resolved, IdentityRef):
        yield EnumeratedMember("identity", resolved, in_union)
    elif all_members:
        yield EnumeratedMember("scalar", t, in_union, owner)


def enumerated_members(t) -> List[EnumeratedMember]:
    return list(classify_enumerated(t))


def find_enum_set(enum_leaves: Dict[str, SchemaNode], enum_set: EnumSet) -> Dict[str, EnumeratedYANGType]:
    """Register the enumerated types of ``enum_leaves`` in path order."""
    for path in sorted(enum_leaves):
        enum_set.register(enum_leaves[path])
    logger.debug("registered %d enumerated types", len(enum_set.enums))
    return dict(sorted(enum_set.enums.items()))

