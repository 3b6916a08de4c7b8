# Copyright 2021-2024 Nokia

import json
import logging
from typing import Optional

from .enum_registry import classify_enumerated
from .errors import *
from .mapped_type import LangMapper, MappedType, sorted_union_types
from .naming import camel_case, enum_value_name, make_name_unique
from .schema import SchemaNode
from .yang_type import (Enumeration, IdentityRef, LeafRef, PrimitiveType, Typedef,
                        UnresolvedIdentifier, YangUnion, resolve_typedefs_shallow, typedef_default)

logger = logging.getLogger(__name__)

GO_ENUM_PREFIX = "E_"
GO_BINARY_TYPE = "Binary"
GO_EMPTY_TYPE = "YANGEmpty"

_GO_TYPES = {
    "int8": "int8",
    "int16": "int16",
    "int32": "int32",
    "int64": "int64",
    "uint8": "uint8",
    "uint16": "uint16",
    "uint32": "uint32",
    "uint64": "uint64",
    "binary": GO_BINARY_TYPE,
    "boolean": "bool",
    "empty": GO_EMPTY_TYPE,
    "string": "string",
    "decimal64": "float64",
    "instance-identifier": "string",
}

_GO_ZERO_VALUES = {
    GO_BINARY_TYPE: "nil",
    "bool": "false",
    GO_EMPTY_TYPE: "false",
    "string": '""',
}


def go_zero_value(native_type: str) -> str:
    return _GO_ZERO_VALUES.get(native_type, "0")


class GoLangMapper(LangMapper):
    """Maps YANG types onto Go types in the style of generated Go structs."""

    def __init__(self):
        super().__init__()
        self.defined_globals = set()
        self.unique_directory_names = {}

    def directory_name(self, node: SchemaNode, compress_behaviour) -> str:
        return self._go_struct_name(node, compress_behaviour.compress_enabled())

    def field_name(self, node: SchemaNode) -> str:
        return camel_case(node.name)

    def binary_types(self):
        return (GO_BINARY_TYPE,)

    def leaf_type(self, node: SchemaNode, opts) -> MappedType:
        mtype = self._yang_type_to_go_type(node.yang_type, node, opts)
        default = node.default if node.default is not None else typedef_default(node.yang_type)
        if default is not None:
            mtype.default_value = self._default_value(mtype, node, default)
        return mtype

    def key_leaf_type(self, node: SchemaNode, opts) -> MappedType:
        return self._yang_type_to_go_type(node.yang_type, node, opts)

    def _go_struct_name(self, node: SchemaNode, compress: bool) -> str:
        if node.path() in self.unique_directory_names:
            return self.unique_directory_names[node.path()]
        if node.is_fake_root:
            name = camel_case(node.name)
        elif compress:
            parts = [camel_case(node.name)]
            p = node.parent
            while p is not None and not p.is_module():
                if p.is_compressed_valid_element():
                    parts.append(camel_case(p.name))
                p = p.parent
            name = "_".join(reversed(parts))
        else:
            name = "_".join(camel_case(e) for e in node.schema_path_no_choice_case()[1:])
        unique = make_name_unique(name, self.defined_globals)
        self.unique_directory_names[node.path()] = unique
        return unique

    def _parent_directory(self, node: SchemaNode, compress: bool) -> Optional[SchemaNode]:
        p = node.parent
        while p is not None and not p.is_module():
            if p.is_choice_or_case() or (compress and not p.is_compressed_valid_element()):
                p = p.parent
                continue
            return p
        return p

    def _union_name(self, node: SchemaNode, opts) -> str:
        compress = opts.compress_behaviour.compress_enabled()
        parent = self._parent_directory(node, compress)
        if parent is None or parent.is_module():
            parent_name = camel_case(node.belonging_module())
        else:
            parent_name = self._go_struct_name(parent, compress)
        return f"{parent_name}_{camel_case(node.name)}_Union"

    def _enumerated(self, name: str, key: str) -> MappedType:
        return MappedType(GO_ENUM_PREFIX + name, is_enumerated_value=True, enumerated_yang_type_key=key, zero_value="0")

    def _yang_type_to_go_type(self, t, ctx: SchemaNode, opts) -> MappedType:
        if t is None:
            raise make_exception(yangstruct_err_unresolved_type, type=None, path=ctx.path())
        resolved = resolve_typedefs_shallow(t)
        if isinstance(t, Typedef) and isinstance(resolved, Enumeration):
            return self._enumerated(*self.enum_set.typedef_enum_name(t, ctx))
        if isinstance(resolved, PrimitiveType):
            native = _GO_TYPES[resolved.kind]
            return MappedType(native, zero_value=go_zero_value(native))
        if isinstance(resolved, LeafRef):
            target = self.resolve_leafref(ctx, resolved)
            return self._yang_type_to_go_type(target.yang_type, target, opts)
        if isinstance(resolved, Enumeration):
            return self._enumerated(*self.enum_set.enum_name(ctx, resolved))
        if isinstance(resolved, IdentityRef):
            return self._enumerated(*self.enum_set.identity_name(resolved, ctx))
        if isinstance(resolved, YangUnion):
            return self._go_union_type(t, ctx, opts)
        if isinstance(resolved, UnresolvedIdentifier):
            raise make_exception(yangstruct_err_unresolved_type, type=resolved, path=ctx.path())
        raise make_exception(yangstruct_err_unimplemented_type, kind=resolved.kind)

    def _go_union_type(self, t, ctx: SchemaNode, opts) -> MappedType:
        members = {}
        errors = []
        for m in classify_enumerated(t, all_members=True):
            try:
                if m.kind == "scalar":
                    mtype = self._yang_type_to_go_type(m.type, ctx, opts)
                else:
                    mtype = self._enumerated(*self.enum_set.resolve(ctx, m))
            except ModelProcessingError as e:
                errors.append(e)
                continue
            if mtype.union_types:
                for n in mtype.union_types:
                    members.setdefault(n, MappedType(n, enumerated_yang_type_key=mtype.union_type_infos[n].enumerated_yang_type_key))
                continue
            members.setdefault(mtype.native_type, mtype)
        if errors:
            raise make_exception(yangstruct_err_union_member, path=ctx.path(), errors="; ".join(map(str, errors)))

        if len(members) == 1:
            return next(iter(members.values()))

        union_types, infos = sorted_union_types(members)
        return MappedType(self._union_name(ctx, opts), union_types=union_types, union_type_infos=infos, zero_value="nil")

    def _default_value(self, mtype: MappedType, node: SchemaNode, default) -> Optional[str]:
        if isinstance(default, (list, tuple)):
            values = [self._default_value(mtype, node, d) for d in default]
            if any(v is None for v in values):
                return None
            return f"[]{mtype.native_type}{{{', '.join(values)}}}"
        if mtype.is_enumerated_value:
            return f"{mtype.native_type}_{enum_value_name(default.split(':')[-1])}"
        if mtype.union_types or mtype.native_type == GO_BINARY_TYPE:
            return None
        if mtype.native_type == "string":
            return json.dumps(default)
        if mtype.native_type in ("bool", GO_EMPTY_TYPE):
            return "true" if str(default).lower() == "true" else "false"
        return str(default)
