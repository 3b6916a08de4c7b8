# Copyright 2021-2024 Nokia

import logging

from .enum_registry import classify_enumerated
from .errors import *
from .mapped_type import LangMapper, MappedType, sorted_union_types
from .naming import camel_case, make_name_unique, safe_proto_identifier_name
from .schema import SchemaNode
from .yang_type import (Enumeration, IdentityRef, LeafRef, PrimitiveType, Typedef,
                        UnresolvedIdentifier, YangUnion, resolve_typedefs_shallow)

logger = logging.getLogger(__name__)

YWRAPPER_ACCESSOR = "ywrapper."
ENUMERATED_UNION_SUFFIX = "Union"

_PROTO_WRAPPER_TYPES = {
    "int8": "IntValue",
    "int16": "IntValue",
    "int32": "IntValue",
    "int64": "IntValue",
    "uint8": "UintValue",
    "uint16": "UintValue",
    "uint32": "UintValue",
    "uint64": "UintValue",
    "binary": "BytesValue",
    "boolean": "BoolValue",
    "empty": "BoolValue",
    "string": "StringValue",
    "instance-identifier": "StringValue",
    "decimal64": "Decimal64Value",
}

_PROTO_SCALAR_TYPES = {
    "int8": "sint64",
    "int16": "sint64",
    "int32": "sint64",
    "int64": "sint64",
    "uint8": "uint64",
    "uint16": "uint64",
    "uint32": "uint64",
    "uint64": "uint64",
    "binary": "bytes",
    "boolean": "bool",
    "empty": "bool",
    "string": "string",
    "instance-identifier": "string",
    # there is no scalar decimal type in protobuf
    "decimal64": YWRAPPER_ACCESSOR + "Decimal64Value",
}


class ProtoLangMapper(LangMapper):
    """Maps YANG types onto protobuf types.

    Messages are named within their package, which is derived from the
    ancestors of the schema node that themselves produce messages.
    """

    def __init__(self, base_package_name: str = "openconfig", enum_package_name: str = "enums"):
        super().__init__()
        self.defined_globals = set()
        self.unique_directory_names = {}
        self.unique_proto_msg_names = {}
        self.unique_proto_packages = {}
        self.base_package_name = base_package_name
        self.enum_package_name = enum_package_name

    @classmethod
    def from_options(cls, proto_opts) -> "ProtoLangMapper":
        return cls(proto_opts.package_name, proto_opts.enum_package_name)

    @property
    def enum_prefix(self) -> str:
        return f"{self.base_package_name}.{self.enum_package_name}."

    def directory_name(self, node: SchemaNode, compress_behaviour) -> str:
        return self._proto_msg_name(node, compress_behaviour.compress_enabled())

    def field_name(self, node: SchemaNode) -> str:
        return safe_proto_identifier_name(node.name)

    def binary_types(self):
        return ("bytes", YWRAPPER_ACCESSOR + "BytesValue")

    def leaf_type(self, node: SchemaNode, opts) -> MappedType:
        return self._yang_type_to_proto_type(node.yang_type, node, opts)

    def key_leaf_type(self, node: SchemaNode, opts) -> MappedType:
        try:
            return self._yang_type_to_proto_scalar_type(node.yang_type, node, opts, scalar_in_single_type_union=True)
        except ModelProcessingError as e:
            logger.debug("key %s cannot be mapped: %s", node.path(), e)
            parent = node.parent.path() if node.parent is not None else node.path()
            raise make_exception(yangstruct_err_invalid_proto_key, path=parent, field=node.name, type=node.yang_type) from None

    def package_name(self, node: SchemaNode, compress_behaviour, nested_messages: bool) -> str:
        compress = compress_behaviour.compress_enabled()
        if node.is_fake_root:
            return ""
        if node.parent is None:
            raise make_exception(yangstruct_err_proto_module_message, path=node.path())

        if nested_messages:
            if compress:
                # Messages directly below the module, or lists whose
                # surrounding container is, are the roots of nesting.
                if node.parent.parent is None:
                    return ""
                if node.is_list() and node.parent.parent.parent is None:
                    return ""
            if node.parent.parent is not None:
                n = node.parent
                while n.parent.parent is not None:
                    n = n.parent
                node = n

        return self._protobuf_package(node, compress)

    def _proto_msg_name(self, node: SchemaNode, compress: bool) -> str:
        if node.path() in self.unique_directory_names:
            return self.unique_directory_names[node.path()]

        pkg = self._protobuf_package(node, compress)
        names = self.unique_proto_msg_names.setdefault(pkg, set())
        n = make_name_unique(camel_case(node.name), names)
        self.unique_directory_names[node.path()] = n
        return n

    def _protobuf_package(self, node: SchemaNode, compress: bool) -> str:
        if node.is_fake_root:
            return ""

        parent = node.parent
        if compress and (node.is_list() or node.is_config_state()) and parent is not None and parent.parent is not None:
            parent = parent.parent
        if parent is None:
            return ""

        if parent.path() in self.unique_proto_packages:
            return self.unique_proto_packages[parent.path()]

        parts = []
        p = parent
        while p is not None:
            produces_message = p.is_module() or p.is_compressed_valid_element()
            if (compress and not produces_message) or (not compress and p.is_choice_or_case()):
                p = p.parent
                continue
            parts.append(safe_proto_identifier_name(p.name))
            p = p.parent

        n = make_name_unique(".".join(reversed(parts)), self.defined_globals)
        self.unique_proto_packages[parent.path()] = n
        return n

    def _enum_type_name(self, ctx: SchemaNode, in_union: bool) -> str:
        name = camel_case(ctx.name)
        if in_union:
            name += ENUMERATED_UNION_SUFFIX
        return name

    def _typedef_or_identity(self, t, ctx: SchemaNode):
        resolved = resolve_typedefs_shallow(t)
        if isinstance(t, Typedef) and isinstance(resolved, Enumeration):
            name, key = self.enum_set.typedef_enum_name(t, ctx)
            return MappedType(self.enum_prefix + name, is_enumerated_value=True, enumerated_yang_type_key=key)
        if isinstance(resolved, IdentityRef):
            name, key = self.enum_set.identity_name(resolved, ctx)
            return MappedType(self.enum_prefix + name, is_enumerated_value=True, enumerated_yang_type_key=key)
        return None

    def _yang_type_to_proto_type(self, t, ctx: SchemaNode, opts) -> MappedType:
        return self._map(t, ctx, opts, scalar=False, scalar_in_single_type_union=False)

    def _yang_type_to_proto_scalar_type(self, t, ctx: SchemaNode, opts, scalar_in_single_type_union=False) -> MappedType:
        return self._map(t, ctx, opts, scalar=True, scalar_in_single_type_union=scalar_in_single_type_union)

    def _map(self, t, ctx: SchemaNode, opts, scalar: bool, scalar_in_single_type_union: bool) -> MappedType:
        if t is None:
            raise make_exception(yangstruct_err_unresolved_type, type=None, path=ctx.path())
        mtype = self._typedef_or_identity(t, ctx)
        if mtype is not None:
            return mtype

        resolved = resolve_typedefs_shallow(t)
        if isinstance(resolved, PrimitiveType):
            if scalar:
                return MappedType(_PROTO_SCALAR_TYPES[resolved.kind])
            return MappedType(YWRAPPER_ACCESSOR + _PROTO_WRAPPER_TYPES[resolved.kind])
        if isinstance(resolved, LeafRef):
            target = self.resolve_leafref(ctx, resolved)
            return self._map(target.yang_type, target, opts, scalar, scalar_in_single_type_union)
        if isinstance(resolved, Enumeration):
            _, key = self.enum_set.enum_name(ctx, resolved)
            return MappedType(self._enum_type_name(ctx, False), is_enumerated_value=True, enumerated_yang_type_key=key)
        if isinstance(resolved, YangUnion):
            return self._proto_union_type(t, ctx, opts, scalar_in_single_type_union)
        if isinstance(resolved, UnresolvedIdentifier):
            raise make_exception(yangstruct_err_unresolved_type, type=resolved, path=ctx.path())
        if scalar:
            raise make_exception(yangstruct_err_unimplemented_scalar_type, kind=resolved.kind)
        raise make_exception(yangstruct_err_unimplemented_type, kind=resolved.kind)

    def _proto_union_type(self, t, ctx: SchemaNode, opts, scalar_in_single_type_union: bool) -> MappedType:
        members = {}
        errors = []
        for m in classify_enumerated(t, all_members=True):
            try:
                if m.kind == "identity":
                    name, key = self.enum_set.identity_name(m.type, ctx)
                    mtype = MappedType(self.enum_prefix + name, is_enumerated_value=True, enumerated_yang_type_key=key)
                elif m.kind == "typedef":
                    mtype = self._typedef_or_identity(m.type, ctx)
                elif m.kind == "enumeration":
                    _, key = self.enum_set.resolve(ctx, m)
                    if m.owner is not None:
                        mtype = MappedType(self.enum_prefix + self.enum_set.unique_typedef_names[key],
                                           is_enumerated_value=True, enumerated_yang_type_key=key)
                    else:
                        mtype = MappedType(self._enum_type_name(ctx, True), is_enumerated_value=True,
                                           enumerated_yang_type_key=key)
                else:
                    mtype = self._yang_type_to_proto_scalar_type(m.type, ctx, opts)
            except ModelProcessingError as e:
                errors.append(e)
                continue
            if mtype.native_type not in members:
                members[mtype.native_type] = (m, mtype)
        if errors:
            raise make_exception(yangstruct_err_union_member, path=ctx.path(), errors="; ".join(map(str, errors)))

        if len(members) == 1:
            member, mtype = next(iter(members.values()))
            if mtype.is_enumerated_value:
                return mtype
            if scalar_in_single_type_union:
                return self._yang_type_to_proto_scalar_type(member.type, ctx, opts)
            return self._yang_type_to_proto_type(member.type, ctx, opts)

        union_types, infos = sorted_union_types({n: mt for n, (_, mt) in members.items()})
        return MappedType(union_types=union_types, union_type_infos=infos)
