# Copyright 2021-2024 Nokia

import copy
from decimal import Decimal
from typing import Tuple

from .errors import *
from .singleton import _Empty
from .wrappers import FieldKind, GoEnum, GoStruct, UnionValue


__all__ = (
    "deep_copy", "merge_structs", "merge_struct_into", "unique_slices",
    "build_empty_tree", "prune_empty_branches", "init_container",
    "enum_name", "enum_log_string", "enum_field_to_string",
)

__doc__ = """Functions operating on instances of generated structs.

:func:`deep_copy` and :func:`merge_structs` return new structs.
:func:`merge_struct_into`, :func:`build_empty_tree`,
:func:`prune_empty_branches` and :func:`init_container` modify the struct
they are given.  No locking is done.
"""

_SCALAR_TYPES = (str, int, float, bool, bytes, Decimal, _Empty)


def _check_struct(s):
    if s is None:
        raise make_exception(yangstruct_err_nil_value)
    if not isinstance(s, GoStruct):
        raise make_exception(yangstruct_err_not_a_struct, value=s, type=type(s).__name__)


def _copy_scalar(s: GoStruct, field, value):
    if isinstance(value, _SCALAR_TYPES):
        return value
    raise make_exception(yangstruct_err_unsupported_field_value, field=field.name,
                         struct=s.__class__.__name__, type=type(value).__name__)


def _copy_interface(value):
    if isinstance(value, GoEnum):
        return value
    if isinstance(value, UnionValue):
        if isinstance(value.value, GoStruct):
            return UnionValue(value.kind, _copy_struct(value.value))
        return UnionValue(value.kind, value.value)
    raise make_exception(yangstruct_err_invalid_interface, type=type(value).__name__)


def _copy_element(value):
    if isinstance(value, GoStruct):
        return _copy_struct(value)
    if isinstance(value, (UnionValue, GoEnum)):
        return _copy_interface(value)
    return copy.copy(value)


def _same_value(a, b) -> bool:
    # IntEnum members of different enumerations compare equal by value
    return type(a) is type(b) and a == b


def _copy_field(s: GoStruct, field, value):
    kind = field.kind
    if kind in (FieldKind.LEAF_LIST, FieldKind.UNKEYED_LIST, FieldKind.ANNOTATION):
        expected = list
    elif kind is FieldKind.KEYED_LIST:
        expected = dict
    else:
        expected = None
    if expected is not None and not isinstance(value, expected):
        raise make_exception(yangstruct_err_unsupported_field_value, field=field.name,
                             struct=s.__class__.__name__, type=type(value).__name__)

    if kind is FieldKind.LEAF:
        return _copy_scalar(s, field, value)
    if kind is FieldKind.LEAF_LIST:
        return [_copy_interface(v) if isinstance(v, (UnionValue, GoEnum)) else _copy_scalar(s, field, v)
                for v in value]
    if kind is FieldKind.ENUM:
        return value
    if kind is FieldKind.UNION:
        return _copy_interface(value)
    if kind is FieldKind.CONTAINER:
        return _copy_struct(value)
    if kind is FieldKind.KEYED_LIST:
        return {k: _copy_struct(v) for k, v in value.items()}
    if kind is FieldKind.UNKEYED_LIST:
        return [_copy_struct(v) for v in value]
    if kind is FieldKind.ANNOTATION:
        return copy.deepcopy(value)
    raise make_exception(yangstruct_err_unsupported_field_value, field=field.name,
                         struct=s.__class__.__name__, type=type(value).__name__)


def _copy_struct(s: GoStruct) -> GoStruct:
    _check_struct(s)
    res = s.__class__()
    for f in s.fields():
        value = getattr(s, f.name)
        if value is None:
            continue
        setattr(res, f.name, _copy_field(s, f, value))
    return res


def deep_copy(s: GoStruct) -> GoStruct:
    """Return a copy of ``s`` sharing no mutable state with it."""
    if s is None:
        raise make_exception(yangstruct_err_nil_value)
    try:
        return _copy_struct(s)
    except CopyError as e:
        raise make_exception(yangstruct_err_deep_copy, reason=e) from e


def unique_slices(a, b) -> bool:
    """Whether no element of ``a`` is equal to an element of ``b``."""
    if not isinstance(a, list) or not isinstance(b, list):
        raise make_exception(yangstruct_err_slices_not_slices)
    if a and b and type(a[0]) is not type(b[0]):
        raise make_exception(yangstruct_err_slices_type)
    return not any(x in b for x in a)


def merge_structs(a: GoStruct, b: GoStruct, overwrite: bool = False) -> GoStruct:
    """Return a new struct with the contents of ``a`` and ``b``.  Neither
    input is modified."""
    _check_struct(a)
    _check_struct(b)
    if a.__class__ is not b.__class__:
        raise make_exception(yangstruct_err_mismatched_types, a=a.__class__.__name__, b=b.__class__.__name__)
    res = deep_copy(a)
    merge_struct_into(res, b, overwrite)
    return res


def _merge_slice(dst: list, src: list, overwrite: bool) -> list:
    if dst == src:
        return dst
    if overwrite:
        return dst + [_copy_element(v) for v in src if v not in dst]
    if not unique_slices(dst, src):
        raise make_exception(yangstruct_err_merge_unique, src=src, dst=dst)
    return dst + [_copy_element(v) for v in src]


_SHAPES = {
    FieldKind.KEYED_LIST: (dict, "map"),
    FieldKind.UNKEYED_LIST: (list, "slice"),
    FieldKind.LEAF_LIST: (list, "slice"),
    FieldKind.ANNOTATION: (list, "slice"),
    FieldKind.CONTAINER: (GoStruct, "struct"),
}


def _check_shape(f, value, side: str):
    if f.kind not in _SHAPES:
        return
    expected, shape = _SHAPES[f.kind]
    if not isinstance(value, expected):
        raise make_exception(yangstruct_err_merge_shape, side=side, field=f.name, shape=shape,
                             type=type(value).__name__)


def merge_struct_into(dst: GoStruct, src: GoStruct, overwrite: bool = False):
    """Merge ``src`` into ``dst`` in place.

    Fields set in only one of the structs are kept.  Fields set in both
    must be equal unless ``overwrite`` is set, in which case ``src`` wins.
    """
    _check_struct(dst)
    _check_struct(src)
    if dst.__class__ is not src.__class__:
        raise make_exception(yangstruct_err_mismatched_types, a=dst.__class__.__name__, b=src.__class__.__name__)

    for f in src.fields():
        sv = getattr(src, f.name)
        if not f.is_set(sv):
            continue
        dv = getattr(dst, f.name)
        kind = f.kind
        _check_shape(f, sv, "src")
        if dv is not None:
            _check_shape(f, dv, "dst")

        if kind is FieldKind.ANNOTATION:
            setattr(dst, f.name, list(dv or []) + copy.deepcopy(sv))
        elif not f.is_set(dv):
            setattr(dst, f.name, _copy_field(src, f, sv))
        elif kind is FieldKind.LEAF:
            if not _same_value(dv, sv):
                if not overwrite:
                    raise make_exception(yangstruct_err_merge_ptr, src=sv, dst=dv)
                setattr(dst, f.name, sv)
        elif kind is FieldKind.ENUM:
            if not _same_value(dv, sv):
                if not overwrite:
                    raise make_exception(yangstruct_err_merge_enum, dst=int(dv), src=int(sv))
                setattr(dst, f.name, sv)
        elif kind is FieldKind.UNION:
            copied = _copy_interface(sv)
            if not _same_value(dv, sv):
                if not overwrite:
                    raise make_exception(yangstruct_err_merge_interface, src=sv, dst=dv)
                setattr(dst, f.name, copied)
        elif kind is FieldKind.CONTAINER:
            merge_struct_into(dv, sv, overwrite)
        elif kind is FieldKind.KEYED_LIST:
            for k, v in sv.items():
                if k not in dv:
                    dv[k] = _copy_struct(v)
                    continue
                try:
                    merge_struct_into(dv[k], v, overwrite)
                except MergeError as e:
                    raise make_exception(yangstruct_err_merge_map_key, key=k, reason=e) from e
        elif kind in (FieldKind.LEAF_LIST, FieldKind.UNKEYED_LIST):
            setattr(dst, f.name, _merge_slice(dv, sv, overwrite))


def build_empty_tree(s: GoStruct):
    """Initialise every unset container and list of ``s``, recursively.
    Populated fields are left untouched."""
    _check_struct(s)
    for f in s.fields():
        value = getattr(s, f.name)
        if f.kind is FieldKind.CONTAINER:
            if value is None:
                value = f.struct_type()
                setattr(s, f.name, value)
            build_empty_tree(value)
        elif f.kind is FieldKind.KEYED_LIST:
            if value is None:
                setattr(s, f.name, {})
                continue
            for v in value.values():
                build_empty_tree(v)
        elif f.kind is FieldKind.UNKEYED_LIST:
            if value is None:
                setattr(s, f.name, [])
                continue
            for v in value:
                build_empty_tree(v)


def _prune(s: GoStruct) -> bool:
    """Prune ``s`` and return whether nothing is set beneath it."""
    empty = True
    for f in s.fields():
        value = getattr(s, f.name)
        if f.kind is FieldKind.CONTAINER:
            if value is None:
                continue
            if _prune(value):
                setattr(s, f.name, None)
            else:
                empty = False
        elif f.kind is FieldKind.KEYED_LIST:
            if value is None:
                continue
            for k in [k for k, v in value.items() if _prune(v)]:
                del value[k]
            if value:
                empty = False
            else:
                setattr(s, f.name, None)
        elif f.kind is FieldKind.UNKEYED_LIST:
            if value is None:
                continue
            value[:] = [v for v in value if not _prune(v)]
            if value:
                empty = False
            else:
                setattr(s, f.name, None)
        elif f.kind in (FieldKind.LEAF_LIST, FieldKind.ANNOTATION):
            if value is None:
                continue
            if value:
                empty = False
            else:
                setattr(s, f.name, None)
        elif f.is_set(value):
            empty = False
    return empty


def prune_empty_branches(s: GoStruct):
    """Remove every container and list entry of ``s`` with nothing set
    beneath it.  A set leaf anywhere keeps the whole branch to it."""
    _check_struct(s)
    _prune(s)


def init_container(s: GoStruct, field_name: str) -> GoStruct:
    """Initialise the container ``field_name`` of ``s`` if it is unset and
    return it."""
    _check_struct(s)
    f = s.field(field_name)
    if f.kind is not FieldKind.CONTAINER:
        raise make_exception(yangstruct_err_not_container, field=field_name, struct=s.__class__.__name__)
    value = getattr(s, field_name)
    if value is None:
        value = f.struct_type()
        setattr(s, field_name, value)
    return value


def enum_name(e) -> str:
    """YANG name of the enumerated value ``e``, ``""`` when unset."""
    if not isinstance(e, GoEnum):
        raise make_exception(yangstruct_err_unknown_enum_type, type=type(e).__name__)
    return e.enum_name()


def enum_log_string(e, value: int, type_name: str) -> str:
    """Name of ``value`` for log messages.  Out-of-range values produce a
    message instead of an error."""
    try:
        return e(value).enum_name()
    except (ValueError, YangStructError):
        return make_exception(yangstruct_err_out_of_range_enum, type=type_name, value=value).args[0]


def enum_field_to_string(e, append_module_name: bool = False) -> Tuple[str, bool]:
    """Render an enumerated field value.  The second element tells whether
    the value is set."""
    if not isinstance(e, GoEnum):
        raise make_exception(yangstruct_err_unknown_enum_type, type=type(e).__name__)
    if int(e) == 0:
        return "", False
    name = e.enum_name()
    definition = e.definition()
    if append_module_name and definition.defining_module:
        name = f"{definition.defining_module}:{name}"
    return name, True
