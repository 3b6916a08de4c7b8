# Copyright 2021-2024 Nokia

import base64
import copy
import json
import logging
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional

from .errors import *
from .singleton import Empty, _Empty
from .wrappers import Field, FieldKind, GoEnum, GoStruct, UnionKind, UnionValue

logger = logging.getLogger(__name__)

__all__ = (
    "JSONFormat", "RFC7951JSONConfig", "EmitJSONConfig", "emit_json",
    "construct_internal_json", "construct_ietf_json", "struct_tag_to_lib_paths",
    "merge_json", "merge_struct_json",
)

__doc__ = """JSON rendering of generated structs.

Two encodings are supported.  The internal encoding names every element
by its bare schema name and stores keyed lists as objects indexed by the
key value.  The RFC 7951 encoding qualifies an element with its module
name whenever the module differs from the one of its parent, stores keyed
lists as arrays and encodes 64-bit integers as strings.

.. code-block:: python

   >>> emit_json(device, EmitJSONConfig(format=JSONFormat.RFC7951))
"""

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
}


class JSONFormat(Enum):
    INTERNAL = "internal"
    RFC7951 = "rfc7951"


class RFC7951JSONConfig:
    """Options of the RFC 7951 encoding.

    ``append_module_name`` qualifies enumerated values with the module
    defining them.  ``prefer_shadow_path`` renders fields at their shadow
    path when they have one.
    """
    __slots__ = ("append_module_name", "prefer_shadow_path")

    def __init__(self, append_module_name: bool = False, prefer_shadow_path: bool = False):
        self.append_module_name = append_module_name
        self.prefer_shadow_path = prefer_shadow_path


class EmitJSONConfig:
    __slots__ = ("format", "indent", "escape_html", "skip_validation", "rfc7951_config")

    def __init__(self, format: JSONFormat = JSONFormat.INTERNAL, indent: str = "  ", escape_html: bool = False,
                 skip_validation: bool = False, rfc7951_config: Optional[RFC7951JSONConfig] = None):
        self.format = format
        self.indent = indent
        self.escape_html = escape_html
        self.skip_validation = skip_validation
        self.rfc7951_config = rfc7951_config


class StructJsonEncoder(json.JSONEncoder):
    """Encoder for values left in the rendered tree, such as annotations."""

    def default(self, o):
        if isinstance(o, _Empty):
            return [None]
        if isinstance(o, bytes):
            return base64.b64encode(o).decode("ascii")
        if isinstance(o, Decimal):
            return str(o)
        if isinstance(o, GoEnum):
            return o.enum_name()
        return super().default(o)


def _split_tag(field: Field, tag: str) -> List[List[str]]:
    res = []
    for p in tag.split("|"):
        elems = p.split("/")
        if elems and elems[0] == "":
            elems = elems[1:]
        if not elems or any(e == "" for e in elems):
            raise make_exception(yangstruct_err_invalid_path_tag, field=field.name, path=tag)
        res.append(elems)
    return res


def struct_tag_to_lib_paths(field: Field, prefer_shadow: bool = False) -> List[List[str]]:
    """Paths ``field`` is mapped to, each a list of path elements."""
    tag = field.shadow_path if prefer_shadow and field.shadow_path else field.path
    if not tag:
        raise make_exception(yangstruct_err_empty_path_tag, field=field.name)
    return _split_tag(field, tag)


def _module_paths(field: Field, prefer_shadow: bool, paths: List[List[str]]) -> Optional[List[List[str]]]:
    tag = field.shadow_module if prefer_shadow and field.shadow_path else field.module
    if not tag:
        return None
    modules = _split_tag(field, tag)
    if len(modules) != len(paths) or any(len(m) != len(p) for m, p in zip(modules, paths)):
        raise make_exception(yangstruct_err_invalid_path_tag, field=field.name, path=tag)
    return modules


class _Renderer:
    """Walks a struct and builds the decoded JSON tree of one encoding."""

    def __init__(self, fmt: JSONFormat, rfc7951_config: Optional[RFC7951JSONConfig] = None):
        self.fmt = fmt
        self.rfc = fmt is JSONFormat.RFC7951
        self.config = rfc7951_config or RFC7951JSONConfig()

    def struct(self, s: GoStruct, parent_module: Optional[str] = None) -> Dict:
        res = {}
        for f in s.fields():
            value = getattr(s, f.name)
            if not f.is_set(value):
                continue
            if f.kind is FieldKind.ANNOTATION and not f.path:
                continue
            shadow = self.rfc and self.config.prefer_shadow_path and bool(f.shadow_path)
            paths = struct_tag_to_lib_paths(f, shadow)
            modules = _module_paths(f, shadow, paths) if self.rfc else None
            for i, p in enumerate(paths):
                names = list(p)
                last_module = parent_module
                if modules is not None:
                    mods = modules[i]
                    for j, m in enumerate(mods):
                        previous = parent_module if j == 0 else mods[j - 1]
                        if m != previous:
                            names[j] = f"{m}:{names[j]}"
                    last_module = mods[-1]
                encoded = self.field(f, value, last_module)
                if encoded is None:
                    continue
                _write_path(res, names, encoded)
        return res

    def field(self, f: Field, value, module: Optional[str]):
        kind = f.kind
        if kind is FieldKind.LEAF:
            return self.scalar(value, f.yang_type)
        if kind is FieldKind.LEAF_LIST:
            if not value:
                return None
            return [self.union(v, module) if isinstance(v, UnionValue) else self.scalar(v, f.yang_type)
                    for v in value]
        if kind is FieldKind.ENUM:
            return self.enum(value)
        if kind is FieldKind.UNION:
            return self.union(value, module)
        if kind is FieldKind.CONTAINER:
            return self.struct(value, module) or None
        if kind is FieldKind.KEYED_LIST:
            entries = sorted(((_key_string(k), v) for k, v in value.items()), key=lambda kv: kv[0])
            if self.rfc:
                return [self.struct(v, module) for _, v in entries]
            return {k: self.struct(v, module) for k, v in entries}
        if kind is FieldKind.UNKEYED_LIST:
            return [self.struct(v, module) for v in value]
        if kind is FieldKind.ANNOTATION:
            return list(value)
        raise make_exception(yangstruct_err_json_unsupported, value=value, type=type(value).__name__)

    def scalar(self, value, yang_type: Optional[str] = None):
        if isinstance(value, _Empty) or (yang_type == "empty" and value is True):
            return [None] if self.rfc else True
        if isinstance(value, GoEnum):
            return self.enum(value)
        if isinstance(value, bool):
            return value
        if isinstance(value, bytes):
            return base64.b64encode(value).decode("ascii")
        if isinstance(value, int):
            if self.rfc and yang_type in ("int64", "uint64"):
                return str(value)
            return value
        if isinstance(value, (float, Decimal)):
            if self.rfc and (yang_type == "decimal64" or isinstance(value, Decimal)):
                return str(value)
            return float(value)
        if isinstance(value, str):
            return value
        raise make_exception(yangstruct_err_json_unsupported, value=value, type=type(value).__name__)

    def enum(self, value: GoEnum) -> str:
        name = value.enum_name()
        if self.rfc and self.config.append_module_name:
            definition = value.definition()
            if definition is not None and definition.defining_module:
                return f"{definition.defining_module}:{name}"
        return name

    def union(self, value, module: Optional[str]):
        if isinstance(value, GoEnum):
            return self.enum(value)
        if not isinstance(value, UnionValue):
            raise make_exception(yangstruct_err_invalid_interface, type=type(value).__name__)
        kind = value.kind
        if kind in (UnionKind.INT64, UnionKind.UINT64):
            return str(value.value) if self.rfc else value.value
        if kind is UnionKind.ENUM:
            return self.enum(value.value)
        if kind is UnionKind.STRUCT:
            return self.struct(value.value, module)
        if kind is UnionKind.EMPTY:
            return self.scalar(value.value if isinstance(value.value, _Empty) else Empty)
        return self.scalar(value.value)


def _key_string(key) -> str:
    if isinstance(key, tuple):
        return " ".join(_key_string(k) for k in key)
    if isinstance(key, GoEnum):
        return key.enum_name()
    if isinstance(key, bool):
        return "true" if key else "false"
    return str(key)


def _write_path(tree: Dict, names: List[str], value):
    for name in names[:-1]:
        child = tree.setdefault(name, {})
        if not isinstance(child, dict):
            raise make_exception(yangstruct_err_json_path_conflict, name=name)
        tree = child
    name = names[-1]
    if name in tree:
        if isinstance(tree[name], dict) and isinstance(value, dict):
            tree[name] = merge_json(tree[name], value)
            return
        raise make_exception(yangstruct_err_json_path_conflict, name=name)
    tree[name] = value


def construct_internal_json(s: GoStruct) -> Dict:
    """Decoded JSON tree of ``s`` in the internal encoding."""
    try:
        return _Renderer(JSONFormat.INTERNAL).struct(s)
    except YangStructError as e:
        raise make_exception(yangstruct_err_internal_json, reason=e) from e


def construct_ietf_json(s: GoStruct, rfc7951_config: Optional[RFC7951JSONConfig] = None) -> Dict:
    """Decoded JSON tree of ``s`` in the RFC 7951 encoding."""
    try:
        return _Renderer(JSONFormat.RFC7951, rfc7951_config).struct(s)
    except YangStructError as e:
        raise make_exception(yangstruct_err_ietf_json, reason=e) from e


def _construct(s: GoStruct, config: EmitJSONConfig) -> Dict:
    if config.format is JSONFormat.RFC7951:
        return construct_ietf_json(s, config.rfc7951_config)
    return construct_internal_json(s)


def emit_json(s: GoStruct, config: Optional[EmitJSONConfig] = None) -> str:
    """Validate ``s`` and return it as JSON text with sorted keys."""
    config = config or EmitJSONConfig()
    if not config.skip_validation:
        try:
            s.validate()
        except YangStructError as e:
            raise make_exception(yangstruct_err_validation, reason=e) from e
    doc = _construct(s, config)
    text = json.dumps(doc, cls=StructJsonEncoder, indent=config.indent, sort_keys=True, ensure_ascii=False)
    if config.escape_html:
        for k, v in _HTML_ESCAPES.items():
            text = text.replace(k, v)
    logger.debug("rendered %s as %s JSON", s.__class__.__name__, config.format.value)
    return text


def _merge(a, b, key: str):
    if isinstance(a, dict) and isinstance(b, dict):
        res = dict(a)
        for k, v in b.items():
            res[k] = _merge(res[k], v, k) if k in res else v
        return res
    if isinstance(a, list) and isinstance(b, list):
        return a + b
    if isinstance(a, (dict, list)) or isinstance(b, (dict, list)):
        raise make_exception(yangstruct_err_merge_json_type, key=key, a=a, b=b)
    if a == b and type(a) is type(b):
        return a
    raise make_exception(yangstruct_err_merge_json_scalar, key=key, a=a, b=b)


def merge_json(a: Dict, b: Dict) -> Dict:
    """Merge two decoded JSON objects.  Objects are merged recursively and
    arrays concatenated.  Neither input is modified."""
    if not isinstance(a, dict) or not isinstance(b, dict):
        raise make_exception(yangstruct_err_merge_json_input, a=type(a).__name__, b=type(b).__name__)
    return _merge(copy.deepcopy(a), copy.deepcopy(b), "")


def merge_struct_json(s: GoStruct, json_obj: Dict, config: Optional[EmitJSONConfig] = None) -> Dict:
    """Merge the rendering of ``s`` into the decoded JSON object ``json_obj``."""
    config = config or EmitJSONConfig()
    return merge_json(json_obj, _construct(s, config))
