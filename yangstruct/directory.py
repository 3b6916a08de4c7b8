# Copyright 2021-2024 Nokia

import logging
from typing import Dict, List, Optional, Tuple

from .config import CompressBehaviour
from .errors import *
from .mapped_type import LangMapper, MappedType
from .schema import SchemaNode

logger = logging.getLogger(__name__)


class ListKey:
    """Key leaf of a keyed list and its scalar native type."""
    __slots__ = ("name", "lang_type")

    def __init__(self, name: str, lang_type: Optional[MappedType] = None):
        self.name = name
        self.lang_type = lang_type

    def __eq__(self, other):
        return isinstance(other, ListKey) and self.name == other.name and self.lang_type == other.lang_type

    def __repr__(self):
        return f"ListKey({self.name!r}, {self.lang_type!r})"


class Directory:
    """Composite type generated for one container or list of the schema.

    ``fields`` maps field names onto the schema nodes backing them, in name
    order.  ``shadowed_fields`` holds the copies of compressed config or
    state leaves that were not preferred.
    """
    __slots__ = (
        "name",
        "entry",
        "fields",
        "shadowed_fields",
        "path",
        "list_keys",
        "is_fake_root",
        "package_name",
    )

    def __init__(self, name: str, entry: SchemaNode):
        self.name = name
        self.entry = entry
        self.fields: Dict[str, SchemaNode] = {}
        self.shadowed_fields: Dict[str, SchemaNode] = {}
        self.path: List[str] = [""] + [entry.name] if entry.is_fake_root else entry.schema_path_no_choice_case()
        self.list_keys: Optional[Dict[str, ListKey]] = None
        self.is_fake_root = entry.is_fake_root
        self.package_name = ""

    def is_list(self) -> bool:
        return self.entry.is_list()

    def __repr__(self):
        return f"Directory({self.name!r}, {'/'.join(self.path)!r})"


def find_all_children(node: SchemaNode, compress_behaviour: CompressBehaviour
                      ) -> Tuple[Dict[str, SchemaNode], Dict[str, SchemaNode], List[ModelProcessingError]]:
    """Find the schema nodes which become fields of the directory of ``node``.

    With compression, the children of ``config`` and ``state`` containers
    and the lists within surrounding containers become direct fields.  A
    leaf defined in both ``config`` and ``state`` is taken from the
    preferred container and the other copy is returned as shadowed.
    """
    exclude_state = compress_behaviour.state_excluded()
    if exclude_state and not node.is_config():
        return {}, {}, []
    compress = compress_behaviour.compress_enabled()

    direct: List[SchemaNode] = []
    config_children: List[SchemaNode] = []
    state_children: List[SchemaNode] = []
    for child in node.data_children():
        if exclude_state and not child.is_config():
            continue
        if compress and child.is_config_state():
            bucket = config_children if child.name == "config" else state_children
            for gc in child.data_children():
                if exclude_state and not gc.is_config():
                    continue
                bucket.append(gc)
        elif compress and child.is_surrounding_container():
            direct.extend(child.data_children())
        else:
            direct.append(child)

    if compress_behaviour is CompressBehaviour.PREFER_OPERATIONAL_STATE:
        preferred, other = state_children, config_children
    else:
        preferred, other = config_children, state_children

    fields: Dict[str, SchemaNode] = {}
    shadowed: Dict[str, SchemaNode] = {}
    errs: List[ModelProcessingError] = []
    for child in direct:
        if child.name in fields:
            errs.append(make_exception(yangstruct_err_duplicate_field, name=child.name, path=node.path()))
            continue
        fields[child.name] = child

    for child in preferred:
        existing = fields.get(child.name)
        if existing is not None:
            # A list key directly under the list is a reference to the
            # key leaf in config or state, which is mapped instead.
            if not (node.is_list() and child.name in node.local_keys and existing.parent is node):
                errs.append(make_exception(yangstruct_err_duplicate_field, name=child.name, path=node.path()))
                continue
        fields[child.name] = child

    for child in other:
        if child.name in fields:
            shadowed[child.name] = child
        else:
            fields[child.name] = child

    return dict(sorted(fields.items())), dict(sorted(shadowed.items())), errs


def find_schema_path(directory: Directory, field_name: str, shadow: bool = False, absolute: bool = False) -> Optional[List[str]]:
    """Path of a field relative to its directory, or from the root of the
    data tree when ``absolute`` is set.  ``None`` is returned when a
    shadowed path is requested for a field without one."""
    field = directory.shadowed_fields.get(field_name) if shadow else directory.fields.get(field_name)
    if field is None:
        if shadow:
            return None
        raise make_exception(yangstruct_err_unknown_field, struct=directory.name, field=field_name)
    field_path = field.schema_path_no_choice_case()
    if absolute:
        return [""] + field_path[2:]
    return field_path[len(directory.path):]


def path_modules(directory: Directory, field: SchemaNode, path_length: int) -> List[str]:
    """Module of each element of a field path of ``path_length`` elements."""
    modules = []
    node = field
    while node is not None and len(modules) < path_length:
        if not node.is_choice_or_case():
            modules.append(node.belonging_module())
        node = node.parent
    while len(modules) < path_length:
        modules.append(field.belonging_module())
    return modules[::-1]


def find_map_paths(directory: Directory, field_name: str, compress: bool, shadow: bool = False,
                   absolute: bool = False) -> Tuple[List[List[str]], List[List[str]]]:
    """All paths a field maps to, together with the module of each path element.

    With compression the key leaves of a list also map to the leaf
    directly underneath the list.
    """
    child_path = find_schema_path(directory, field_name, shadow, absolute)
    if child_path is None:
        return [], []
    field = directory.shadowed_fields[field_name] if shadow else directory.fields[field_name]
    map_paths = [child_path]
    modules = [path_modules(directory, field, len([p for p in child_path if p]))]
    if absolute:
        modules[0] = [""] + modules[0]

    if not compress or not directory.is_list():
        return map_paths, modules

    for k in directory.entry.local_keys:
        if k != field_name:
            continue
        if absolute:
            key_path = directory.entry.schema_path_no_choice_case()
            key_path = [""] + key_path[2:] + [k]
        else:
            key_path = [k]
        if key_path == child_path:
            continue
        map_paths.append(key_path)
        key_modules = [directory.entry.belonging_module()] * len([p for p in key_path if p])
        modules.append([""] + key_modules if absolute else key_modules)
    return map_paths, modules


def _is_binary(mtype: MappedType, binary_types) -> bool:
    if mtype.union_types:
        return any(n in binary_types for n in mtype.union_types)
    return mtype.native_type in binary_types


def _key_node(directory: Directory, key: str) -> Optional[SchemaNode]:
    return directory.fields.get(key) or directory.entry.child(key)


def build_directories(dir_nodes: Dict[str, SchemaNode], compress_behaviour: CompressBehaviour,
                      mapper: LangMapper, opts) -> Tuple[Dict[str, Directory], Dict[str, Dict[str, Optional[MappedType]]]]:
    """Create the directories of ``dir_nodes`` and map the types of their
    leaves.  Errors of independent directories are raised together."""
    dirs: Dict[str, Directory] = {}
    errs: List[ModelProcessingError] = []

    for path in sorted(dir_nodes):
        node = dir_nodes[path]
        d = Directory(mapper.directory_name(node, compress_behaviour), node)
        d.fields, d.shadowed_fields, ferrs = find_all_children(node, compress_behaviour)
        errs.extend(ferrs)
        dirs[path] = d

    leaf_types: Dict[str, Dict[str, Optional[MappedType]]] = {}
    for path, d in dirs.items():
        types: Dict[str, Optional[MappedType]] = {}
        for name, field in d.fields.items():
            if not (field.is_leaf() or field.is_leaf_list()):
                types[name] = None
                continue
            try:
                types[name] = mapper.leaf_type(field, opts)
            except ModelProcessingError as e:
                errs.append(e)
        leaf_types[path] = types

        if not d.is_list() or not d.entry.local_keys:
            continue
        d.list_keys = {}
        for k in d.entry.local_keys:
            key_node = _key_node(d, k)
            if key_node is None:
                errs.append(make_exception(yangstruct_err_missing_key, path=path, field=k))
                continue
            try:
                ktype = mapper.key_leaf_type(key_node, opts)
            except ModelProcessingError as e:
                errs.append(e)
                continue
            if _is_binary(ktype, mapper.binary_types()):
                errs.append(make_exception(yangstruct_err_binary_key, path=path, field=k))
                continue
            d.list_keys[k] = ListKey(k, ktype)

    if errs:
        raise SchemaErrors(errs)
    logger.debug("built %d directories", len(dirs))
    return dirs, leaf_types
