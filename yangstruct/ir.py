# Copyright 2021-2024 Nokia

import json
import logging
from enum import Enum
from typing import Dict, Iterable, List, Optional

from .classifier import find_mappable_entities, find_root_entries
from .config import IROptions
from .directory import Directory, ListKey, build_directories, find_map_paths
from .enum_registry import EnumeratedYANGType, EnumSet, find_enum_set
from .errors import *
from .fakeroot import create_fake_root
from .mapped_type import LangMapper, MappedType
from .schema import SchemaNode
from .schema_tree import SchemaTree
from .yang_type import typedef_default

logger = logging.getLogger(__name__)

__doc__ = """Language independent intermediate representation.

:func:`generate_ir` runs the whole pipeline over a set of compiled modules:
classification of the schema nodes, creation of the fake root, naming of
the enumerated types, creation of the directories and resolution of their
field types.  Either a complete :class:`IR` is returned or an exception is
raised; partial results are never returned.

.. code-block:: python

   from yangstruct import GoLangMapper, IROptions, generate_ir

   ir = generate_ir(modules, GoLangMapper(), IROptions())
   for path in ir.ordered_directory_paths():
       print(ir.directories[path].name)
"""


class NodeType(Enum):
    CONTAINER = "container"
    LIST = "list"
    LEAF = "leaf"
    LEAF_LIST = "leaf-list"
    ANYDATA = "anydata"


def node_type(node: SchemaNode) -> NodeType:
    if node.is_leaf():
        return NodeType.LEAF
    if node.is_leaf_list():
        return NodeType.LEAF_LIST
    if node.is_list():
        return NodeType.LIST
    if node.is_anydata():
        return NodeType.ANYDATA
    return NodeType.CONTAINER


class YANGNodeDetails:
    """Schema information of a single field."""
    __slots__ = (
        "name",
        "defaults",
        "belonging_module",
        "defining_module",
        "root_element_module",
        "path",
        "schema_path",
        "shadow_schema_path",
        "leafref_target_path",
        "presence_statement",
        "description",
        "ordered_by_user",
        "config_false",
    )

    def __init__(self, **kwargs):
        for s in self.__slots__:
            setattr(self, s, kwargs.get(s))

    def as_dict(self):
        return {s: getattr(self, s) for s in self.__slots__}


class NodeDetails:
    """A field of a :class:`ParsedDirectory`.

    ``mapped_paths`` lists every data path the field is written to, each
    relative to the directory unless absolute paths were requested.
    """
    __slots__ = (
        "name",
        "type",
        "lang_type",
        "mapped_paths",
        "mapped_path_modules",
        "shadow_mapped_paths",
        "shadow_mapped_path_modules",
        "yang_details",
    )

    def __init__(self, name: str, type: NodeType, lang_type: Optional[MappedType], yang_details: YANGNodeDetails,
                 mapped_paths=(), mapped_path_modules=(), shadow_mapped_paths=(), shadow_mapped_path_modules=()):
        self.name = name
        self.type = type
        self.lang_type = lang_type
        self.yang_details = yang_details
        self.mapped_paths: List[List[str]] = list(mapped_paths)
        self.mapped_path_modules: List[List[str]] = list(mapped_path_modules)
        self.shadow_mapped_paths: List[List[str]] = list(shadow_mapped_paths)
        self.shadow_mapped_path_modules: List[List[str]] = list(shadow_mapped_path_modules)

    def as_dict(self):
        return {
            "name": self.name,
            "type": self.type.value,
            "lang_type": self.lang_type.as_dict() if self.lang_type is not None else None,
            "mapped_paths": self.mapped_paths,
            "mapped_path_modules": self.mapped_path_modules,
            "shadow_mapped_paths": self.shadow_mapped_paths,
            "shadow_mapped_path_modules": self.shadow_mapped_path_modules,
            "yang_details": self.yang_details.as_dict(),
        }


class ParsedDirectory:
    """A :class:`~yangstruct.directory.Directory` with resolved field types."""
    __slots__ = (
        "name",
        "type",
        "path",
        "schema_path",
        "fields",
        "list_keys",
        "list_key_yang_names",
        "package_name",
        "is_fake_root",
        "belonging_module",
        "root_element_module",
        "defining_module",
        "config_false",
    )

    def __init__(self, name: str, type: NodeType, path: str, schema_path: str):
        self.name = name
        self.type = type
        self.path = path
        self.schema_path = schema_path
        self.fields: Dict[str, NodeDetails] = {}
        self.list_keys: Optional[Dict[str, ListKey]] = None
        self.list_key_yang_names: List[str] = []
        self.package_name = ""
        self.is_fake_root = False
        self.belonging_module = ""
        self.root_element_module = ""
        self.defining_module = ""
        self.config_false = False

    def as_dict(self):
        res = {s: getattr(self, s) for s in self.__slots__ if s not in ("type", "fields", "list_keys")}
        res["type"] = self.type.value
        res["fields"] = {k: v.as_dict() for k, v in self.fields.items()}
        if self.list_keys is not None:
            res["list_keys"] = {k: v.lang_type.as_dict() for k, v in self.list_keys.items()}
        return res

    def __repr__(self):
        return f"ParsedDirectory({self.name!r}, {self.path!r})"


class ModelData:
    """A module the generated code was produced for."""
    __slots__ = ("name", "organization", "version")

    def __init__(self, name: str, organization: Optional[str] = None, version: Optional[str] = None):
        self.name = name
        self.organization = organization
        self.version = version

    def __eq__(self, other):
        return isinstance(other, ModelData) and self.as_dict() == other.as_dict()

    def as_dict(self):
        return {"name": self.name, "organization": self.organization, "version": self.version}


class IR:
    """Result of a generation run, consumed by the code emitters."""

    def __init__(self, directories: Dict[str, ParsedDirectory], enums: Dict[str, EnumeratedYANGType],
                 model_data: List[ModelData], opts: IROptions):
        self.directories = directories
        self.enums = enums
        self.model_data = model_data
        self.opts = opts

    def ordered_directory_paths(self) -> List[str]:
        return sorted(self.directories)

    def directory_by_name(self, name: str) -> Optional[ParsedDirectory]:
        for path in self.ordered_directory_paths():
            if self.directories[path].name == name:
                return self.directories[path]
        return None

    def proto_packages(self) -> Dict[str, List[str]]:
        """Message names of each protobuf package."""
        res: Dict[str, List[str]] = {}
        for d in self.directories.values():
            res.setdefault(d.package_name, []).append(d.name)
        return {k: sorted(v) for k, v in sorted(res.items())}

    def schema_json(self) -> str:
        doc = {
            "directories": {p: self.directories[p].as_dict() for p in self.ordered_directory_paths()},
            "enums": {n: e.as_dict() for n, e in sorted(self.enums.items())},
            "model_data": [m.as_dict() for m in self.model_data],
        }
        return json.dumps(doc, indent=4, sort_keys=True)


def _data_path(elems: List[str]) -> str:
    """Data tree path of schema path elements, dropping the module."""
    return "/" + "/".join(elems[2:])


def _yang_details(field: SchemaNode, shadow: Optional[SchemaNode], tree: SchemaTree) -> YANGNodeDetails:
    if field.default is not None:
        defaults = list(field.default) if isinstance(field.default, (list, tuple)) else [field.default]
    else:
        d = typedef_default(field.yang_type) if field.yang_type is not None else None
        defaults = [d] if d is not None else []
    leafref_target = None
    if field.is_leaf() or field.is_leaf_list():
        leafref_target = tree.leafref_target_path(field)
    return YANGNodeDetails(
        name=field.name,
        defaults=[str(d) for d in defaults],
        belonging_module=field.belonging_module(),
        defining_module=field.defining_module_name(),
        root_element_module=field.root().name,
        path=field.path(),
        schema_path=_data_path(field.schema_path_no_choice_case()),
        shadow_schema_path=_data_path(shadow.schema_path_no_choice_case()) if shadow is not None else "",
        leafref_target_path=leafref_target,
        presence_statement=field.presence_container,
        description=field.description,
        ordered_by_user=field.user_ordered,
        config_false=not field.is_config(),
    )


def _parse_directory(d: Directory, leaf_types: Dict[str, Optional[MappedType]], mapper: LangMapper,
                     opts: IROptions, tree: SchemaTree) -> ParsedDirectory:
    compress = opts.compress_behaviour.compress_enabled()
    entry = d.entry
    pd = ParsedDirectory(d.name, NodeType.LIST if d.is_list() else NodeType.CONTAINER,
                         "/".join(d.path), "/" if d.is_fake_root else _data_path(d.path))
    pd.package_name = d.package_name
    pd.is_fake_root = d.is_fake_root
    pd.config_false = not entry.is_config()
    if not d.is_fake_root:
        pd.belonging_module = entry.belonging_module()
        pd.root_element_module = entry.root().name
        pd.defining_module = entry.defining_module_name()
    if d.list_keys is not None:
        pd.list_keys = d.list_keys
        pd.list_key_yang_names = list(entry.local_keys)

    for name, field in d.fields.items():
        paths, modules = find_map_paths(d, name, compress, False, opts.absolute_map_paths)
        shadow_paths, shadow_modules = find_map_paths(d, name, compress, True, opts.absolute_map_paths)
        pd.fields[name] = NodeDetails(
            mapper.field_name(field),
            node_type(field),
            leaf_types.get(name),
            _yang_details(field, d.shadowed_fields.get(name), tree),
            mapped_paths=paths,
            mapped_path_modules=modules,
            shadow_mapped_paths=shadow_paths,
            shadow_mapped_path_modules=shadow_modules,
        )
    return pd


def generate_ir(modules: Iterable[SchemaNode], mapper: LangMapper, opts: Optional[IROptions] = None) -> IR:
    """Build the intermediate representation of ``modules``.

    Schema errors found while classifying the nodes or building the
    directories are collected and raised together as
    :class:`~yangstruct.exceptions.SchemaErrors`.
    """
    opts = opts or IROptions()
    modules = sorted(modules, key=lambda m: m.name)
    if not modules:
        raise make_exception(yangstruct_err_no_modules)

    po, to = opts.parse_options, opts.transformation_options
    cb = opts.compress_behaviour
    compress = cb.compress_enabled()
    exclude_state = cb.state_excluded()
    excluded = set(po.exclude_modules)
    in_scope = [m for m in modules if m.name not in excluded]

    dir_nodes: Dict[str, SchemaNode] = {}
    enum_nodes: Dict[str, SchemaNode] = {}
    errs = []
    for m in in_scope:
        errs.extend(find_mappable_entities(m, dir_nodes, enum_nodes, po.exclude_modules, compress, modules, exclude_state))
    if errs:
        raise SchemaErrors(errs)

    if to.generate_fake_root:
        root_elems = find_root_entries(modules, excluded, exclude_state)
        create_fake_root(dir_nodes, root_elems, to.fake_root_name, compress)

    enum_set = EnumSet.from_options(opts)
    find_enum_set(enum_nodes, enum_set)

    tree = SchemaTree(modules)
    mapper.set_enum_set(enum_set)
    mapper.set_schema_tree(tree)
    directories, leaf_types = build_directories(dir_nodes, cb, mapper, opts)

    parsed: Dict[str, ParsedDirectory] = {}
    for path, d in directories.items():
        d.package_name = mapper.package_name(d.entry, cb, opts.nested_directories)
        parsed[path] = _parse_directory(d, leaf_types[path], mapper, opts, tree)

    model_data = [ModelData(m.name, m.organization, m.revision) for m in in_scope]
    logger.info("generated IR with %d directories and %d enumerated types from %d modules",
                len(parsed), len(enum_set.enums), len(in_scope))
    return IR(parsed, dict(sorted(enum_set.enums.items())), model_data, opts)
