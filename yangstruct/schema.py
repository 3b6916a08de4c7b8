# Copyright 2021-2024 Nokia

from enum import Enum
from typing import Iterator, List, Optional, Union

from .identifier import Identifier
from .yang_type import YangType, type_from_name

FAKE_ROOT_NODE_NAME = "!fakeroot!"


class SchemaNode:
    """Class to represent a single YANG entry of a compiled schema tree and
    hold additional information, such as type, configuration state, children,
    and data definition statement.

    Schema trees are produced by a YANG parser.  Generation treats them as
    read-only, apart from the fake root which is synthesised here.
    """
    class StatementType(Enum):
        leaf_ = 0
        list_ = 1
        container_ = 2
        leaf_list_ = 3
        choice_ = 4
        case_ = 5
        module_ = 9
        anydata_ = 15

    __slots__ = (
        "name",
        "children",
        "yang_type",
        "namespace",
        "default",
        "description",
        "presence_container",
        "user_ordered",
        "local_keys",
        "data_def_stm",
        "config",
        "defining_module",
        "defining_path",
        "organization",
        "revision",
        "node_name",
        "_parent",
    )

    def __init__(self, name: str, data_def_stm: "SchemaNode.StatementType", parent: Optional["SchemaNode"] = None, *,
                 yang_type: Optional[Union[YangType, str]] = None, keys=(), config: Optional[bool] = None,
                 namespace: Optional[str] = None, default=None, defining_module: Optional[str] = None,
                 defining_path: Optional[str] = None, description: Optional[str] = None,
                 presence_container=False, user_ordered=False):
        assert isinstance(name, str) and name
        self.name = name
        self.children: List[SchemaNode] = []
        if isinstance(yang_type, str):
            yang_type = type_from_name(Identifier.builtin(yang_type))
        self.yang_type: Optional[YangType] = yang_type
        self.namespace = namespace
        self.default = default
        self.description = description
        self.presence_container = presence_container
        self.user_ordered = user_ordered
        self.local_keys: List[str] = list(keys.split() if isinstance(keys, str) else keys)
        self.data_def_stm = data_def_stm
        self.config = config
        self.defining_module = defining_module
        self.defining_path = defining_path
        self.organization = None
        self.revision = None
        self.node_name = None
        self._parent = None
        self.parent = parent

    @property
    def parent(self):
        return self._parent

    @parent.setter
    def parent(self, new_parent):
        self._parent = new_parent
        if new_parent is not None:
            new_parent.children.append(self)

    def __str__(self):
        return f"""SchemaNode("{self.path()}")"""

    def __repr__(self):
        return f"""SchemaNode("{self.path()}", {self.data_def_stm.name[:-1]})"""

    def child(self, name: str) -> Optional["SchemaNode"]:
        """Return the direct child called ``name``, looking through choice and case."""
        for c in self.data_children():
            if c.name == name:
                return c
        return None

    def data_children(self) -> Iterator["SchemaNode"]:
        """Children of the node with choice and case statements flattened."""
        for c in self.children:
            if c.is_choice_or_case():
                yield from c.data_children()
            else:
                yield c

    def is_module(self):
        return self.data_def_stm is self.StatementType.module_

    def is_list(self):
        return self.data_def_stm is self.StatementType.list_

    def is_container(self):
        return self.data_def_stm is self.StatementType.container_

    def is_leaf(self):
        return self.data_def_stm is self.StatementType.leaf_

    def is_leaf_list(self):
        return self.data_def_stm is self.StatementType.leaf_list_

    def is_choice_or_case(self):
        return self.data_def_stm in (self.StatementType.choice_, self.StatementType.case_)

    def is_anydata(self):
        return self.data_def_stm is self.StatementType.anydata_

    @property
    def is_fake_root(self):
        return self.node_name == FAKE_ROOT_NODE_NAME

    def is_config(self) -> bool:
        """Effective config value.  A ``config false`` ancestor wins."""
        node = self
        while node is not None:
            if node.config is False:
                return False
            node = node.parent
        return True

    def root(self) -> "SchemaNode":
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def belonging_module(self) -> str:
        """Name of the module in whose namespace the node resides."""
        return self.root().name

    def defining_module_name(self) -> str:
        return self.defining_module or self.belonging_module()

    def resolved_namespace(self) -> Optional[str]:
        node = self
        while node is not None:
            if node.namespace is not None:
                return node.namespace
            node = node.parent
        return None

    def path_elements(self) -> List[str]:
        elems = []
        node = self
        while node is not None:
            elems.append(node.name)
            node = node.parent
        return elems[::-1]

    def path(self) -> str:
        """Absolute path including the module, choice and case names."""
        return "/" + "/".join(self.path_elements())

    def schema_path_no_choice_case(self) -> List[str]:
        """Path elements as seen in data trees, prefixed by an empty element
        so that joining with ``/`` yields an absolute path."""
        elems = []
        node = self
        while node is not None:
            if not node.is_choice_or_case():
                elems.append(node.name)
            node = node.parent
        return [""] + elems[::-1]

    def data_path(self) -> str:
        return "/".join(self.schema_path_no_choice_case())

    def origin_key(self) -> str:
        return self.defining_path or self.path()

    def is_config_state(self) -> bool:
        """Whether the node is an OpenConfig ``config`` or ``state`` container."""
        return self.is_container() and self.name in ("config", "state")

    def is_surrounding_container(self) -> bool:
        """Container whose only data child is a list."""
        if not self.is_container() or self.presence_container:
            return False
        children = list(self.data_children())
        return len(children) == 1 and children[0].is_list()

    def is_compressed_valid_element(self) -> bool:
        """Whether the node keeps its own directory when paths are compressed."""
        if self.is_list():
            return True
        if not self.is_container():
            return False
        return not self.is_config_state() and not self.is_surrounding_container()


def module(name: str, namespace: Optional[str] = None, **kwargs) -> SchemaNode:
    return SchemaNode(name, SchemaNode.StatementType.module_, namespace=namespace or f"urn:{name}", **kwargs)

def container(parent: SchemaNode, name: str, **kwargs) -> SchemaNode:
    return SchemaNode(name, SchemaNode.StatementType.container_, parent, **kwargs)

def yang_list(parent: SchemaNode, name: str, keys=(), **kwargs) -> SchemaNode:
    return SchemaNode(name, SchemaNode.StatementType.list_, parent, keys=keys, **kwargs)

def leaf(parent: SchemaNode, name: str, yang_type, **kwargs) -> SchemaNode:
    return SchemaNode(name, SchemaNode.StatementType.leaf_, parent, yang_type=yang_type, **kwargs)

def leaf_list(parent: SchemaNode, name: str, yang_type, **kwargs) -> SchemaNode:
    return SchemaNode(name, SchemaNode.StatementType.leaf_list_, parent, yang_type=yang_type, **kwargs)

def choice(parent: SchemaNode, name: str, **kwargs) -> SchemaNode:
    return SchemaNode(name, SchemaNode.StatementType.choice_, parent, **kwargs)

def case(parent: SchemaNode, name: str, **kwargs) -> SchemaNode:
    return SchemaNode(name, SchemaNode.StatementType.case_, parent, **kwargs)

def anydata(parent: SchemaNode, name: str, **kwargs) -> SchemaNode:
    return SchemaNode(name, SchemaNode.StatementType.anydata_, parent, **kwargs)
