# Copyright 2021-2024 Nokia

import logging
from typing import Dict, Iterable

from .errors import *
from .schema import FAKE_ROOT_NODE_NAME, SchemaNode

logger = logging.getLogger(__name__)

DEFAULT_ROOT_NAME = "device"


def make_fake_root(name: str) -> SchemaNode:
    """Container which holds the root-level entities of all modules.

    It has no parent and is marked so that :func:`is_fake_root` holds."""
    root = SchemaNode(name, SchemaNode.StatementType.container_)
    root.node_name = FAKE_ROOT_NODE_NAME
    return root


def is_fake_root(node: SchemaNode) -> bool:
    return node is not None and node.is_fake_root


def _at_root(node: SchemaNode) -> bool:
    return node is not None and node.parent is None


def _add_child(root: SchemaNode, child: SchemaNode):
    existing = root.child(child.name)
    if existing is child:
        return
    if existing is not None:
        raise make_exception(yangstruct_err_overlapping_root, name=child.name, existing=existing.path(), new=child.path())
    # the child keeps its schema parent
    root.children.append(child)


def create_fake_root(dirs: Dict[str, SchemaNode], root_elems: Iterable[SchemaNode],
                     root_name: str = DEFAULT_ROOT_NAME, compress: bool = False) -> SchemaNode:
    """Insert a fake root into ``dirs`` and return it.

    The directories directly underneath a module become children of the
    root, as do the lists within a surrounding container at the root
    when ``compress`` is set and the leaves found in ``root_elems``.
    """
    root_name = root_name or DEFAULT_ROOT_NAME
    root = make_fake_root(root_name)
    key = root.path()
    if key in dirs:
        raise make_exception(yangstruct_err_fake_root_clash, name=root_name, path=key)

    for path in sorted(dirs):
        node = dirs[path]
        if _at_root(node.parent):
            _add_child(root, node)
        elif compress and node.is_list() and node.parent is not None and _at_root(node.parent.parent) \
                and node.parent.is_surrounding_container():
            _add_child(root, node)

    for node in root_elems:
        if node.is_leaf() or node.is_leaf_list():
            _add_child(root, node)

    dirs[key] = root
    logger.debug("created fake root %s with %d children", root_name, len(root.children))
    return root
