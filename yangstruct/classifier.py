# Copyright 2021-2024 Nokia

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from .errors import *
from .schema import SchemaNode
from .yang_type import is_enum_type

logger = logging.getLogger(__name__)


def module_name_for(node: SchemaNode, modules: Sequence[SchemaNode]) -> Optional[str]:
    """Name of the module in ``modules`` whose namespace ``node`` resides in."""
    namespace = node.resolved_namespace()
    if namespace is None:
        return None
    for m in modules:
        if m.namespace == namespace:
            return m.name
    return None


def find_mappable_entities(node: SchemaNode, dirs: Dict[str, SchemaNode], enums: Dict[str, SchemaNode],
                           skip_modules: Iterable[str], compress: bool, modules: Sequence[SchemaNode],
                           exclude_state: bool = False) -> List[ModelProcessingError]:
    """Find the descendants of ``node`` which are mapped to directories or
    which carry enumerated types.

    ``dirs`` and ``enums`` are filled in place, keyed by schema path.  The
    errors found are returned and do not stop the walk over sibling nodes.
    """
    skip_modules = list(skip_modules or ())
    errs: List[ModelProcessingError] = []
    if skip_modules:
        name = module_name_for(node, modules)
        if name is None:
            errs.append(make_exception(yangstruct_err_cannot_find_module, path=node.path(), namespace=node.resolved_namespace()))
            return errs
        if name in skip_modules:
            logger.debug("skipping %s, module %s is excluded", node.path(), name)
            return errs

    for ch in node.data_children():
        if exclude_state and not ch.is_config():
            logger.debug("skipping read-only entry %s", ch.path())
            continue
        if ch.is_leaf() or ch.is_leaf_list():
            if is_enum_type(ch.yang_type):
                enums[ch.path()] = ch
        elif ch.is_config_state() and compress:
            errs.extend(find_mappable_entities(ch, dirs, enums, skip_modules, compress, modules, exclude_state))
        elif ch.is_surrounding_container() and compress:
            errs.extend(find_mappable_entities(ch, dirs, enums, skip_modules, compress, modules, exclude_state))
        elif ch.is_list() or ch.is_container():
            dirs[ch.path()] = ch
            errs.extend(find_mappable_entities(ch, dirs, enums, skip_modules, compress, modules, exclude_state))
        elif ch.is_anydata():
            continue
        else:
            errs.append(make_exception(yangstruct_err_unknown_entry_kind, kind=ch.data_def_stm.name[:-1], path=ch.path()))
    return errs


def find_root_entries(modules: Iterable[SchemaNode], exclude_modules: Iterable[str] = (),
                      exclude_state: bool = False) -> List[SchemaNode]:
    """Data nodes directly underneath the modules which are not excluded."""
    exclude_modules = set(exclude_modules or ())
    res = []
    for m in sorted(modules, key=lambda m: m.name):
        if m.name in exclude_modules:
            continue
        for ch in m.data_children():
            if exclude_state and not ch.is_config():
                continue
            res.append(ch)
    return res
