# Copyright 2021-2024 Nokia

import re
from typing import Iterable, List, Optional

from .errors import *
from .identifier import Identifier
from .schema import SchemaNode
from .yang_type import LeafRef, resolve_typedefs_shallow

_PREDICATE_RE = re.compile(r"\[[^\]]*\]")


class SchemaTree:
    """Index of the compiled schema used to resolve leafref targets.

    Paths are walked over data nodes, so choice and case statements are
    transparent, and namespace prefixes are ignored.
    """

    def __init__(self, modules: Iterable[SchemaNode]):
        self.modules: List[SchemaNode] = sorted(modules, key=lambda m: m.name)

    @staticmethod
    def split_path(path: str) -> List[str]:
        path = _PREDICATE_RE.sub("", path.strip())
        parts = []
        for p in path.split("/"):
            p = p.strip()
            if not p:
                continue
            if p in ("..", "."):
                parts.append(p)
                continue
            parts.append(Identifier.from_yang_string(p).name)
        return parts

    def _walk(self, start: SchemaNode, parts: List[str]) -> Optional[SchemaNode]:
        current = start
        for p in parts:
            if p == ".":
                continue
            if p == "..":
                current = current.parent
                while current is not None and current.is_choice_or_case():
                    current = current.parent
                if current is None:
                    return None
                continue
            current = current.child(p)
            if current is None:
                return None
        return current

    def _absolute_roots(self, context: SchemaNode) -> List[SchemaNode]:
        own = context.root()
        return [own] + [m for m in self.modules if m is not own]

    def resolve_path(self, path: str, context: SchemaNode) -> Optional[SchemaNode]:
        parts = self.split_path(path)
        if path.strip().startswith("/"):
            for root in self._absolute_roots(context):
                target = self._walk(root, parts)
                if target is not None:
                    return target
            return None
        return self._walk(context, parts)

    def resolve_leafref_target(self, path: str, context: SchemaNode) -> SchemaNode:
        """Return the leaf referenced by ``path`` from ``context``.  Chains of
        leafrefs are followed until a leaf with a concrete type is found."""
        seen = set()
        current_path, current_ctx = path, context
        while True:
            target = self.resolve_path(current_path, current_ctx)
            if target is None or not (target.is_leaf() or target.is_leaf_list()):
                raise make_exception(yangstruct_err_leafref_not_found, path=current_path, context=current_ctx.path())
            if id(target) in seen or target is context:
                raise make_exception(yangstruct_err_leafref_loop, path=path, context=context.path())
            seen.add(id(target))
            target_type = resolve_typedefs_shallow(target.yang_type)
            if not isinstance(target_type, LeafRef):
                return target
            current_path, current_ctx = target_type.path, target

    def leafref_target_path(self, node: SchemaNode) -> Optional[str]:
        """Data path of the leafref target of ``node``, if it is a leafref."""
        if node.yang_type is None:
            return None
        t = resolve_typedefs_shallow(node.yang_type)
        if not isinstance(t, LeafRef):
            return None
        return self.resolve_leafref_target(t.path, node).data_path()
