# Copyright 2021-2024 Nokia

import logging
import re
from typing import Iterable, MutableSet

logger = logging.getLogger(__name__)

_WORD_SEPARATORS = re.compile(r"[-.]")
_PROTO_UNSAFE = re.compile(r"[^a-zA-Z0-9_]")


def camel_case(name: str) -> str:
    """Convert a YANG identifier into CamelCase.

    ``-`` and ``.`` separate words and are dropped.  Underscores are kept,
    so that ``a_leaf`` becomes ``A_leaf`` and ``foo-bar`` becomes ``FooBar``.
    """
    parts = _WORD_SEPARATORS.split(name)
    return "".join(p[:1].upper() + p[1:] for p in parts)


def make_name_unique(name: str, defined: MutableSet[str]) -> str:
    """Return ``name``, or ``name`` with the lowest free numeric suffix, and
    record the result in ``defined``."""
    if name not in defined:
        defined.add(name)
        return name
    i = 1
    while f"{name}_{i}" in defined:
        i += 1
    unique = f"{name}_{i}"
    logger.debug("name %s already defined, using %s", name, unique)
    defined.add(unique)
    return unique


def safe_proto_identifier_name(name: str) -> str:
    """Replace characters that are not valid in protobuf identifiers."""
    return _PROTO_UNSAFE.sub("_", name)


def trim_org_prefixes(module_name: str, prefixes: Iterable[str]) -> str:
    """Remove a leading ``<org>-`` from ``module_name`` for the first
    matching organisation prefix."""
    for p in prefixes:
        if p and module_name.startswith(p + "-"):
            return module_name[len(p) + 1:]
    return module_name


def join_name(parts: Iterable[str], use_underscores: bool = True) -> str:
    return ("_" if use_underscores else "").join(p for p in parts if p)


def enum_value_name(name: str) -> str:
    """Name of an enumeration value or identity in generated code,
    for example ``ten-gig.eth`` becomes ``TEN_GIG_ETH``."""
    res = _PROTO_UNSAFE.sub("_", name).upper()
    if res[:1].isdigit():
        res = "_" + res
    return res
