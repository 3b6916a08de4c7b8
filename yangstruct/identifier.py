# Copyright 2021 Nokia

import re

from .errors import *
from .singleton import _Singleton


class NoModule(metaclass=_Singleton):
    def __str__(self):
        return f"{self.__class__.__name__}()"

    def __hash__(self):
        return id(self)

    def __eq__(self, other):
        return self is other


class Identifier:
    """Class to hold a module-name pair for a single YANG entity, such as a
    typedef, an identity or a path segment."""
    __slots__ = "_name", "_prefix"

    def __init__(self, module, name: str):
        assert ':' not in name
        if isinstance(module, str):
            assert ':' not in module
        self._name = name
        self._prefix = module

    @staticmethod
    def builtin(name: str):
        return Identifier(NoModule(), name)

    def is_builtin(self):
        return self._prefix is NoModule()

    @staticmethod
    def from_yang_string(s: str, default_module=None):
        """Split ``prefix:name`` into an identifier, leaving the prefix unset
        when the string carries none."""
        if ":" not in s:
            return Identifier(default_module if default_module is not None else NoModule(), s)
        if s.count(":") != 1:
            raise make_exception(yangstruct_err_can_have_one_colon, value=s)
        return Identifier(*s.split(":"))

    def __hash__(self):
        return hash((self.prefix, self.name))

    def __str__(self):
        return self.model_string

    def __repr__(self):
        if self.prefix is NoModule():
            return f"""Identifier.builtin({self.name!r})"""
        return f"""Identifier({self.prefix!r}, {self.name!r})"""

    def __eq__(self, other):
        if type(other) is Identifier:
            return self._name == other._name and self._prefix == other._prefix
        elif type(other) == str:
            if ":" in other:
                return self == Identifier.from_yang_string(other)
            return self.name == other
        return False

    def __ne__(self, other):
        return not(self == other)

    def __lt__(self, other):
        return (str(self._prefix), self._name) < (str(other._prefix), other._name)

    _IDENTIFIER_RE = re.compile(r'[a-zA-Z_][a-zA-Z0-9_\-.]*')
    def is_valid(self) -> bool:
        def valid_identifier(x):
            return bool(Identifier._IDENTIFIER_RE.fullmatch(x))
        return (valid_identifier(self._name) and
                (self._prefix is NoModule() or valid_identifier(self._prefix)))

    @property
    def prefix(self):
        return self._prefix

    @property
    def module(self):
        return None if self._prefix is NoModule() else self._prefix

    @property
    def name(self):
        return self._name

    @property
    def model_string(self):
        return f"{self.prefix + ':' if not self.is_builtin() and self.prefix else ''}{self.name}"
