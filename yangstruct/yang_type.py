# Copyright 2021-2023 Nokia

from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import List, Optional, Set, Union

from .errors import *
from .identifier import Identifier


INTEGRAL_LEAF_TYPE = ("int8", "int16", "int32", "int64", "uint8", "uint16", "uint32", "uint64")
YANG_PRIMITIVE_TYPES = INTEGRAL_LEAF_TYPE + ("binary", "boolean", "decimal64", "empty", "string", "instance-identifier")


class YangTypeBase(ABC):
    """Abstract interface for all leaf types."""
    @abstractmethod
    def __str__(self):
        pass

    @abstractmethod
    def __repr__(self):
        pass

    @abstractmethod
    def __hash__(self):
        pass

    @abstractmethod
    def __eq__(self, other):
        if other is None:
            return False
        if not isinstance(other, YangTypeBase):
            return False
        return self.__class__ is other.__class__

    @property
    def kind(self) -> str:
        """Name of the YANG built-in type this type is derived from."""
        return self.__class__.__name__.lower()


class PrimitiveType(YangTypeBase):
    """Primitive built-in types representation, such as int8, string, and binary. All types are in YANG_PRIMITIVE_TYPES."""
    def __init__(self, name):
        assert name in YANG_PRIMITIVE_TYPES, name
        self.identifier = Identifier.builtin(name)

    def __str__(self):
        return str(self.identifier)

    def __repr__(self):
        return f"{self.__class__.__name__}({self.identifier.name!r})"

    def __eq__(self, other):
        return YangTypeBase.__eq__(self, other) and self.identifier == other.identifier

    def __hash__(self):
        return hash(self.identifier)

    @property
    def kind(self) -> str:
        return self.identifier.name


class UnresolvedIdentifier(YangTypeBase):
    """Type reference the parser could not bind to a definition."""
    def __init__(self, identifier: Identifier):
        self.identifier = identifier
        assert not self.identifier.is_builtin()

    def __str__(self):
        return str(self.identifier)

    def __repr__(self):
        return f"{self.__class__.__name__}({self.identifier!r})"

    def __eq__(self, other):
        return YangTypeBase.__eq__(self, other) and self.identifier == other.identifier

    def __hash__(self):
        return hash(self.identifier)

    @property
    def kind(self) -> str:
        return "unresolved"


class YangUnion(YangTypeBase):
    def __init__(self, types: List["YangType"] = ()):
        super().__init__()

        self._types: List["YangType"] = []
        for t in types:
            self.append(t)

    def __iter__(self):
        return self._types.__iter__()

    def __getitem__(self, *args):
        return self._types.__getitem__(*args)

    def __len__(self):
        return len(self._types)

    def append(self, t: "YangType"):
        if t not in self._types:
            self._types.append(t)

    def __str__(self):
        return f"union[{','.join(map(str, self._types))}]"

    def __repr__(self):
        return f"{self.__class__.__name__}(({', '.join(map(repr, self._types))}))"

    def __hash__(self):
        return hash(tuple(self._types))

    def __eq__(self, other):
        return (
            YangTypeBase.__eq__(self, other)
            and self._types == other._types
        )

    @property
    def kind(self) -> str:
        return "union"


class Enumeration(OrderedDict, YangTypeBase):
    def __str__(self):
        return f"enumeration[{'|'.join(map(str, self.keys()))}]"

    def __hash__(self):
        return hash(tuple(self.items()))

    def add_enum(self, name: str):
        val = 1+max(self.values()) if self else 0
        self[name] = val

    @property
    def kind(self) -> str:
        return "enumeration"

    @staticmethod
    def from_names(*names):
        res = Enumeration()
        for n in names:
            res.add_enum(n)
        return res


class Bits(set, YangTypeBase):
    def __str__(self):
        return f"bits[{' '.join(sorted(self))}]"

    def __repr__(self):
        return f"Bits(({', '.join(map(repr, sorted(self)))}))"

    def __hash__(self):
        return hash(frozenset(self))

    def __eq__(self, other):
        return YangTypeBase.__eq__(self, other) and frozenset(self) == frozenset(other)

    @property
    def kind(self) -> str:
        return "bits"


class LeafRef(YangTypeBase):
    """Reference to another leaf.  ``path`` is the YANG path argument, for
    example ``../config/name`` or ``/oc-if:interfaces/oc-if:interface/oc-if:name``."""
    def __init__(self, path: str):
        assert isinstance(path, str) and path
        self._path = path

    def __eq__(self, other):
        return YangTypeBase.__eq__(self, other) and self._path == other._path

    def __ne__(self, other):
        return not(self == other)

    def __str__(self):
        return f"leafref({self._path!s})"

    def __repr__(self):
        return f"LeafRef({self._path!r})"

    def __hash__(self):
        return hash((self.__class__.__name__, self._path))

    @property
    def path(self):
        return self._path

    @property
    def kind(self) -> str:
        return "leafref"


class IdentityRef(YangTypeBase):
    """Reference to a base identity.  ``values`` holds every identity derived
    from the bases, as resolved by the parser."""
    def __init__(self, bases = (), values: Optional[Set[Identifier]] = None):
        self.bases:  List[Identifier] = list(bases)
        self.values: Set[Identifier] = set(values or ())

    def __eq__(self, other):
        return YangTypeBase.__eq__(self, other) and self.bases == other.bases and self.values == other.values

    def __str__(self):
        return f"identityref[{', '.join(b.__str__() for b in self.bases)}]"

    def __repr__(self):
        return f"IdentityRef({self.bases!r}, set(({', '.join(sorted(map(repr, self.values)))})))"

    def __hash__(self):
        return hash((self.__class__.__name__, *self.bases, frozenset(self.values)))

    @property
    def kind(self) -> str:
        return "identityref"


class Typedef(YangTypeBase):
    """Named type derived from ``base``.  The identifier prefix is the module
    defining the typedef."""
    def __init__(self, identifier: Identifier, base: "YangType", default: Optional[str] = None):
        assert isinstance(identifier, Identifier) and not identifier.is_builtin()
        self.identifier = identifier
        self.base = base
        self.default = default

    def __str__(self):
        return str(self.identifier)

    def __repr__(self):
        return f"{self.__class__.__name__}({self.identifier!r}, {self.base!r})"

    def __eq__(self, other):
        return YangTypeBase.__eq__(self, other) and self.identifier == other.identifier and self.base == other.base

    def __hash__(self):
        return hash((self.__class__.__name__, self.identifier))

    @property
    def kind(self) -> str:
        return resolve_typedefs_shallow(self).kind

    @property
    def module(self) -> str:
        return self.identifier.prefix

    @property
    def name(self) -> str:
        return self.identifier.name


YangType = Union[
    PrimitiveType,
    UnresolvedIdentifier,
    Enumeration,
    Bits,
    YangUnion,
    LeafRef,
    IdentityRef,
    Typedef]


def resolve_typedefs_shallow(t: YangType):
    assert isinstance(t, YangTypeBase)
    while type(t) is Typedef:
        t = t.base
    assert isinstance(t, YangTypeBase)
    return t

def typedef_default(t: YangType) -> Optional[str]:
    """Return the first default found walking down a typedef chain."""
    while type(t) is Typedef:
        if t.default is not None:
            return t.default
        t = t.base
    return None

def is_enum_type(t: Optional[YangType]) -> bool:
    """Whether ``t`` contains an enumeration or identityref, looking through
    typedefs and union members."""
    if t is None:
        return False
    t = resolve_typedefs_shallow(t)
    if isinstance(t, (Enumeration, IdentityRef)):
        return True
    if isinstance(t, YangUnion):
        return any(is_enum_type(sub) for sub in t)
    return False


_KNOWN_TYPES = {
        "bits":        Bits,
        "enumeration": Enumeration,
        "union":       YangUnion,
        "identityref": IdentityRef,
    }

def type_from_name(identifier: Identifier):
    if identifier.is_builtin():
        t = _KNOWN_TYPES.get(identifier.name)
        if t is not None:
            return t()
        return PrimitiveType(identifier.name)
    return UnresolvedIdentifier(identifier)
