# Copyright 2021-2024 Nokia

from enum import Enum, IntEnum
from io import StringIO
from typing import Dict, List, Optional, Sequence

from .errors import *
from .singleton import Empty, _Empty

__all__ = (
    "GoStruct", "Field", "Leaf", "LeafList", "EnumLeaf", "UnionLeaf", "Container",
    "KeyedList", "UnkeyedList", "Annotation", "GoEnum", "EnumDefinition", "UnionKind",
    "UnionValue", "Empty",
)

__doc__ = """Base classes of the generated structs.

A generated struct is a subclass of :class:`GoStruct` declaring one field
descriptor per YANG child.  The descriptors carry the schema paths the
field is mapped to, which drive the copy, merge and JSON functions of
:mod:`yangstruct.struct_util` and :mod:`yangstruct.render`.

.. code-block:: python

   class Parent_Child(GoStruct):
       One = Leaf("config/one", module="openconfig-simple/openconfig-simple")
       Three = EnumLeaf(E_Child_Three, "config/three", module="openconfig-simple/openconfig-simple")

   class Parent(GoStruct):
       Child = Container(Parent_Child, "child", module="openconfig-simple")

Paths are relative to the enclosing struct and use ``/`` between
elements.  A field written to several places lists them separated with
``|``.  ``module`` lists the module of each path element in the same
shape.
"""


class FieldKind(Enum):
    LEAF = "leaf"
    LEAF_LIST = "leaf-list"
    ENUM = "enum"
    UNION = "union"
    CONTAINER = "container"
    KEYED_LIST = "keyed-list"
    UNKEYED_LIST = "unkeyed-list"
    ANNOTATION = "annotation"


class Field:
    """Descriptor of a single field of a :class:`GoStruct`.

    The value is kept in the instance dictionary; reading an unset field
    returns the default of the field kind.
    """
    kind: FieldKind = None

    def __init__(self, path: Optional[str] = None, *, shadow_path: Optional[str] = None,
                 module: Optional[str] = None, shadow_module: Optional[str] = None, yang_type: Optional[str] = None):
        self.name = None
        self.path = path
        self.shadow_path = shadow_path
        self.module = module
        self.shadow_module = shadow_module
        self.yang_type = yang_type

    def __set_name__(self, owner, name):
        self.name = name

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return instance.__dict__.get(self.name, self.default())

    def __set__(self, instance, value):
        instance.__dict__[self.name] = value

    def __delete__(self, instance):
        instance.__dict__.pop(self.name, None)

    def default(self):
        return None

    def is_set(self, value) -> bool:
        return value is not None

    def __repr__(self):
        return f"{self.__class__.__name__}({self.name!r}, path={self.path!r})"


class Leaf(Field):
    """Scalar leaf.  ``None`` is the unset value.

    ``yang_type`` names the YANG base type when it changes the JSON
    encoding, for example ``int64``, ``uint64``, ``binary`` or ``empty``.
    """
    kind = FieldKind.LEAF


class LeafList(Field):
    kind = FieldKind.LEAF_LIST


class EnumLeaf(Field):
    """Leaf of an enumerated type, ``0`` being the unset value."""
    kind = FieldKind.ENUM

    def __init__(self, enum_type, path: Optional[str] = None, **kwargs):
        super().__init__(path, **kwargs)
        self.enum_type = enum_type

    def default(self):
        return self.enum_type(0)

    def is_set(self, value) -> bool:
        return value is not None and int(value) != 0


class UnionLeaf(Field):
    """Leaf of a union type holding a :class:`UnionValue` or a
    :class:`GoEnum`."""
    kind = FieldKind.UNION


class Container(Field):
    kind = FieldKind.CONTAINER

    def __init__(self, struct_type, path: Optional[str] = None, **kwargs):
        super().__init__(path, **kwargs)
        self.struct_type = struct_type


class KeyedList(Field):
    """List stored as a ``dict`` keyed by the key leaf values.  A list with
    several keys uses tuples in ``keys`` order."""
    kind = FieldKind.KEYED_LIST

    def __init__(self, struct_type, keys: Sequence[str], path: Optional[str] = None, **kwargs):
        super().__init__(path, **kwargs)
        self.struct_type = struct_type
        self.keys = tuple(keys)

    def is_set(self, value) -> bool:
        return bool(value)


class UnkeyedList(Field):
    kind = FieldKind.UNKEYED_LIST

    def __init__(self, struct_type, path: Optional[str] = None, **kwargs):
        super().__init__(path, **kwargs)
        self.struct_type = struct_type

    def is_set(self, value) -> bool:
        return bool(value)


class Annotation(Field):
    """Free-form metadata attached to a struct.  Annotations are always
    concatenated when structs are merged."""
    kind = FieldKind.ANNOTATION

    def is_set(self, value) -> bool:
        return bool(value)


class GoStruct:
    """Base class of every generated struct."""

    FAKE_ROOT = False
    _yang_fields: List[Field] = []

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        fields = {}
        for klass in reversed(cls.__mro__):
            for name, value in vars(klass).items():
                if isinstance(value, Field):
                    fields[name] = value
        cls._yang_fields = list(fields.values())

    def __init__(self, **kwargs):
        names = {f.name for f in self._yang_fields}
        for k, v in kwargs.items():
            if k not in names:
                raise make_exception(yangstruct_err_unknown_field, struct=self.__class__.__name__, field=k)
            setattr(self, k, v)

    @classmethod
    def fields(cls) -> List[Field]:
        return list(cls._yang_fields)

    @classmethod
    def field(cls, name: str) -> Field:
        for f in cls._yang_fields:
            if f.name == name:
                return f
        raise make_exception(yangstruct_err_unknown_field, struct=cls.__name__, field=name)

    @classmethod
    def is_fake_root(cls) -> bool:
        return cls.FAKE_ROOT

    def validate(self):
        """Validation hook run before the struct is rendered.  Generated
        code overrides it and raises on invalid content."""
        return None

    def __eq__(self, other):
        if self.__class__ is not other.__class__:
            return NotImplemented
        return all(getattr(self, f.name) == getattr(other, f.name) for f in self._yang_fields)

    __hash__ = None

    def __repr__(self):
        s = StringIO()
        s.write(self.__class__.__name__)
        s.write("(")
        s.write(", ".join(f"{f.name}={getattr(self, f.name)!r}"
                          for f in self._yang_fields if f.is_set(getattr(self, f.name))))
        s.write(")")
        return s.getvalue()


class EnumDefinition:
    """YANG name and defining module of one enumerated value."""
    __slots__ = ("name", "defining_module")

    def __init__(self, name: str, defining_module: str = ""):
        self.name = name
        self.defining_module = defining_module

    def __eq__(self, other):
        return (isinstance(other, EnumDefinition) and self.name == other.name
                and self.defining_module == other.defining_module)

    def __repr__(self):
        return f"EnumDefinition({self.name!r}, {self.defining_module!r})"


class GoEnum(IntEnum):
    """Base of the generated enumerated types.

    The value ``0`` means unset.  Subclasses override :meth:`yang_map`
    when the YANG names differ from the member names.
    """

    @classmethod
    def yang_map(cls) -> Dict[int, EnumDefinition]:
        return {m.value: EnumDefinition(m.name) for m in cls if m.value != 0}

    def enum_name(self) -> str:
        if self.value == 0:
            return ""
        definition = self.yang_map().get(self.value)
        if definition is None:
            raise make_exception(yangstruct_err_out_of_range_enum, type=self.__class__.__name__, value=self.value)
        return definition.name

    def definition(self) -> Optional[EnumDefinition]:
        return self.yang_map().get(self.value)


class UnionKind(Enum):
    STRING = "string"
    INT64 = "int64"
    UINT64 = "uint64"
    FLOAT64 = "float64"
    BOOL = "bool"
    BINARY = "binary"
    EMPTY = "empty"
    ENUM = "enum"
    STRUCT = "struct"


class UnionValue:
    """Value of one member type of a union leaf."""
    __slots__ = ("kind", "value")

    def __init__(self, kind: UnionKind, value):
        self.kind = kind
        self.value = value

    @classmethod
    def string(cls, value: str) -> "UnionValue":
        return cls(UnionKind.STRING, value)

    @classmethod
    def int64(cls, value: int) -> "UnionValue":
        return cls(UnionKind.INT64, value)

    @classmethod
    def uint64(cls, value: int) -> "UnionValue":
        return cls(UnionKind.UINT64, value)

    @classmethod
    def float64(cls, value: float) -> "UnionValue":
        return cls(UnionKind.FLOAT64, value)

    @classmethod
    def boolean(cls, value: bool) -> "UnionValue":
        return cls(UnionKind.BOOL, value)

    @classmethod
    def binary(cls, value: bytes) -> "UnionValue":
        return cls(UnionKind.BINARY, value)

    @classmethod
    def empty(cls) -> "UnionValue":
        return cls(UnionKind.EMPTY, Empty)

    @classmethod
    def enum(cls, value: GoEnum) -> "UnionValue":
        return cls(UnionKind.ENUM, value)

    @classmethod
    def struct(cls, value: GoStruct) -> "UnionValue":
        return cls(UnionKind.STRUCT, value)

    def __eq__(self, other):
        if not isinstance(other, UnionValue):
            return NotImplemented
        return (self.kind is other.kind and type(self.value) is type(other.value)
                and self.value == other.value)

    __hash__ = None

    def __repr__(self):
        if isinstance(self.value, _Empty):
            return f"UnionValue.{self.kind.value}()"
        return f"UnionValue({self.kind.name}, {self.value!r})"
