# Copyright 2021-2024 Nokia

class _Singleton(type):
    """Metaclass of classes with exactly one instance.  Copies of the
    instance are the instance itself."""
    _instances = {}

    def __new__(mcs, name, bases, namespace):
        res = super().__new__(mcs, name, bases, namespace)
        res.__copy__ = lambda self: self
        res.__deepcopy__ = lambda self, memo: self
        return res

    def __call__(cls):
        if cls not in cls._instances:
            cls._instances[cls] = super().__call__()
        return cls._instances[cls]


class _Empty(metaclass=_Singleton):
    """Representation of a set YANG ``empty`` leaf."""

    def __str__(self):
        return "Empty"

    def __repr__(self):
        return "Empty"

    def __bool__(self):
        return True


Empty = _Empty()
Empty.__doc__ = """Define the YANG ``empty`` type.

    The YANG ``empty`` type is not the same as an empty string ``""`` or as
    ``None``.  A leaf of type ``empty`` is either unset (``None``) or set to
    :py:data:`Empty`.  The internal JSON encoding writes it as ``true``, the
    RFC 7951 encoding as ``[null]``.

    .. code-block:: python

       >>> from yangstruct.singleton import Empty
       >>> interface.enabled_flag = Empty
"""
