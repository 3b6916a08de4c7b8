# Copyright 2021-2024 Nokia

__all__ = (
    "YangStructError", "ModelProcessingError", "SchemaErrors",
    "NameCollisionError", "ConfigError", "InvalidPathError", "MergeError",
    "CopyError", "ValidationError", "JsonEncodeError",
    "make_exception",
)

__doc__ = """This module contains exceptions for error handling within yangstruct.

Schema and naming errors abort a generation run.  Runtime errors are raised
per operation on generated structs and leave the decision to the caller.
"""


class YangStructError(Exception):
    """Base class of all exceptions raised by yangstruct."""
    pass


class ModelProcessingError(YangStructError):
    """Exception raised when an error occurs during processing of the YANG model (schema) when:

    * a leafref cannot be resolved to a target leaf
    * a list uses a binary key
    * a type is not implemented by the selected language mapper
    * an identityref has no base identity
    * an entity cannot be associated with a module
    """
    pass


class SchemaErrors(ModelProcessingError):
    """Collection of :py:class:`ModelProcessingError` found while processing
    independent schema nodes.

    .. property:: errors

       The collected exceptions, in the order they were found.

       :rtype: list
    """

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__("; ".join(str(e) for e in self.errors))


class NameCollisionError(ModelProcessingError):
    """Exception raised when two distinct schema entities would be mapped to
    the same name, for example two modules defining the same top-level
    element underneath the fake root.
    """
    pass


class ConfigError(YangStructError):
    """Exception raised when the generator configuration contains unknown
    keys or values of the wrong type."""
    pass


class InvalidPathError(YangStructError):
    """Exception raised when a path annotation of a generated struct field:

    * is empty
    * fails to parse
    """
    pass


class MergeError(YangStructError):
    """Exception raised when two structs, or two JSON trees, cannot be merged
    without losing data.  Retrying with ``overwrite=True`` resolves conflicts
    of set fields."""
    pass


class CopyError(YangStructError):
    """Exception raised when a struct contains a value that cannot be copied."""
    pass


class ValidationError(YangStructError):
    """Exception raised by the validation hook of a generated struct."""
    pass


class JsonEncodeError(YangStructError):
    """Exception raised when a struct cannot be serialised to JSON."""
    pass


def make_exception(arg, **kwarg):
    """Create an exception from an ``(exception class, message format)`` pair."""
    return arg[0](arg[1].format(**kwarg))
