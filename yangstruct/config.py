# Copyright 2021-2024 Nokia

import logging
import os
from enum import Enum
from typing import Any, Dict, Mapping

import yaml

from .errors import *

logger = logging.getLogger(__name__)

__doc__ = """Options controlling a generation run.

Options can be constructed in Python or loaded from a YAML document:

.. code-block:: yaml

   parse_options:
     exclude_modules: [openconfig-extensions]
   transformation_options:
     compress_behaviour: prefer-intended-config
     generate_fake_root: true
     shorten_enum_leaf_names: true
   proto_options:
     nested_messages: true
"""


class CompressBehaviour(Enum):
    """How config and state containers are folded into their parent."""
    UNCOMPRESSED = "uncompressed"
    UNCOMPRESSED_EXCLUDE_DERIVED_STATE = "uncompressed-exclude-derived-state"
    PREFER_INTENDED_CONFIG = "prefer-intended-config"
    PREFER_OPERATIONAL_STATE = "prefer-operational-state"
    EXCLUDE_DERIVED_STATE = "exclude-derived-state"

    def compress_enabled(self) -> bool:
        return self in (
            CompressBehaviour.PREFER_INTENDED_CONFIG,
            CompressBehaviour.PREFER_OPERATIONAL_STATE,
            CompressBehaviour.EXCLUDE_DERIVED_STATE,
        )

    def state_excluded(self) -> bool:
        return self in (
            CompressBehaviour.UNCOMPRESSED_EXCLUDE_DERIVED_STATE,
            CompressBehaviour.EXCLUDE_DERIVED_STATE,
        )

    @staticmethod
    def from_string(value) -> "CompressBehaviour":
        if isinstance(value, CompressBehaviour):
            return value
        if isinstance(value, str):
            normalised = value.strip().lower().replace("_", "-")
            for member in CompressBehaviour:
                if member.value == normalised:
                    return member
        raise make_exception(
            yangstruct_err_unknown_compress_behaviour,
            value=value,
            allowed=", ".join(m.value for m in CompressBehaviour),
        )


class _Options:
    """Keyword-constructed option group.  ``_defaults`` lists every option
    together with its default value; the type of the default is the type
    accepted from configuration files."""
    _defaults: Dict[str, Any] = {}
    __slots__ = ()

    def __init__(self, **kwargs):
        for key, default in self._defaults.items():
            value = kwargs.pop(key, default)
            if isinstance(default, (list, tuple)):
                value = list(value)
            setattr(self, key, value)
        if kwargs:
            raise make_exception(yangstruct_err_unknown_config_key, key=sorted(kwargs)[0], section=self.__class__.__name__)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]):
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise make_exception(yangstruct_err_invalid_config_value, value=data, key=cls.__name__, expected="mapping")
        values = {}
        for key, value in data.items():
            if key not in cls._defaults:
                raise make_exception(yangstruct_err_unknown_config_key, key=key, section=cls.__name__)
            values[key] = cls._convert(key, value)
        return cls(**values)

    @classmethod
    def _convert(cls, key, value):
        default = cls._defaults[key]
        if isinstance(default, bool):
            if not isinstance(value, bool):
                raise make_exception(yangstruct_err_invalid_config_value, value=value, key=key, expected="bool")
        elif isinstance(default, (list, tuple)):
            if isinstance(value, str):
                value = [value]
            if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
                raise make_exception(yangstruct_err_invalid_config_value, value=value, key=key, expected="list of strings")
        elif isinstance(default, str):
            if not isinstance(value, str):
                raise make_exception(yangstruct_err_invalid_config_value, value=value, key=key, expected="string")
        return value

    def as_dict(self) -> Dict[str, Any]:
        res = {}
        for key in self._defaults:
            value = getattr(self, key)
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, list):
                value = list(value)
            res[key] = value
        return res

    def __eq__(self, other):
        return type(self) is type(other) and self.as_dict() == other.as_dict()

    def __repr__(self):
        args = ", ".join(f"{k}={v!r}" for k, v in self.as_dict().items())
        return f"{self.__class__.__name__}({args})"


class ParseOpts(_Options):
    """Options that determine which parts of the schema are considered."""
    _defaults = {
        "exclude_modules": [],
        "skip_enum_deduplication": False,
    }
    __slots__ = tuple(_defaults)


class TransformationOpts(_Options):
    """Options that change the shape of the generated types."""
    _defaults = {
        "compress_behaviour": CompressBehaviour.UNCOMPRESSED,
        "generate_fake_root": False,
        "fake_root_name": "",
        "shorten_enum_leaf_names": False,
        "use_defining_module_for_typedef_enum_names": False,
        "enumerations_use_underscores": False,
        "enum_org_prefixes_to_trim": [],
    }
    __slots__ = tuple(_defaults)

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.compress_behaviour = CompressBehaviour.from_string(self.compress_behaviour)

    @classmethod
    def _convert(cls, key, value):
        if key == "compress_behaviour":
            return CompressBehaviour.from_string(value)
        return super()._convert(key, value)


class GoOpts(_Options):
    """Output-shape toggles consumed by struct code emitters."""
    _defaults = {
        "package_name": "ocstructs",
        "generate_simple_unions": False,
        "generate_getters": False,
        "generate_delete_method": False,
        "generate_append_method": False,
        "generate_leaf_getters": False,
        "add_annotation_fields": False,
        "annotation_prefix": "Λ",
        "generate_json_schema": False,
        "include_model_data": False,
    }
    __slots__ = tuple(_defaults)


class ProtoOpts(_Options):
    """Options of the protobuf backend."""
    _defaults = {
        "base_import_path": "",
        "package_name": "openconfig",
        "enum_package_name": "enums",
        "nested_messages": False,
        "annotate_schema_paths": False,
        "annotate_enum_names": False,
    }
    __slots__ = tuple(_defaults)


class IROptions(_Options):
    """Options of the intermediate representation builder."""
    _defaults = {
        "parse_options": None,
        "transformation_options": None,
        "nested_directories": False,
        "absolute_map_paths": False,
    }
    __slots__ = tuple(_defaults)

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if self.parse_options is None:
            self.parse_options = ParseOpts()
        if self.transformation_options is None:
            self.transformation_options = TransformationOpts()

    @property
    def compress_behaviour(self) -> CompressBehaviour:
        return self.transformation_options.compress_behaviour

    def as_dict(self) -> Dict[str, Any]:
        return {
            "parse_options": self.parse_options.as_dict(),
            "transformation_options": self.transformation_options.as_dict(),
            "nested_directories": self.nested_directories,
            "absolute_map_paths": self.absolute_map_paths,
        }


class GeneratorConfig:
    """Complete configuration of a generation run."""
    _sections = {
        "parse_options": ParseOpts,
        "transformation_options": TransformationOpts,
        "go_options": GoOpts,
        "proto_options": ProtoOpts,
    }
    __slots__ = tuple(_sections)

    def __init__(self, parse_options=None, transformation_options=None, go_options=None, proto_options=None):
        self.parse_options = parse_options or ParseOpts()
        self.transformation_options = transformation_options or TransformationOpts()
        self.go_options = go_options or GoOpts()
        self.proto_options = proto_options or ProtoOpts()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GeneratorConfig":
        data = data or {}
        if not isinstance(data, Mapping):
            raise make_exception(yangstruct_err_invalid_config_value, value=data, key="configuration", expected="mapping")
        sections = {}
        for key, value in data.items():
            if key not in cls._sections:
                raise make_exception(yangstruct_err_unknown_config_key, key=key, section=cls.__name__)
            sections[key] = cls._sections[key].from_dict(value)
        return cls(**sections)

    @classmethod
    def from_yaml(cls, source) -> "GeneratorConfig":
        """Load configuration from a YAML document given as a string, a
        stream or a :py:class:`os.PathLike` file path."""
        if isinstance(source, os.PathLike):
            logger.debug("loading generator configuration from %s", source)
            with open(source, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        else:
            data = yaml.safe_load(source)
        return cls.from_dict(data)

    def ir_options(self, **kwargs) -> IROptions:
        return IROptions(parse_options=self.parse_options, transformation_options=self.transformation_options, **kwargs)

    def as_dict(self) -> Dict[str, Any]:
        return {key: getattr(self, key).as_dict() for key in self._sections}

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.as_dict(), sort_keys=True)

    def __eq__(self, other):
        return isinstance(other, GeneratorConfig) and self.as_dict() == other.as_dict()
