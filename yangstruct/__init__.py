# Copyright 2021-2024 Nokia

from .config import CompressBehaviour, GeneratorConfig, IROptions
from .go_mapper import GoLangMapper
from .ir import IR, generate_ir
from .proto_mapper import ProtoLangMapper

__all__ = (
    "CompressBehaviour", "GeneratorConfig", "IROptions", "GoLangMapper",
    "ProtoLangMapper", "IR", "generate_ir",
    "config", "exceptions", "ir", "render", "struct_util", "wrappers",
)

__doc__ = """Schema driven generation of typed data structures for YANG models."""

__version__ = "0.1.0"
