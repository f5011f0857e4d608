"""Instruction decoding primitives.

This package provides:
- Layout specification system (InstructionSpec, FieldSpec, InstructionLayout)
- Binary reader and the DecodeError taxonomy
- Decoder unit base classes (ProgramDecoder, TaggedDecoder)
- Registry management keyed by program id
"""

from spind.decoding.base import ProgramDecoder, TaggedDecoder
from spind.decoding.reader import (
    ByteReader,
    DecodeError,
    InvalidValueError,
    MissingSiblingError,
    TruncatedDataError,
    UnknownVariantError,
)
from spind.decoding.records import ParsedField, ParsedInstruction, build_instruction_set, render_value
from spind.decoding.registry import (
    DecoderRegistry,
    DecoderRegistryProvider,
    add_decoder,
    add_many,
    make_registry,
    resolve,
)
from spind.decoding.specs import FieldSpec, InstructionLayout, InstructionSpec, make_layout

__all__ = [
    "ProgramDecoder",
    "TaggedDecoder",
    "ByteReader",
    "DecodeError",
    "InvalidValueError",
    "MissingSiblingError",
    "TruncatedDataError",
    "UnknownVariantError",
    "ParsedField",
    "ParsedInstruction",
    "build_instruction_set",
    "render_value",
    "DecoderRegistry",
    "DecoderRegistryProvider",
    "add_decoder",
    "add_many",
    "make_registry",
    "resolve",
    "FieldSpec",
    "InstructionLayout",
    "InstructionSpec",
    "make_layout",
]
