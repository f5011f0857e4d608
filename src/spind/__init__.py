from __future__ import annotations

from .core.config import ProcessorConfig
from .core.models import (
    CompiledInstruction,
    DecodeOutcome,
    InstructionFunction,
    InstructionProperty,
    InstructionSet,
    RawInstruction,
)
from .decoding.base import ProgramDecoder, TaggedDecoder
from .decoding.registry import add_decoder, add_many, make_registry, resolve
from .decoding.specs import FieldSpec, InstructionSpec, make_layout
from .orchestration.processor import process, process_outcomes
from .programs import make_default_registry

__version__ = "0.1.0"

__all__ = [
    "process",
    "process_outcomes",
    "make_registry",
    "make_default_registry",
    "add_decoder",
    "add_many",
    "resolve",
    "ProgramDecoder",
    "TaggedDecoder",
    "FieldSpec",
    "InstructionSpec",
    "make_layout",
    "ProcessorConfig",
    "CompiledInstruction",
    "DecodeOutcome",
    "InstructionFunction",
    "InstructionProperty",
    "InstructionSet",
    "RawInstruction",
]
