"""Core data models, configuration, and interfaces.

This package provides:
- Data models (RawInstruction, CompiledInstruction, InstructionSet, ...)
- Configuration classes (ProcessorConfig, DecodeFileConfig)
- Decoder / registry / sink interfaces
"""

from spind.core.config import DecodeFileConfig, ProcessorConfig
from spind.core.models import (
    CompiledInstruction,
    DecodeOutcome,
    InstructionFunction,
    InstructionProperty,
    InstructionSet,
    RawInstruction,
)

__all__ = [
    "DecodeFileConfig",
    "ProcessorConfig",
    "CompiledInstruction",
    "DecodeOutcome",
    "InstructionFunction",
    "InstructionProperty",
    "InstructionSet",
    "RawInstruction",
]
