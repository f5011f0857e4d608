"""Orchestration for decoding batches of raw instructions.

This package provides:
- `process`: decode a batch into InstructionSets (never raises for decode problems)
- `process_outcomes`: same, returning typed per-instruction outcomes and stats
- `default_registry`: the shared built-in decoder registry
"""

from spind.orchestration.processor import default_registry, process, process_outcomes

__all__ = [
    "default_registry",
    "process",
    "process_outcomes",
]
