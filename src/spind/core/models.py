"""Core data models for instruction decoding.

This module defines:
- `RawInstruction`: one program-directed instruction as handed over by ingestion.
- `CompiledInstruction`: sibling instruction shape used for cross-referencing.
- `InstructionFunction` / `InstructionProperty`: normalized output records.
- `InstructionSet`: one function record plus its property records.
- `DecodeOutcome`: typed per-instruction result of a dispatch run.

Design notes
------------
- Every output record repeats the identifying fields of its source instruction
  (tx_instruction_id, transaction_hash, parent_index, timestamp) so rows can be
  joined without a separate foreign-key table.
- Property values are always strings; numbers and structures are rendered by
  the decoder before the record is built.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import Any, Literal

OutcomeStatus = Literal["decoded", "unsupported", "failed"]


# === Input records ===


@dataclass(slots=True, frozen=True)
class RawInstruction:
    """Raw instruction payload extracted from a transaction."""

    tx_instruction_id: int  # position within the transaction (local, not chain-derived)
    transaction_hash: str
    program: str  # base58 program id
    data: bytes
    parent_index: int | None = None  # set for inner instructions
    timestamp: int = 0  # local processing time


@dataclass(slots=True, frozen=True)
class CompiledInstruction:
    """Sibling instruction as it appears in the transaction message."""

    program_id_index: int
    accounts: tuple[int, ...]
    data: bytes


# === Output records ===


@dataclass(slots=True, frozen=True)
class InstructionFunction:
    """Which program and which operation a decoded instruction represents."""

    tx_instruction_id: int
    transaction_hash: str
    parent_index: int | None
    program: str
    function_name: str
    timestamp: int


@dataclass(slots=True, frozen=True)
class InstructionProperty:
    """One flattened key/value field of a decoded instruction."""

    tx_instruction_id: int
    transaction_hash: str
    parent_index: int | None
    key: str
    value: str
    parent_key: str
    timestamp: int


@dataclass(slots=True, frozen=True)
class InstructionSet:
    """A function record with its properties, in decoder emission order."""

    function: InstructionFunction
    properties: tuple[InstructionProperty, ...] = ()

    def property_map(self) -> dict[str, str]:
        """Return `{key: value}`; later duplicates win."""
        return {p.key: p.value for p in self.properties}

    def to_dict(self) -> dict[str, Any]:
        return {
            "function": asdict(self.function),
            "properties": [asdict(p) for p in self.properties],
        }

    def to_json_line(self) -> str:
        """Serialize as a compact JSON line."""
        return json.dumps(self.to_dict(), separators=(",", ":")) + "\n"


# === Dispatch outcome ===


@dataclass(slots=True, frozen=True)
class DecodeOutcome:
    """Result of dispatching one instruction.

    `instruction_set` is only set when `status == "decoded"`; `reason` is a
    human-readable explanation for the other statuses.
    """

    tx_instruction_id: int
    transaction_hash: str
    program: str
    status: OutcomeStatus
    instruction_set: InstructionSet | None = None
    reason: str | None = None
