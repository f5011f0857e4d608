"""JSONL input models for file-based decoding.

Instruction lines::

    {"tx_instruction_id": 0, "transaction_hash": "...", "program": "...",
     "data": "<encoded bytes>", "parent_index": null, "timestamp": 1700000000}

Sibling lines (one per transaction)::

    {"transaction_hash": "...",
     "instructions": [{"program_id_index": 3, "accounts": [0, 1], "data": "..."}]}

`data` is decoded with the encoding chosen by the caller (base58 by default,
as returned by the JSON-RPC `json` transaction encoding).
"""

from __future__ import annotations

import base64
import binascii
import json
from collections import defaultdict
from collections.abc import Iterator, Sequence
from pathlib import Path

import base58
from pydantic import BaseModel, Field

from spind.core.config import DataEncoding
from spind.core.models import CompiledInstruction, RawInstruction


class InputError(ValueError):
    """An input line could not be parsed."""


def decode_data(value: str, encoding: DataEncoding) -> bytes:
    """Decode an encoded payload string into bytes."""
    try:
        if encoding == "base58":
            return base58.b58decode(value)
        if encoding == "base64":
            return base64.b64decode(value, validate=True)
        if encoding == "hex":
            return bytes.fromhex(value[2:] if value.startswith("0x") else value)
    except (ValueError, binascii.Error) as e:
        raise InputError(f"invalid {encoding} payload: {e}") from e
    raise InputError(f"unknown encoding {encoding!r}")


# Bounds match the Arrow column types in spind.storage.columns
INT32_MIN, INT32_MAX = -(2**31), 2**31 - 1
INT64_MIN, INT64_MAX = -(2**63), 2**63 - 1


class RawInstructionIn(BaseModel):
    tx_instruction_id: int = Field(ge=0, le=INT32_MAX)
    transaction_hash: str = Field(min_length=1)
    program: str = Field(min_length=1)
    data: str = ""
    parent_index: int | None = Field(default=None, ge=INT32_MIN, le=INT32_MAX)
    timestamp: int = Field(default=0, ge=INT64_MIN, le=INT64_MAX)

    def to_model(self, encoding: DataEncoding) -> RawInstruction:
        return RawInstruction(
            tx_instruction_id=self.tx_instruction_id,
            transaction_hash=self.transaction_hash,
            program=self.program,
            data=decode_data(self.data, encoding),
            parent_index=self.parent_index,
            timestamp=self.timestamp,
        )


class CompiledInstructionIn(BaseModel):
    program_id_index: int = Field(ge=0)
    accounts: Sequence[int] = ()
    data: str = ""

    def to_model(self, encoding: DataEncoding) -> CompiledInstruction:
        return CompiledInstruction(
            program_id_index=self.program_id_index,
            accounts=tuple(self.accounts),
            data=decode_data(self.data, encoding),
        )


class TransactionSiblingsIn(BaseModel):
    transaction_hash: str = Field(min_length=1)
    instructions: Sequence[CompiledInstructionIn]


def _iter_json_lines(path: Path) -> Iterator[tuple[int, dict]]:
    with open(path, encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                yield lineno, json.loads(line)
            except json.JSONDecodeError as e:
                raise InputError(f"{path}:{lineno}: invalid JSON: {e}") from e


def load_instructions(path: Path, encoding: DataEncoding) -> dict[str, list[RawInstruction]]:
    """Read raw instructions and group them per transaction hash (file order kept)."""
    batches: dict[str, list[RawInstruction]] = defaultdict(list)
    for lineno, obj in _iter_json_lines(path):
        try:
            ins = RawInstructionIn.model_validate(obj).to_model(encoding)
        except ValueError as e:
            raise InputError(f"{path}:{lineno}: {e}") from e
        batches[ins.transaction_hash].append(ins)
    return dict(batches)


def load_siblings(path: Path, encoding: DataEncoding) -> dict[str, list[CompiledInstruction]]:
    """Read compiled sibling instructions keyed by transaction hash."""
    out: dict[str, list[CompiledInstruction]] = {}
    for lineno, obj in _iter_json_lines(path):
        try:
            tx = TransactionSiblingsIn.model_validate(obj)
            out[tx.transaction_hash] = [i.to_model(encoding) for i in tx.instructions]
        except ValueError as e:
            raise InputError(f"{path}:{lineno}: {e}") from e
    return out
