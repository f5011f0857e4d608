"""Record construction: stringify decoded values and stamp instruction identity."""

from __future__ import annotations

import base64
import json
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from spind.core.models import InstructionFunction, InstructionProperty, InstructionSet, RawInstruction


@dataclass(frozen=True, slots=True)
class ParsedField:
    key: str
    value: Any
    parent_key: str


@dataclass(slots=True)
class ParsedInstruction:
    """Decoder output before identity fields are attached."""

    function_name: str
    fields: list[ParsedField]


def _jsonable(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(value).decode("ascii")
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, int) and not isinstance(value, bool) and value.bit_length() > 53:
        # JSON consumers lose precision past 2**53
        return str(value)
    return value


def render_value(value: Any) -> str:
    """Render a decoded value as a storage-safe string."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, str)):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(value).decode("ascii")
    return json.dumps(_jsonable(value), separators=(",", ":"))


def build_instruction_set(
    instruction: RawInstruction,
    function_name: str,
    fields: Iterable[ParsedField] = (),
) -> InstructionSet:
    """Attach the source instruction's identity to every output record."""
    function = InstructionFunction(
        tx_instruction_id=instruction.tx_instruction_id,
        transaction_hash=instruction.transaction_hash,
        parent_index=instruction.parent_index,
        program=instruction.program,
        function_name=function_name,
        timestamp=instruction.timestamp,
    )
    properties = tuple(
        InstructionProperty(
            tx_instruction_id=instruction.tx_instruction_id,
            transaction_hash=instruction.transaction_hash,
            parent_index=instruction.parent_index,
            key=f.key,
            value=render_value(f.value),
            parent_key=f.parent_key,
            timestamp=instruction.timestamp,
        )
        for f in fields
    )
    return InstructionSet(function=function, properties=properties)
