"""Decoder unit base classes.

`ProgramDecoder` owns the failure policy shared by every unit: a payload that
cannot be interpreted is logged once, here, and turned into `None`.
Subclasses only describe how bytes map to a function name and fields.

`TaggedDecoder` covers the common case of a discriminant followed by a fixed
sequence of typed fields, driven by an `InstructionLayout`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import ClassVar, Literal

from spind.core.models import CompiledInstruction, InstructionSet, RawInstruction
from spind.decoding.reader import ByteReader, DecodeError, InvalidValueError, UnknownVariantError
from spind.decoding.records import ParsedField, ParsedInstruction, build_instruction_set
from spind.decoding.specs import InstructionLayout, InstructionSpec, parse_field
from spind.log import get_logger

logger = get_logger(__name__)

TagType = Literal["u8", "u32"]


class ProgramDecoder(ABC):
    """Base decoder unit for one program family."""

    name: ClassVar[str]
    program_ids: ClassVar[tuple[str, ...]]
    requires_siblings: ClassVar[bool] = False
    # Account/program kind reported in error logs
    category: ClassVar[str | None] = None

    def decode(
        self,
        instruction: RawInstruction,
        sibling_instructions: Sequence[CompiledInstruction] | None = None,
    ) -> InstructionSet | None:
        """Decode `instruction`; return None (after logging) when it cannot be parsed."""
        reader = ByteReader(instruction.data, category=self.category or self.name)
        try:
            parsed = self.parse(reader, instruction, sibling_instructions)
        except DecodeError as e:
            logger.error(
                "instruction.decode_failed",
                program=instruction.program,
                transaction_hash=instruction.transaction_hash,
                tx_instruction_id=instruction.tx_instruction_id,
                decoder=self.name,
                category=e.category,
                error_type=type(e).__name__,
                reason=str(e),
            )
            return None
        return build_instruction_set(instruction, parsed.function_name, parsed.fields)

    @abstractmethod
    def parse(
        self,
        reader: ByteReader,
        instruction: RawInstruction,
        sibling_instructions: Sequence[CompiledInstruction] | None,
    ) -> ParsedInstruction:
        """Map the payload to a function name and fields, or raise DecodeError."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


def read_fields(reader: ByteReader, spec: InstructionSpec) -> ParsedInstruction:
    """Read every field of `spec` in order."""
    fields = [
        ParsedField(f.name, parse_field(reader, f), f.group or spec.parent_key)
        for f in spec.fields
    ]
    return ParsedInstruction(function_name=spec.name, fields=fields)


class TaggedDecoder(ProgramDecoder):
    """Decoder driven by a tag → InstructionSpec layout.

    Trailing bytes after the last declared field are ignored, matching how
    the programs themselves deserialize their instruction data.
    """

    layout: ClassVar[InstructionLayout]
    tag_type: ClassVar[TagType] = "u32"
    # Expected leading version byte (serum-style markets), None when absent
    version: ClassVar[int | None] = None

    def read_tag(self, reader: ByteReader) -> int:
        if self.version is not None:
            v = reader.u8()
            if v != self.version:
                raise InvalidValueError(f"unsupported layout version {v}", category=reader.category)
        return reader.u8() if self.tag_type == "u8" else reader.u32()

    def parse(
        self,
        reader: ByteReader,
        instruction: RawInstruction,
        sibling_instructions: Sequence[CompiledInstruction] | None,
    ) -> ParsedInstruction:
        tag = self.read_tag(reader)
        spec = self.layout.get(tag)
        if spec is None:
            raise UnknownVariantError(f"unknown instruction tag {tag}", category=reader.category)
        return read_fields(reader, spec)
