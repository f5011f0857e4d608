"""Associated token account program.

The first program release took no instruction data at all; an empty payload is
still a `create`.
"""

from __future__ import annotations

from collections.abc import Sequence

from spind.core.models import CompiledInstruction, RawInstruction
from spind.decoding.base import TaggedDecoder
from spind.decoding.reader import ByteReader
from spind.decoding.records import ParsedInstruction
from spind.decoding.specs import InstructionSpec, make_layout

PROGRAM_ADDRESS = "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL"

ATA_LAYOUT = make_layout(
    InstructionSpec(0, "create"),
    InstructionSpec(1, "create-idempotent"),
    InstructionSpec(2, "recover-nested"),
)


class AssociatedTokenAccountDecoder(TaggedDecoder):
    name = "associated_token_account"
    program_ids = (PROGRAM_ADDRESS,)
    category = "AssociatedTokenAccount"
    tag_type = "u8"
    layout = ATA_LAYOUT

    def parse(
        self,
        reader: ByteReader,
        instruction: RawInstruction,
        sibling_instructions: Sequence[CompiledInstruction] | None,
    ) -> ParsedInstruction:
        if reader.remaining == 0:
            return ParsedInstruction(ATA_LAYOUT[0].name, [])
        return super().parse(reader, instruction, sibling_instructions)
