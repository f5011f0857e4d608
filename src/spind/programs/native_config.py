"""Config program: a single `store` instruction.

Payload is a short-vec of (pubkey, is_signer) pairs followed by the opaque
config state, which is kept as base64.
"""

from __future__ import annotations

from collections.abc import Sequence

from spind.core.models import CompiledInstruction, RawInstruction
from spind.decoding.base import ProgramDecoder
from spind.decoding.reader import ByteReader
from spind.decoding.records import ParsedField, ParsedInstruction

PROGRAM_ADDRESS = "Config1111111111111111111111111111111111111"


class ConfigDecoder(ProgramDecoder):
    name = "config"
    program_ids = (PROGRAM_ADDRESS,)
    category = "Config"

    def parse(
        self,
        reader: ByteReader,
        instruction: RawInstruction,
        sibling_instructions: Sequence[CompiledInstruction] | None,
    ) -> ParsedInstruction:
        n = reader.short_vec_len()
        keys = [{"pubkey": reader.pubkey(), "signer": reader.boolean()} for _ in range(n)]
        return ParsedInstruction("store", [
            ParsedField("keys", keys, "store"),
            ParsedField("data", reader.rest(), "store"),
        ])
