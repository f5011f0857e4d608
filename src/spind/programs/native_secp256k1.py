"""Secp256k1 signature-verification precompile.

The payload only holds offsets; signatures, Ethereum addresses and messages
live in other instructions of the same transaction, addressed by index. The
decoder therefore needs the transaction's compiled instructions as siblings.

Layout: u8 count, then `count` packed offset records of 11 bytes each.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from spind.core.models import CompiledInstruction, RawInstruction
from spind.decoding.base import ProgramDecoder
from spind.decoding.reader import ByteReader, MissingSiblingError, TruncatedDataError
from spind.decoding.records import ParsedField, ParsedInstruction

PROGRAM_ADDRESS = "KeccakSecp256k11111111111111111111111111111"

SIGNATURE_SERIALIZED_SIZE = 64
HASHED_PUBKEY_SERIALIZED_SIZE = 20


@dataclass(frozen=True, slots=True)
class SecpSignatureOffsets:
    signature_offset: int
    signature_instruction_index: int
    eth_address_offset: int
    eth_address_instruction_index: int
    message_data_offset: int
    message_data_size: int
    message_instruction_index: int

    @classmethod
    def read(cls, reader: ByteReader) -> SecpSignatureOffsets:
        return cls(
            signature_offset=reader.u16(),
            signature_instruction_index=reader.u8(),
            eth_address_offset=reader.u16(),
            eth_address_instruction_index=reader.u8(),
            message_data_offset=reader.u16(),
            message_data_size=reader.u16(),
            message_instruction_index=reader.u8(),
        )


def _sibling_slice(
    siblings: Sequence[CompiledInstruction],
    index: int,
    offset: int,
    size: int,
    *,
    what: str,
    category: str | None,
) -> bytes:
    if index >= len(siblings):
        raise MissingSiblingError(
            f"{what} references instruction {index}, transaction has {len(siblings)}",
            category=category,
        )
    data = siblings[index].data
    if offset + size > len(data):
        raise TruncatedDataError(
            f"{what} slice [{offset}:{offset + size}] outside instruction {index} "
            f"({len(data)} bytes)",
            category=category,
        )
    return data[offset : offset + size]


class Secp256k1Decoder(ProgramDecoder):
    name = "secp256k1"
    program_ids = (PROGRAM_ADDRESS,)
    category = "Secp256k1"
    requires_siblings = True

    def parse(
        self,
        reader: ByteReader,
        instruction: RawInstruction,
        sibling_instructions: Sequence[CompiledInstruction] | None,
    ) -> ParsedInstruction:
        if sibling_instructions is None:
            raise MissingSiblingError("sibling instructions were not supplied", category=reader.category)

        count = reader.u8()
        offsets = [SecpSignatureOffsets.read(reader) for _ in range(count)]

        fields = [ParsedField("count", count, "verify")]
        for i, o in enumerate(offsets):
            parent_key = f"signature_{i}"
            sig = _sibling_slice(
                sibling_instructions,
                o.signature_instruction_index,
                o.signature_offset,
                SIGNATURE_SERIALIZED_SIZE + 1,
                what="signature",
                category=reader.category,
            )
            eth_address = _sibling_slice(
                sibling_instructions,
                o.eth_address_instruction_index,
                o.eth_address_offset,
                HASHED_PUBKEY_SERIALIZED_SIZE,
                what="eth address",
                category=reader.category,
            )
            message = _sibling_slice(
                sibling_instructions,
                o.message_instruction_index,
                o.message_data_offset,
                o.message_data_size,
                what="message",
                category=reader.category,
            )
            fields.extend([
                ParsedField("signature", sig[:SIGNATURE_SERIALIZED_SIZE].hex(), parent_key),
                ParsedField("recovery_id", sig[SIGNATURE_SERIALIZED_SIZE], parent_key),
                ParsedField("eth_address", "0x" + eth_address.hex(), parent_key),
                ParsedField("message", message.hex(), parent_key),
                ParsedField("message_instruction_index", o.message_instruction_index, parent_key),
            ])
        return ParsedInstruction("verify", fields)
