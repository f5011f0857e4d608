"""Upgradeable BPF loader.

Payloads carry the loader's bincode-encoded state, one of four variants:

    0 Uninitialized
    1 Buffer      { authority: Option<Pubkey> }                 + buffer data
    2 Program     { programdata_address: Pubkey }
    3 ProgramData { slot: u64, authority: Option<Pubkey> }      + program data

Buffer and program data bytes start after a fixed-size metadata header,
regardless of whether the authority option is set.
"""

from __future__ import annotations

from collections.abc import Sequence

from spind.core.models import CompiledInstruction, RawInstruction
from spind.decoding.base import ProgramDecoder
from spind.decoding.reader import ByteReader, InvalidValueError, TruncatedDataError, UnknownVariantError
from spind.decoding.records import ParsedField, ParsedInstruction

PROGRAM_ADDRESS = "BPFLoaderUpgradeab1e11111111111111111111111"

BUFFER_METADATA_SIZE = 37  # u32 tag + Option<Pubkey>
PROGRAMDATA_METADATA_SIZE = 45  # u32 tag + u64 slot + Option<Pubkey>


def _trailing_data(reader: ByteReader, header_size: int) -> bytes:
    if reader.offset > header_size:
        raise InvalidValueError("metadata overruns header", category=reader.category)
    # Skip the unused option bytes up to the end of the header
    if reader.remaining < header_size - reader.offset:
        raise TruncatedDataError(
            f"payload shorter than {header_size}-byte metadata header", category=reader.category
        )
    reader.raw(header_size - reader.offset)
    return reader.rest()


class BpfLoaderUpgradeableDecoder(ProgramDecoder):
    name = "bpf_loader_upgradeable"
    program_ids = (PROGRAM_ADDRESS,)
    category = "BpfUpgradeableLoader"

    def parse(
        self,
        reader: ByteReader,
        instruction: RawInstruction,
        sibling_instructions: Sequence[CompiledInstruction] | None,
    ) -> ParsedInstruction:
        if reader.remaining == 0:
            raise InvalidValueError("empty payload", category=reader.category)

        match reader.u32():
            case 0:
                return ParsedInstruction("uninitialized", [])
            case 1:
                authority = reader.option(reader.pubkey)
                data = _trailing_data(reader, BUFFER_METADATA_SIZE)
                return ParsedInstruction("buffer", [
                    ParsedField("authority", authority, "buffer"),
                    ParsedField("data", data, "buffer"),
                ])
            case 2:
                return ParsedInstruction("program", [
                    ParsedField("program_data", reader.pubkey(), "program"),
                ])
            case 3:
                slot = reader.u64()
                authority = reader.option(reader.pubkey)
                data = _trailing_data(reader, PROGRAMDATA_METADATA_SIZE)
                return ParsedInstruction("program-data", [
                    ParsedField("authority", authority, "program_data"),
                    ParsedField("data", data, "program_data"),
                    ParsedField("slot", slot, "program_data"),
                ])
            case tag:
                raise UnknownVariantError(f"unknown loader state {tag}", category=reader.category)
