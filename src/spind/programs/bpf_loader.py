"""BPF loader (deprecated v1 and v2 addresses share one instruction set)."""

from __future__ import annotations

from spind.decoding.base import TaggedDecoder
from spind.decoding.specs import FieldSpec, InstructionSpec, make_layout

PROGRAM_ADDRESS = "BPFLoader1111111111111111111111111111111111"
PROGRAM_ADDRESS_2 = "BPFLoader2111111111111111111111111111111111"

# Generic loader instruction, also used by the native loader
LOADER_LAYOUT = make_layout(
    InstructionSpec(0, "write", (
        FieldSpec("offset", "u32"),
        FieldSpec("bytes", "bytes"),
    )),
    InstructionSpec(1, "finalize"),
)


class BpfLoaderDecoder(TaggedDecoder):
    name = "bpf_loader"
    program_ids = (PROGRAM_ADDRESS, PROGRAM_ADDRESS_2)
    category = "BpfLoader"
    layout = LOADER_LAYOUT
