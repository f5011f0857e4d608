from __future__ import annotations

from spind.decoding.base import TaggedDecoder
from spind.programs.bpf_loader import LOADER_LAYOUT

PROGRAM_ADDRESS = "NativeLoader1111111111111111111111111111111"


class NativeLoaderDecoder(TaggedDecoder):
    name = "native_loader"
    program_ids = (PROGRAM_ADDRESS,)
    category = "NativeLoader"
    layout = LOADER_LAYOUT
