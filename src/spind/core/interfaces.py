from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from spind.core.models import CompiledInstruction, InstructionSet, RawInstruction


# ---------------------------------------------------------------------------
# IInstructionDecoder
# ---------------------------------------------------------------------------

@runtime_checkable
class IInstructionDecoder(Protocol):
    """
    Decoder unit for one program family.

    Domain expectations:
    - It is registered under every id in `program_ids` (aliases included).
    - `decode` is a pure transform over the instruction bytes (and siblings);
      it performs no network or storage I/O.
    - It returns None when the payload cannot be interpreted; an inert but
      recognized shape still yields an InstructionSet with no properties.
    """

    name: str
    program_ids: tuple[str, ...]
    requires_siblings: bool

    def decode(
        self,
        instruction: RawInstruction,
        sibling_instructions: Sequence[CompiledInstruction] | None = None,
    ) -> InstructionSet | None:
        """
        Decode one instruction into function + property records.

        Implementations:
        - Tagged layout decoders (system, token, stake, vote, market...)
        - Hand-written decoders for irregular payloads (config, secp256k1...)
        - Stub decoders for testing
        """
        ...


DecoderMapping = Mapping[str, IInstructionDecoder]


# ---------------------------------------------------------------------------
# IDecoderRegistryProvider
# ---------------------------------------------------------------------------

@runtime_checkable
class IDecoderRegistryProvider(Protocol):
    """
    Abstract provider of the program id → decoder mapping.

    Domain expectations:
    - The mapping is fully built before the first batch is dispatched and is
      never mutated afterwards, so concurrent reads need no locking.
    """

    def get_registry(self) -> DecoderMapping:
        """
        Return a fully configured decoder registry.

        Implementations:
        - Static provider wrapping the built-in registry
        - Provider filtered to a subset of programs
        """
        ...


# ---------------------------------------------------------------------------
# IInstructionSetSink
# ---------------------------------------------------------------------------

@runtime_checkable
class IInstructionSetSink(Protocol):
    """
    Abstract sink for decoded instruction sets.

    Domain expectations:
    - It accepts batches of InstructionSet objects in any order.
    - Deduplication by (transaction_hash, tx_instruction_id) is its concern.
    """

    def add(self, instruction_sets: Sequence[InstructionSet]) -> int:
        """Buffer a batch; return how many sets were accepted."""
        ...

    def close(self) -> list[Path]:
        """Flush buffered rows and return the written files (possibly none)."""
        ...
