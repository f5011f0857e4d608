"""Decoder registry keyed by program id.

This module exposes:
- `make_registry(decoders)` → DecoderRegistry with the given units registered
- `add_decoder(registry, decoder)` → register one unit under all its aliases
- `add_many(registry, decoders)` → register multiple
- `resolve(registry, program)` → exact, case-sensitive lookup

Extending the system only requires registering another decoder unit; the
dispatcher never branches on program ids.
"""

from __future__ import annotations

from collections.abc import Iterable

from spind.core.interfaces import DecoderMapping, IDecoderRegistryProvider, IInstructionDecoder

# Program id (base58, exact) → decoder unit.
DecoderRegistry = dict[str, IInstructionDecoder]


def make_registry(decoders: Iterable[IInstructionDecoder] = ()) -> DecoderRegistry:
    """Build a registry with the given decoder units."""
    reg: DecoderRegistry = {}
    add_many(reg, decoders)
    return reg


def add_decoder(registry: DecoderRegistry, decoder: IInstructionDecoder) -> None:
    """Register `decoder` under every id in `decoder.program_ids`.

    Re-registering the same unit is a no-op; claiming an id that already
    belongs to a different unit raises ValueError.
    """
    if not decoder.program_ids:
        raise ValueError(f"{decoder.name}: decoder declares no program ids")
    for program_id in decoder.program_ids:
        current = registry.get(program_id)
        if current is not None and current is not decoder:
            raise ValueError(
                f"program id {program_id} already registered to {current.name}, "
                f"cannot register {decoder.name}"
            )
    for program_id in decoder.program_ids:
        registry[program_id] = decoder


def add_many(registry: DecoderRegistry, decoders: Iterable[IInstructionDecoder]) -> None:
    """Register many decoder units."""
    for d in decoders:
        add_decoder(registry, d)


def resolve(registry: DecoderMapping, program: str) -> IInstructionDecoder | None:
    """Return the decoder for `program`, or None for an unsupported program."""
    return registry.get(program)


def registered_decoders(registry: DecoderMapping) -> list[IInstructionDecoder]:
    """Distinct decoder units in registration order."""
    seen: dict[int, IInstructionDecoder] = {}
    for d in registry.values():
        seen.setdefault(id(d), d)
    return list(seen.values())


class DecoderRegistryProvider(IDecoderRegistryProvider):
    """
    Simple registry provider that always returns the same DecoderRegistry.

    This is the bridge between the concrete decoder catalog and the dispatch
    use case, which only depends on the interface.
    """

    def __init__(self, registry: DecoderMapping) -> None:
        self._registry = registry

    def get_registry(self) -> DecoderMapping:
        return self._registry
