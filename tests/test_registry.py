import pytest

from spind.core.interfaces import IDecoderRegistryProvider, IInstructionDecoder
from spind.decoding.registry import (
    DecoderRegistryProvider,
    add_decoder,
    make_registry,
    registered_decoders,
    resolve,
)
from spind.programs import DECODER_TYPES, default_decoders, make_default_registry
from spind.programs import bpf_loader, serum_market
from spind.programs.native_system import SystemDecoder


def test_make_default_registry() -> None:
    registry = make_default_registry()
    decoders = registered_decoders(registry)
    assert len(decoders) == len(DECODER_TYPES)
    assert sum(len(d.program_ids) for d in decoders) == len(registry)


def test_every_decoder_satisfies_the_capability() -> None:
    for d in default_decoders():
        assert isinstance(d, IInstructionDecoder)


def test_aliases_resolve_to_the_same_unit() -> None:
    registry = make_default_registry()
    assert resolve(registry, bpf_loader.PROGRAM_ADDRESS) is resolve(registry, bpf_loader.PROGRAM_ADDRESS_2)
    serum = {
        resolve(registry, pid)
        for pid in (
            serum_market.PROGRAM_ADDRESS_V1,
            serum_market.PROGRAM_ADDRESS_V2,
            serum_market.PROGRAM_ADDRESS_V3,
        )
    }
    assert len(serum) == 1


def test_resolve_is_exact_and_case_sensitive() -> None:
    registry = make_default_registry()
    assert resolve(registry, "Vote111111111111111111111111111111111111111") is not None
    assert resolve(registry, "vote111111111111111111111111111111111111111") is None
    assert resolve(registry, "Vote1111") is None
    assert resolve(registry, "") is None


def test_conflicting_registration_raises() -> None:
    class OtherSystem(SystemDecoder):
        name = "other_system"

    registry = make_registry([SystemDecoder()])
    with pytest.raises(ValueError):
        add_decoder(registry, OtherSystem())


def test_reregistering_same_unit_is_noop() -> None:
    d = SystemDecoder()
    registry = make_registry([d])
    add_decoder(registry, d)
    assert registered_decoders(registry) == [d]


def test_registry_provider() -> None:
    registry = make_default_registry()
    provider = DecoderRegistryProvider(registry)
    assert isinstance(provider, IDecoderRegistryProvider)
    assert provider.get_registry() is registry
