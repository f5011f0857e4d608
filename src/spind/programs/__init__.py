"""Built-in decoder units, one module per program family.

Available units:
- Loaders: bpf_loader (v1/v2 aliases), bpf_loader_upgradeable, native_loader
- Native programs: system, config, stake, vote, secp256k1
- SPL: token, associated token account, token-swap, token-lending
- Third party: Solend lending, Serum market (V1/V2/V3 aliases)

Example
-------
>>> from spind.programs import make_default_registry
>>> registry = make_default_registry()
>>> registry["11111111111111111111111111111111"].name
'system'
"""

from __future__ import annotations

from spind.decoding.base import ProgramDecoder
from spind.decoding.registry import DecoderRegistry, make_registry
from spind.programs.bpf_loader import BpfLoaderDecoder
from spind.programs.bpf_loader_upgradeable import BpfLoaderUpgradeableDecoder
from spind.programs.native_associated_token_account import AssociatedTokenAccountDecoder
from spind.programs.native_config import ConfigDecoder
from spind.programs.native_loader import NativeLoaderDecoder
from spind.programs.native_secp256k1 import Secp256k1Decoder
from spind.programs.native_stake import StakeDecoder
from spind.programs.native_system import SystemDecoder
from spind.programs.native_token import TokenDecoder
from spind.programs.native_token_lending import TokenLendingDecoder
from spind.programs.native_token_swap import TokenSwapDecoder
from spind.programs.native_vote import VoteDecoder
from spind.programs.serum_market import SerumMarketDecoder
from spind.programs.solend_token_lending import SolendDecoder

DECODER_TYPES: tuple[type[ProgramDecoder], ...] = (
    AssociatedTokenAccountDecoder,
    ConfigDecoder,
    NativeLoaderDecoder,
    BpfLoaderDecoder,
    BpfLoaderUpgradeableDecoder,
    Secp256k1Decoder,
    StakeDecoder,
    SystemDecoder,
    TokenDecoder,
    TokenLendingDecoder,
    TokenSwapDecoder,
    SerumMarketDecoder,
    VoteDecoder,
    SolendDecoder,
)


def default_decoders() -> list[ProgramDecoder]:
    """Instantiate every built-in decoder unit."""
    return [cls() for cls in DECODER_TYPES]


def make_default_registry() -> DecoderRegistry:
    """Return a registry with every built-in unit under all its program ids."""
    return make_registry(default_decoders())


__all__ = [
    "DECODER_TYPES",
    "default_decoders",
    "make_default_registry",
    "AssociatedTokenAccountDecoder",
    "BpfLoaderDecoder",
    "BpfLoaderUpgradeableDecoder",
    "ConfigDecoder",
    "NativeLoaderDecoder",
    "Secp256k1Decoder",
    "SerumMarketDecoder",
    "SolendDecoder",
    "StakeDecoder",
    "SystemDecoder",
    "TokenDecoder",
    "TokenLendingDecoder",
    "TokenSwapDecoder",
    "VoteDecoder",
]
