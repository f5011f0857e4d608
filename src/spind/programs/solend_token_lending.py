"""Solend lending program, a token-lending fork with extra reserve limits."""

from __future__ import annotations

from spind.decoding.base import TaggedDecoder
from spind.decoding.specs import FieldSpec, InstructionSpec, make_layout
from spind.programs.native_token_lending import LENDING_CORE, RESERVE_FEES, RESERVE_RATES

PROGRAM_ADDRESS = "So1endDq2YkqhipRh3WViPa8hdiSpxWy6z3Z6tMCpAo"

SOLEND_RESERVE_CONFIG = RESERVE_RATES + RESERVE_FEES + (
    FieldSpec("deposit_limit", "u64", group="config"),
    FieldSpec("borrow_limit", "u64", group="config"),
    FieldSpec("fee_receiver", "pubkey", group="config"),
)

SOLEND_LAYOUT = make_layout(
    *(spec for spec in LENDING_CORE if spec.tag != 2),
    InstructionSpec(2, "init-reserve", (FieldSpec("liquidity_amount", "u64"),) + SOLEND_RESERVE_CONFIG),
    InstructionSpec(13, "flash-loan", (FieldSpec("amount", "u64"),)),
    InstructionSpec(14, "deposit-reserve-liquidity-and-obligation-collateral", (
        FieldSpec("liquidity_amount", "u64"),
    )),
    InstructionSpec(15, "withdraw-obligation-collateral-and-redeem-reserve-collateral", (
        FieldSpec("collateral_amount", "u64"),
    )),
    InstructionSpec(16, "update-reserve-config", SOLEND_RESERVE_CONFIG),
)


class SolendDecoder(TaggedDecoder):
    name = "solend_token_lending"
    program_ids = (PROGRAM_ADDRESS,)
    category = "SolendTokenLending"
    tag_type = "u8"
    layout = SOLEND_LAYOUT
