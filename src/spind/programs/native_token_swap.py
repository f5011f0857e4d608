"""SPL token-swap AMM."""

from __future__ import annotations

from spind.decoding.base import TaggedDecoder
from spind.decoding.specs import FieldSpec, InstructionSpec, make_layout

PROGRAM_ADDRESS = "SwaPpA9LAaLfeLi3a68M4DjnLqgtticKg6CnyNwgAC8"

CURVE_TYPE = {0: "constant-product", 1: "constant-price", 2: "stable", 3: "offset"}

_FEES = tuple(
    FieldSpec(name, "u64", group="fees")
    for name in (
        "trade_fee_numerator",
        "trade_fee_denominator",
        "owner_trade_fee_numerator",
        "owner_trade_fee_denominator",
        "owner_withdraw_fee_numerator",
        "owner_withdraw_fee_denominator",
        "host_fee_numerator",
        "host_fee_denominator",
    )
)

TOKEN_SWAP_LAYOUT = make_layout(
    InstructionSpec(0, "initialize", _FEES + (
        FieldSpec("curve_type", "u8", group="swap_curve", choices=CURVE_TYPE),
        FieldSpec("calculator", "bytes32", group="swap_curve"),
    )),
    InstructionSpec(1, "swap", (
        FieldSpec("amount_in", "u64"),
        FieldSpec("minimum_amount_out", "u64"),
    )),
    InstructionSpec(2, "deposit-all-token-types", (
        FieldSpec("pool_token_amount", "u64"),
        FieldSpec("maximum_token_a_amount", "u64"),
        FieldSpec("maximum_token_b_amount", "u64"),
    )),
    InstructionSpec(3, "withdraw-all-token-types", (
        FieldSpec("pool_token_amount", "u64"),
        FieldSpec("minimum_token_a_amount", "u64"),
        FieldSpec("minimum_token_b_amount", "u64"),
    )),
    InstructionSpec(4, "deposit-single-token-type-exact-amount-in", (
        FieldSpec("source_token_amount", "u64"),
        FieldSpec("minimum_pool_token_amount", "u64"),
    )),
    InstructionSpec(5, "withdraw-single-token-type-exact-amount-out", (
        FieldSpec("destination_token_amount", "u64"),
        FieldSpec("maximum_pool_token_amount", "u64"),
    )),
)


class TokenSwapDecoder(TaggedDecoder):
    name = "token_swap"
    program_ids = (PROGRAM_ADDRESS,)
    category = "TokenSwap"
    tag_type = "u8"
    layout = TOKEN_SWAP_LAYOUT
