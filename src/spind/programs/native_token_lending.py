"""SPL token-lending program."""

from __future__ import annotations

from spind.decoding.base import TaggedDecoder
from spind.decoding.specs import FieldSpec, InstructionSpec, make_layout

PROGRAM_ADDRESS = "LendZqTs7gn5CTSJU1jWKhKuVpjJGom45nnwPb2AMTi"

# ReserveConfig rates (percent, u8 each) in declaration order
RESERVE_RATES = tuple(
    FieldSpec(name, "u8", group="config")
    for name in (
        "optimal_utilization_rate",
        "loan_to_value_ratio",
        "liquidation_bonus",
        "liquidation_threshold",
        "min_borrow_rate",
        "optimal_borrow_rate",
        "max_borrow_rate",
    )
)
RESERVE_FEES = (
    FieldSpec("borrow_fee_wad", "u64", group="fees"),
    FieldSpec("flash_loan_fee_wad", "u64", group="fees"),
    FieldSpec("host_fee_percentage", "u8", group="fees"),
)

_LIQUIDITY = (FieldSpec("liquidity_amount", "u64"),)
_COLLATERAL = (FieldSpec("collateral_amount", "u64"),)

# Tags 0..12 are shared with lending forks
LENDING_CORE = (
    InstructionSpec(0, "init-lending-market", (
        FieldSpec("owner", "pubkey"),
        FieldSpec("quote_currency", "bytes32"),
    )),
    InstructionSpec(1, "set-lending-market-owner", (FieldSpec("new_owner", "pubkey"),)),
    InstructionSpec(2, "init-reserve", _LIQUIDITY + RESERVE_RATES + RESERVE_FEES),
    InstructionSpec(3, "refresh-reserve"),
    InstructionSpec(4, "deposit-reserve-liquidity", _LIQUIDITY),
    InstructionSpec(5, "redeem-reserve-collateral", _COLLATERAL),
    InstructionSpec(6, "init-obligation"),
    InstructionSpec(7, "refresh-obligation"),
    InstructionSpec(8, "deposit-obligation-collateral", _COLLATERAL),
    InstructionSpec(9, "withdraw-obligation-collateral", _COLLATERAL),
    InstructionSpec(10, "borrow-obligation-liquidity", _LIQUIDITY),
    InstructionSpec(11, "repay-obligation-liquidity", _LIQUIDITY),
    InstructionSpec(12, "liquidate-obligation", _LIQUIDITY),
)

TOKEN_LENDING_LAYOUT = make_layout(
    *LENDING_CORE,
    InstructionSpec(13, "flash-loan", (FieldSpec("amount", "u64"),)),
)


class TokenLendingDecoder(TaggedDecoder):
    name = "token_lending"
    program_ids = (PROGRAM_ADDRESS,)
    category = "TokenLending"
    tag_type = "u8"
    layout = TOKEN_LENDING_LAYOUT
