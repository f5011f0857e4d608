"""Serum DEX market (three deployed versions share one instruction set).

Every instruction starts with a u8 layout version (0) and a u32 tag.
"""

from __future__ import annotations

from spind.decoding.base import TaggedDecoder
from spind.decoding.specs import FieldSpec, InstructionSpec, make_layout

PROGRAM_ADDRESS_V1 = "BJ3jrUzddfuSrZHXSCxMUUQsjKEyLmuuyZebkcaqp2fm"
PROGRAM_ADDRESS_V2 = "EUqojwWA2rd19FZrzeBncJsm38Jm1hEhE3zsmX3bRc2o"
PROGRAM_ADDRESS_V3 = "9xQeWvG816bUx9EPjHmaT23yvVM2ZWbrrpZb9PusVFin"

SIDE = {0: "bid", 1: "ask"}
ORDER_TYPE = {0: "limit", 1: "immediate-or-cancel", 2: "post-only"}
SELF_TRADE_BEHAVIOR = {0: "decrement-take", 1: "cancel-provide", 2: "abort-transaction"}

_LIMIT = (FieldSpec("limit", "u16"),)

SERUM_LAYOUT = make_layout(
    InstructionSpec(0, "initialize-market", (
        FieldSpec("coin_lot_size", "u64"),
        FieldSpec("pc_lot_size", "u64"),
        FieldSpec("fee_rate_bps", "u16"),
        FieldSpec("vault_signer_nonce", "u64"),
        FieldSpec("pc_dust_threshold", "u64"),
    )),
    InstructionSpec(1, "new-order", (
        FieldSpec("side", "u32", choices=SIDE),
        FieldSpec("limit_price", "u64"),
        FieldSpec("max_qty", "u64"),
        FieldSpec("order_type", "u32", choices=ORDER_TYPE),
        FieldSpec("client_id", "u64"),
    )),
    InstructionSpec(2, "match-orders", _LIMIT),
    InstructionSpec(3, "consume-events", _LIMIT),
    InstructionSpec(4, "cancel-order", (
        FieldSpec("side", "u32", choices=SIDE),
        FieldSpec("order_id", "u128"),
        FieldSpec("owner", "pubkey"),
        FieldSpec("owner_slot", "u8"),
    )),
    InstructionSpec(5, "settle-funds"),
    InstructionSpec(6, "cancel-order-by-client-id", (FieldSpec("client_id", "u64"),)),
    InstructionSpec(7, "disable-market"),
    InstructionSpec(8, "sweep-fees"),
    InstructionSpec(9, "new-order-v2", (
        FieldSpec("side", "u32", choices=SIDE),
        FieldSpec("limit_price", "u64"),
        FieldSpec("max_qty", "u64"),
        FieldSpec("order_type", "u32", choices=ORDER_TYPE),
        FieldSpec("client_id", "u64"),
        FieldSpec("self_trade_behavior", "u32", choices=SELF_TRADE_BEHAVIOR),
    )),
    InstructionSpec(10, "new-order-v3", (
        FieldSpec("side", "u32", choices=SIDE),
        FieldSpec("limit_price", "u64"),
        FieldSpec("max_coin_qty", "u64"),
        FieldSpec("max_native_pc_qty_including_fees", "u64"),
        FieldSpec("self_trade_behavior", "u32", choices=SELF_TRADE_BEHAVIOR),
        FieldSpec("order_type", "u32", choices=ORDER_TYPE),
        FieldSpec("client_order_id", "u64"),
        FieldSpec("limit", "u16"),
    )),
    InstructionSpec(11, "cancel-order-v2", (
        FieldSpec("side", "u32", choices=SIDE),
        FieldSpec("order_id", "u128"),
    )),
    InstructionSpec(12, "cancel-order-by-client-id-v2", (FieldSpec("client_id", "u64"),)),
    InstructionSpec(13, "send-take", (
        FieldSpec("side", "u32", choices=SIDE),
        FieldSpec("limit_price", "u64"),
        FieldSpec("max_coin_qty", "u64"),
        FieldSpec("max_native_pc_qty_including_fees", "u64"),
        FieldSpec("min_coin_qty", "u64"),
        FieldSpec("min_native_pc_qty", "u64"),
        FieldSpec("limit", "u16"),
    )),
    InstructionSpec(14, "close-open-orders"),
    InstructionSpec(15, "init-open-orders"),
    InstructionSpec(16, "prune", _LIMIT),
    InstructionSpec(17, "consume-events-permissioned", _LIMIT),
)


class SerumMarketDecoder(TaggedDecoder):
    name = "serum_market"
    program_ids = (PROGRAM_ADDRESS_V1, PROGRAM_ADDRESS_V2, PROGRAM_ADDRESS_V3)
    category = "SerumMarket"
    version = 0
    layout = SERUM_LAYOUT
