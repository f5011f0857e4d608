import json
from collections.abc import Callable

import pytest

from spind.core.models import InstructionSet, RawInstruction
from spind.programs import (
    AssociatedTokenAccountDecoder,
    BpfLoaderDecoder,
    ConfigDecoder,
    NativeLoaderDecoder,
    SerumMarketDecoder,
    SolendDecoder,
    StakeDecoder,
    SystemDecoder,
    TokenDecoder,
    TokenLendingDecoder,
    TokenSwapDecoder,
    VoteDecoder,
)
from spind.programs import bpf_loader, native_loader, serum_market, solend_token_lending
from spind.programs import native_associated_token_account as ata
from spind.programs import native_config, native_stake, native_system, native_token
from spind.programs import native_token_lending, native_token_swap, native_vote

from helpers import b58, bincode_str, i64, key, u8, u16, u32, u64

MakeInstruction = Callable[..., RawInstruction]


def parent_keys(s: InstructionSet) -> dict[str, str]:
    return {p.key: p.parent_key for p in s.properties}


# ---------- system ----------


def test_system_transfer(make_instruction: MakeInstruction) -> None:
    ins = make_instruction(native_system.PROGRAM_ADDRESS, u32(2) + u64(100))
    s = SystemDecoder().decode(ins)

    assert s is not None
    assert s.function.function_name == "transfer"
    assert s.function.program == native_system.PROGRAM_ADDRESS
    assert s.property_map() == {"lamports": "100"}
    assert parent_keys(s) == {"lamports": "transfer"}


def test_system_create_account_with_seed(make_instruction: MakeInstruction) -> None:
    data = u32(3) + key(1) + bincode_str("vault") + u64(5) + u64(165) + key(2)
    s = SystemDecoder().decode(make_instruction(native_system.PROGRAM_ADDRESS, data))

    assert s is not None
    assert s.function.function_name == "create-account-with-seed"
    assert s.property_map() == {
        "base": b58(key(1)),
        "seed": "vault",
        "lamports": "5",
        "space": "165",
        "owner": b58(key(2)),
    }
    # Emission order follows the layout
    assert [p.key for p in s.properties] == ["base", "seed", "lamports", "space", "owner"]


def test_system_inert_instruction_has_no_properties(make_instruction: MakeInstruction) -> None:
    s = SystemDecoder().decode(make_instruction(native_system.PROGRAM_ADDRESS, u32(4)))
    assert s is not None
    assert s.function.function_name == "advance-nonce-account"
    assert s.properties == ()


def test_system_unknown_tag_is_none(make_instruction: MakeInstruction) -> None:
    assert SystemDecoder().decode(make_instruction(native_system.PROGRAM_ADDRESS, u32(99))) is None


# ---------- spl token ----------


def test_token_transfer_checked(make_instruction: MakeInstruction) -> None:
    s = TokenDecoder().decode(make_instruction(native_token.PROGRAM_ADDRESS, u8(12) + u64(1000) + u8(6)))
    assert s is not None
    assert s.function.function_name == "transfer-checked"
    assert s.property_map() == {"amount": "1000", "decimals": "6"}


def test_token_set_authority_without_new_authority(make_instruction: MakeInstruction) -> None:
    s = TokenDecoder().decode(make_instruction(native_token.PROGRAM_ADDRESS, u8(6) + u8(2) + u8(0)))
    assert s is not None
    assert s.property_map() == {"authority_type": "account-owner", "new_authority": ""}


def test_token_initialize_mint(make_instruction: MakeInstruction) -> None:
    data = u8(0) + u8(9) + key(3) + u8(1) + key(4)
    s = TokenDecoder().decode(make_instruction(native_token.PROGRAM_ADDRESS, data))
    assert s is not None
    assert s.function.function_name == "initialize-mint"
    assert s.property_map() == {
        "decimals": "9",
        "mint_authority": b58(key(3)),
        "freeze_authority": b58(key(4)),
    }


@pytest.mark.parametrize("data", [b"", u8(3) + b"\x01", u8(99), u8(6) + u8(9) + u8(0)])
def test_token_malformed_payloads(make_instruction: MakeInstruction, data: bytes) -> None:
    assert TokenDecoder().decode(make_instruction(native_token.PROGRAM_ADDRESS, data)) is None


# ---------- associated token account ----------


@pytest.mark.parametrize(
    ("data", "function_name"),
    [(b"", "create"), (u8(0), "create"), (u8(1), "create-idempotent"), (u8(2), "recover-nested")],
)
def test_associated_token_account(make_instruction: MakeInstruction, data: bytes, function_name: str) -> None:
    s = AssociatedTokenAccountDecoder().decode(make_instruction(ata.PROGRAM_ADDRESS, data))
    assert s is not None
    assert s.function.function_name == function_name
    assert s.properties == ()


def test_associated_token_account_unknown_tag(make_instruction: MakeInstruction) -> None:
    assert AssociatedTokenAccountDecoder().decode(make_instruction(ata.PROGRAM_ADDRESS, u8(7))) is None


# ---------- config ----------


def test_config_store(make_instruction: MakeInstruction) -> None:
    data = u8(2) + key(1) + u8(1) + key(2) + u8(0) + b"payload"
    s = ConfigDecoder().decode(make_instruction(native_config.PROGRAM_ADDRESS, data))

    assert s is not None
    assert s.function.function_name == "store"
    props = s.property_map()
    assert json.loads(props["keys"]) == [
        {"pubkey": b58(key(1)), "signer": True},
        {"pubkey": b58(key(2)), "signer": False},
    ]
    assert props["data"] == "cGF5bG9hZA=="


def test_config_truncated_keys(make_instruction: MakeInstruction) -> None:
    assert ConfigDecoder().decode(make_instruction(native_config.PROGRAM_ADDRESS, u8(1) + key(1)[:10])) is None


# ---------- stake / vote ----------


def test_stake_initialize_groups_nested_fields(make_instruction: MakeInstruction) -> None:
    data = u32(0) + key(1) + key(2) + i64(-1) + u64(7) + key(3)
    s = StakeDecoder().decode(make_instruction(native_stake.PROGRAM_ADDRESS, data))

    assert s is not None
    assert s.function.function_name == "initialize"
    assert s.property_map() == {
        "staker": b58(key(1)),
        "withdrawer": b58(key(2)),
        "unix_timestamp": "-1",
        "epoch": "7",
        "custodian": b58(key(3)),
    }
    assert parent_keys(s) == {
        "staker": "authorized",
        "withdrawer": "authorized",
        "unix_timestamp": "lockup",
        "epoch": "lockup",
        "custodian": "lockup",
    }


def test_stake_authorize(make_instruction: MakeInstruction) -> None:
    s = StakeDecoder().decode(make_instruction(native_stake.PROGRAM_ADDRESS, u32(1) + key(5) + u32(1)))
    assert s is not None
    assert s.property_map() == {"new_authority": b58(key(5)), "stake_authorize": "withdrawer"}


def test_stake_authorize_with_invalid_enum(make_instruction: MakeInstruction) -> None:
    assert StakeDecoder().decode(make_instruction(native_stake.PROGRAM_ADDRESS, u32(1) + key(5) + u32(9))) is None


def test_vote(make_instruction: MakeInstruction) -> None:
    data = u32(2) + u64(2) + u64(10) + u64(11) + key(7) + u8(1) + i64(1234)
    s = VoteDecoder().decode(make_instruction(native_vote.PROGRAM_ADDRESS, data))

    assert s is not None
    assert s.function.function_name == "vote"
    assert s.property_map() == {"slots": "[10,11]", "hash": b58(key(7)), "timestamp": "1234"}
    assert set(parent_keys(s).values()) == {"vote"}


# ---------- loaders ----------


@pytest.mark.parametrize("program", [bpf_loader.PROGRAM_ADDRESS, bpf_loader.PROGRAM_ADDRESS_2])
def test_bpf_loader_write_same_shape_for_aliases(make_instruction: MakeInstruction, program: str) -> None:
    s = BpfLoaderDecoder().decode(make_instruction(program, u32(0) + u32(16) + u64(3) + b"abc"))
    assert s is not None
    assert s.function.function_name == "write"
    assert s.function.program == program
    assert s.property_map() == {"offset": "16", "bytes": "YWJj"}


def test_native_loader_finalize(make_instruction: MakeInstruction) -> None:
    s = NativeLoaderDecoder().decode(make_instruction(native_loader.PROGRAM_ADDRESS, u32(1)))
    assert s is not None
    assert s.function.function_name == "finalize"


# ---------- amm / lending ----------


def test_token_swap_swap(make_instruction: MakeInstruction) -> None:
    s = TokenSwapDecoder().decode(make_instruction(native_token_swap.PROGRAM_ADDRESS, u8(1) + u64(10) + u64(9)))
    assert s is not None
    assert s.function.function_name == "swap"
    assert s.property_map() == {"amount_in": "10", "minimum_amount_out": "9"}


def test_token_swap_initialize(make_instruction: MakeInstruction) -> None:
    fees = b"".join(u64(i) for i in range(1, 9))
    data = u8(0) + fees + u8(0) + bytes(32)
    s = TokenSwapDecoder().decode(make_instruction(native_token_swap.PROGRAM_ADDRESS, data))

    assert s is not None
    props = s.property_map()
    assert props["trade_fee_numerator"] == "1"
    assert props["host_fee_denominator"] == "8"
    assert props["curve_type"] == "constant-product"
    assert props["calculator"] == "00" * 32
    assert parent_keys(s)["curve_type"] == "swap_curve"
    assert parent_keys(s)["trade_fee_numerator"] == "fees"


def test_token_lending_init_reserve(make_instruction: MakeInstruction) -> None:
    rates = bytes([80, 50, 5, 55, 0, 4, 30])
    data = u8(2) + u64(1000) + rates + u64(1) + u64(2) + u8(20)
    s = TokenLendingDecoder().decode(make_instruction(native_token_lending.PROGRAM_ADDRESS, data))

    assert s is not None
    assert s.function.function_name == "init-reserve"
    props = s.property_map()
    assert props["liquidity_amount"] == "1000"
    assert props["optimal_utilization_rate"] == "80"
    assert props["max_borrow_rate"] == "30"
    assert props["host_fee_percentage"] == "20"
    assert parent_keys(s)["liquidity_amount"] == "init_reserve"
    assert parent_keys(s)["loan_to_value_ratio"] == "config"
    assert parent_keys(s)["borrow_fee_wad"] == "fees"


def test_token_lending_deposit(make_instruction: MakeInstruction) -> None:
    s = TokenLendingDecoder().decode(make_instruction(native_token_lending.PROGRAM_ADDRESS, u8(4) + u64(77)))
    assert s is not None
    assert s.function.function_name == "deposit-reserve-liquidity"
    assert s.property_map() == {"liquidity_amount": "77"}


def test_token_lending_rejects_solend_only_tag(make_instruction: MakeInstruction) -> None:
    assert TokenLendingDecoder().decode(make_instruction(native_token_lending.PROGRAM_ADDRESS, u8(14) + u64(1))) is None


def test_solend_update_reserve_config(make_instruction: MakeInstruction) -> None:
    data = u8(16) + bytes(7) + u64(1) + u64(2) + u8(3) + u64(500) + u64(400) + key(9)
    s = SolendDecoder().decode(make_instruction(solend_token_lending.PROGRAM_ADDRESS, data))

    assert s is not None
    assert s.function.function_name == "update-reserve-config"
    props = s.property_map()
    assert props["deposit_limit"] == "500"
    assert props["borrow_limit"] == "400"
    assert props["fee_receiver"] == b58(key(9))


def test_solend_deposit_and_collateralize(make_instruction: MakeInstruction) -> None:
    s = SolendDecoder().decode(make_instruction(solend_token_lending.PROGRAM_ADDRESS, u8(14) + u64(12)))
    assert s is not None
    assert s.function.function_name == "deposit-reserve-liquidity-and-obligation-collateral"
    assert s.property_map() == {"liquidity_amount": "12"}


# ---------- serum ----------


NEW_ORDER_V3 = (
    u8(0) + u32(10) + u32(1) + u64(500) + u64(3) + u64(1500) + u32(0) + u32(2) + u64(42) + u16(10)
)


@pytest.mark.parametrize(
    "program",
    [serum_market.PROGRAM_ADDRESS_V1, serum_market.PROGRAM_ADDRESS_V2, serum_market.PROGRAM_ADDRESS_V3],
)
def test_serum_new_order_v3_alias_equivalence(make_instruction: MakeInstruction, program: str) -> None:
    s = SerumMarketDecoder().decode(make_instruction(program, NEW_ORDER_V3))

    assert s is not None
    assert s.function.function_name == "new-order-v3"
    assert s.property_map() == {
        "side": "ask",
        "limit_price": "500",
        "max_coin_qty": "3",
        "max_native_pc_qty_including_fees": "1500",
        "self_trade_behavior": "decrement-take",
        "order_type": "post-only",
        "client_order_id": "42",
        "limit": "10",
    }


def test_serum_cancel_order_u128(make_instruction: MakeInstruction) -> None:
    order_id = 2**90 + 1
    data = u8(0) + u32(11) + u32(0) + order_id.to_bytes(16, "little")
    s = SerumMarketDecoder().decode(make_instruction(serum_market.PROGRAM_ADDRESS_V3, data))
    assert s is not None
    assert s.property_map() == {"side": "bid", "order_id": str(order_id)}


def test_serum_unknown_version(make_instruction: MakeInstruction) -> None:
    assert SerumMarketDecoder().decode(make_instruction(serum_market.PROGRAM_ADDRESS_V3, u8(1) + u32(5))) is None
