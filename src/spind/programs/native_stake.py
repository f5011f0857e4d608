"""Stake program.

Nested bincode structs are flattened; their fields carry a `group` so the
property's parent_key names the sub-structure (authorized, lockup, ...).
"""

from __future__ import annotations

from spind.decoding.base import TaggedDecoder
from spind.decoding.specs import FieldSpec, InstructionSpec, make_layout

PROGRAM_ADDRESS = "Stake11111111111111111111111111111111111111"

STAKE_AUTHORIZE = {0: "staker", 1: "withdrawer"}

STAKE_LAYOUT = make_layout(
    InstructionSpec(0, "initialize", (
        FieldSpec("staker", "pubkey", group="authorized"),
        FieldSpec("withdrawer", "pubkey", group="authorized"),
        FieldSpec("unix_timestamp", "i64", group="lockup"),
        FieldSpec("epoch", "u64", group="lockup"),
        FieldSpec("custodian", "pubkey", group="lockup"),
    )),
    InstructionSpec(1, "authorize", (
        FieldSpec("new_authority", "pubkey"),
        FieldSpec("stake_authorize", "u32", choices=STAKE_AUTHORIZE),
    )),
    InstructionSpec(2, "delegate-stake"),
    InstructionSpec(3, "split", (FieldSpec("lamports", "u64"),)),
    InstructionSpec(4, "withdraw", (FieldSpec("lamports", "u64"),)),
    InstructionSpec(5, "deactivate"),
    InstructionSpec(6, "set-lockup", (
        FieldSpec("unix_timestamp", "option<i64>", group="lockup"),
        FieldSpec("epoch", "option<u64>", group="lockup"),
        FieldSpec("custodian", "option<pubkey>", group="lockup"),
    )),
    InstructionSpec(7, "merge"),
    InstructionSpec(8, "authorize-with-seed", (
        FieldSpec("new_authority", "pubkey"),
        FieldSpec("stake_authorize", "u32", choices=STAKE_AUTHORIZE),
        FieldSpec("authority_seed", "string"),
        FieldSpec("authority_owner", "pubkey"),
    )),
    InstructionSpec(9, "initialize-checked"),
    InstructionSpec(10, "authorize-checked", (
        FieldSpec("stake_authorize", "u32", choices=STAKE_AUTHORIZE),
    )),
    InstructionSpec(11, "authorize-checked-with-seed", (
        FieldSpec("stake_authorize", "u32", choices=STAKE_AUTHORIZE),
        FieldSpec("authority_seed", "string"),
        FieldSpec("authority_owner", "pubkey"),
    )),
    InstructionSpec(12, "set-lockup-checked", (
        FieldSpec("unix_timestamp", "option<i64>", group="lockup"),
        FieldSpec("epoch", "option<u64>", group="lockup"),
    )),
    InstructionSpec(13, "get-minimum-delegation"),
    InstructionSpec(14, "deactivate-delinquent"),
    InstructionSpec(15, "redelegate"),
)


class StakeDecoder(TaggedDecoder):
    name = "stake"
    program_ids = (PROGRAM_ADDRESS,)
    category = "Stake"
    layout = STAKE_LAYOUT
