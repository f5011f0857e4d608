"""System program (account creation, transfers, nonce accounts)."""

from __future__ import annotations

from spind.decoding.base import TaggedDecoder
from spind.decoding.specs import FieldSpec, InstructionSpec, make_layout

PROGRAM_ADDRESS = "11111111111111111111111111111111"

SYSTEM_LAYOUT = make_layout(
    InstructionSpec(0, "create-account", (
        FieldSpec("lamports", "u64"),
        FieldSpec("space", "u64"),
        FieldSpec("owner", "pubkey"),
    )),
    InstructionSpec(1, "assign", (FieldSpec("owner", "pubkey"),)),
    InstructionSpec(2, "transfer", (FieldSpec("lamports", "u64"),)),
    InstructionSpec(3, "create-account-with-seed", (
        FieldSpec("base", "pubkey"),
        FieldSpec("seed", "string"),
        FieldSpec("lamports", "u64"),
        FieldSpec("space", "u64"),
        FieldSpec("owner", "pubkey"),
    )),
    InstructionSpec(4, "advance-nonce-account"),
    InstructionSpec(5, "withdraw-nonce-account", (FieldSpec("lamports", "u64"),)),
    InstructionSpec(6, "initialize-nonce-account", (FieldSpec("authority", "pubkey"),)),
    InstructionSpec(7, "authorize-nonce-account", (FieldSpec("authority", "pubkey"),)),
    InstructionSpec(8, "allocate", (FieldSpec("space", "u64"),)),
    InstructionSpec(9, "allocate-with-seed", (
        FieldSpec("base", "pubkey"),
        FieldSpec("seed", "string"),
        FieldSpec("space", "u64"),
        FieldSpec("owner", "pubkey"),
    )),
    InstructionSpec(10, "assign-with-seed", (
        FieldSpec("base", "pubkey"),
        FieldSpec("seed", "string"),
        FieldSpec("owner", "pubkey"),
    )),
    InstructionSpec(11, "transfer-with-seed", (
        FieldSpec("lamports", "u64"),
        FieldSpec("from_seed", "string"),
        FieldSpec("from_owner", "pubkey"),
    )),
    InstructionSpec(12, "upgrade-nonce-account"),
)


class SystemDecoder(TaggedDecoder):
    name = "system"
    program_ids = (PROGRAM_ADDRESS,)
    category = "System"
    layout = SYSTEM_LAYOUT
