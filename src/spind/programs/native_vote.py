"""Vote program (legacy instruction set; compact vote-state updates are not decoded)."""

from __future__ import annotations

from spind.decoding.base import TaggedDecoder
from spind.decoding.specs import FieldSpec, InstructionSpec, make_layout

PROGRAM_ADDRESS = "Vote111111111111111111111111111111111111111"

VOTE_AUTHORIZE = {0: "voter", 1: "withdrawer"}

_VOTE_FIELDS = (
    FieldSpec("slots", "vec<u64>", group="vote"),
    FieldSpec("hash", "hash", group="vote"),
    FieldSpec("timestamp", "option<i64>", group="vote"),
)

VOTE_LAYOUT = make_layout(
    InstructionSpec(0, "initialize-account", (
        FieldSpec("node_pubkey", "pubkey"),
        FieldSpec("authorized_voter", "pubkey"),
        FieldSpec("authorized_withdrawer", "pubkey"),
        FieldSpec("commission", "u8"),
    )),
    InstructionSpec(1, "authorize", (
        FieldSpec("new_authority", "pubkey"),
        FieldSpec("vote_authorize", "u32", choices=VOTE_AUTHORIZE),
    )),
    InstructionSpec(2, "vote", _VOTE_FIELDS),
    InstructionSpec(3, "withdraw", (FieldSpec("lamports", "u64"),)),
    InstructionSpec(4, "update-validator-identity"),
    InstructionSpec(5, "update-commission", (FieldSpec("commission", "u8"),)),
    InstructionSpec(6, "vote-switch", _VOTE_FIELDS + (FieldSpec("proof_hash", "hash"),)),
    InstructionSpec(7, "authorize-checked", (
        FieldSpec("vote_authorize", "u32", choices=VOTE_AUTHORIZE),
    )),
)


class VoteDecoder(TaggedDecoder):
    name = "vote"
    program_ids = (PROGRAM_ADDRESS,)
    category = "Vote"
    layout = VOTE_LAYOUT
