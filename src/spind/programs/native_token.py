"""SPL Token program (u8 tag, packed little-endian fields)."""

from __future__ import annotations

from spind.decoding.base import TaggedDecoder
from spind.decoding.specs import FieldSpec, InstructionSpec, make_layout

PROGRAM_ADDRESS = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"

AUTHORITY_TYPE = {0: "mint-tokens", 1: "freeze-account", 2: "account-owner", 3: "close-account"}

_AMOUNT = (FieldSpec("amount", "u64"),)
_AMOUNT_CHECKED = (FieldSpec("amount", "u64"), FieldSpec("decimals", "u8"))
_INITIALIZE_MINT = (
    FieldSpec("decimals", "u8"),
    FieldSpec("mint_authority", "pubkey"),
    FieldSpec("freeze_authority", "option<pubkey>"),
)

TOKEN_LAYOUT = make_layout(
    InstructionSpec(0, "initialize-mint", _INITIALIZE_MINT),
    InstructionSpec(1, "initialize-account"),
    InstructionSpec(2, "initialize-multisig", (FieldSpec("m", "u8"),)),
    InstructionSpec(3, "transfer", _AMOUNT),
    InstructionSpec(4, "approve", _AMOUNT),
    InstructionSpec(5, "revoke"),
    InstructionSpec(6, "set-authority", (
        FieldSpec("authority_type", "u8", choices=AUTHORITY_TYPE),
        FieldSpec("new_authority", "option<pubkey>"),
    )),
    InstructionSpec(7, "mint-to", _AMOUNT),
    InstructionSpec(8, "burn", _AMOUNT),
    InstructionSpec(9, "close-account"),
    InstructionSpec(10, "freeze-account"),
    InstructionSpec(11, "thaw-account"),
    InstructionSpec(12, "transfer-checked", _AMOUNT_CHECKED),
    InstructionSpec(13, "approve-checked", _AMOUNT_CHECKED),
    InstructionSpec(14, "mint-to-checked", _AMOUNT_CHECKED),
    InstructionSpec(15, "burn-checked", _AMOUNT_CHECKED),
    InstructionSpec(16, "initialize-account2", (FieldSpec("owner", "pubkey"),)),
    InstructionSpec(17, "sync-native"),
    InstructionSpec(18, "initialize-account3", (FieldSpec("owner", "pubkey"),)),
    InstructionSpec(19, "initialize-multisig2", (FieldSpec("m", "u8"),)),
    InstructionSpec(20, "initialize-mint2", _INITIALIZE_MINT),
)


class TokenDecoder(TaggedDecoder):
    name = "token"
    program_ids = (PROGRAM_ADDRESS,)
    category = "SplToken"
    tag_type = "u8"
    layout = TOKEN_LAYOUT
