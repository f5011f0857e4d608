import pytest

from spind.decoding.reader import ByteReader, InvalidValueError
from spind.decoding.specs import FieldSpec, InstructionSpec, make_layout, parse_field

from helpers import b58, key, u8, u32, u64


def test_field_spec_rejects_unknown_type() -> None:
    with pytest.raises(ValueError):
        FieldSpec("amount", "u256")


def test_field_spec_rejects_choices_on_non_integer() -> None:
    with pytest.raises(ValueError):
        FieldSpec("owner", "pubkey", choices={0: "x"})


def test_instruction_spec_parent_key_is_snake_case() -> None:
    assert InstructionSpec(3, "program-data").parent_key == "program_data"


def test_instruction_spec_rejects_duplicate_fields() -> None:
    with pytest.raises(ValueError):
        InstructionSpec(0, "dup", (FieldSpec("a", "u8"), FieldSpec("a", "u64")))


def test_same_field_name_in_different_groups_is_allowed() -> None:
    InstructionSpec(0, "ok", (FieldSpec("a", "u8", group="x"), FieldSpec("a", "u8", group="y")))


def test_make_layout_rejects_duplicate_tags() -> None:
    with pytest.raises(ValueError):
        make_layout(InstructionSpec(1, "a"), InstructionSpec(1, "b"))


def test_parse_generic_fields() -> None:
    r = ByteReader(u8(1) + key(4) + u64(2) + u64(10) + u64(11))
    assert parse_field(r, FieldSpec("authority", "option<pubkey>")) == b58(key(4))
    assert parse_field(r, FieldSpec("slots", "vec<u64>")) == [10, 11]


def test_parse_choice_label() -> None:
    spec = FieldSpec("side", "u32", choices={0: "bid", 1: "ask"})
    assert parse_field(ByteReader(u32(1)), spec) == "ask"
    with pytest.raises(InvalidValueError):
        parse_field(ByteReader(u32(5)), spec)
