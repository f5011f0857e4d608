import pytest

from spind.decoding.reader import ByteReader, InvalidValueError, TruncatedDataError

from helpers import b58, bincode_str, i64, key, u8, u16, u32, u64


def test_reads_little_endian_integers() -> None:
    r = ByteReader(u8(7) + u16(513) + u32(70_000) + u64(2**40) + i64(-5))
    assert r.u8() == 7
    assert r.u16() == 513
    assert r.u32() == 70_000
    assert r.u64() == 2**40
    assert r.i64() == -5
    assert r.remaining == 0


def test_u128() -> None:
    value = 2**100 + 3
    assert ByteReader(value.to_bytes(16, "little")).u128() == value


def test_pubkey_is_base58() -> None:
    assert ByteReader(key(9)).pubkey() == b58(key(9))


def test_option_and_string() -> None:
    r = ByteReader(u8(0) + u8(1) + key(1) + bincode_str("seed"))
    assert r.option(r.pubkey) is None
    assert r.option(r.pubkey) == b58(key(1))
    assert r.string() == "seed"


def test_invalid_option_tag() -> None:
    r = ByteReader(u8(2), category="Test")
    with pytest.raises(InvalidValueError) as exc:
        r.option(r.u8)
    assert exc.value.category == "Test"


def test_invalid_bool() -> None:
    with pytest.raises(InvalidValueError):
        ByteReader(u8(3)).boolean()


def test_truncated_read() -> None:
    r = ByteReader(b"\x01\x02")
    with pytest.raises(TruncatedDataError):
        r.u32()


def test_length_prefix_larger_than_payload() -> None:
    with pytest.raises(TruncatedDataError):
        ByteReader(u64(1_000) + b"abc").bytes_vec()


def test_invalid_utf8_string() -> None:
    with pytest.raises(InvalidValueError):
        ByteReader(u64(2) + b"\xff\xfe").string()


@pytest.mark.parametrize(
    ("encoded", "expected"),
    [
        (b"\x00", 0),
        (b"\x7f", 127),
        (b"\x80\x01", 128),
        (b"\xff\xff\x03", 65535),
    ],
)
def test_short_vec_len(encoded: bytes, expected: int) -> None:
    assert ByteReader(encoded).short_vec_len() == expected
