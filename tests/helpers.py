import struct

import base58


def key(n: int) -> bytes:
    """Deterministic 32-byte public key."""
    return bytes([n]) * 32


def b58(raw: bytes) -> str:
    return base58.b58encode(raw).decode()


def u8(v: int) -> bytes:
    return struct.pack("<B", v)


def u16(v: int) -> bytes:
    return struct.pack("<H", v)


def u32(v: int) -> bytes:
    return struct.pack("<I", v)


def u64(v: int) -> bytes:
    return struct.pack("<Q", v)


def i64(v: int) -> bytes:
    return struct.pack("<q", v)


def bincode_str(s: str) -> bytes:
    raw = s.encode()
    return u64(len(raw)) + raw
