"""Little-endian binary reader for instruction payloads.

Covers the primitive encodings used by on-chain programs:
- fixed-width integers (`struct`, little endian)
- 32-byte public keys and hashes rendered as base58
- bincode strings / byte vectors (u64 length prefix) and options (u8 tag)
- compact-u16 "short vec" lengths used by the config program

Every read is bounds-checked; running past the end raises `TruncatedDataError`.
"""

from __future__ import annotations

import struct
from collections.abc import Callable
from typing import TypeVar

import base58

T = TypeVar("T")

PUBKEY_LEN = 32


# ---------- errors ----------


class DecodeError(Exception):
    """Payload could not be interpreted as one of the program's known shapes."""

    def __init__(self, message: str, *, category: str | None = None) -> None:
        super().__init__(message)
        self.category = category


class TruncatedDataError(DecodeError):
    """Payload is shorter than the layout requires."""


class UnknownVariantError(DecodeError):
    """Instruction tag is not part of the known layout."""


class InvalidValueError(DecodeError):
    """A field holds a value outside its domain (enum, option tag, utf-8)."""


class MissingSiblingError(DecodeError):
    """A referenced sibling instruction is not present in the transaction."""


# ---------- reader ----------

_U8 = struct.Struct("<B")
_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")
_U64 = struct.Struct("<Q")
_I64 = struct.Struct("<q")


class ByteReader:
    """Sequential cursor over an immutable payload."""

    __slots__ = ("_data", "_offset", "category")

    def __init__(self, data: bytes, *, category: str | None = None) -> None:
        self._data = bytes(data)
        self._offset = 0
        self.category = category

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def remaining(self) -> int:
        return len(self._data) - self._offset

    def _take(self, n: int) -> bytes:
        if n < 0 or self._offset + n > len(self._data):
            raise TruncatedDataError(
                f"need {n} byte(s) at offset {self._offset}, have {self.remaining}",
                category=self.category,
            )
        chunk = self._data[self._offset : self._offset + n]
        self._offset += n
        return chunk

    def _unpack(self, fmt: struct.Struct) -> int:
        return fmt.unpack(self._take(fmt.size))[0]

    # -- integers --

    def u8(self) -> int:
        return self._unpack(_U8)

    def u16(self) -> int:
        return self._unpack(_U16)

    def u32(self) -> int:
        return self._unpack(_U32)

    def u64(self) -> int:
        return self._unpack(_U64)

    def i64(self) -> int:
        return self._unpack(_I64)

    def u128(self) -> int:
        return int.from_bytes(self._take(16), "little", signed=False)

    def boolean(self) -> bool:
        v = self.u8()
        if v > 1:
            raise InvalidValueError(f"invalid bool byte {v}", category=self.category)
        return v == 1

    # -- keys and blobs --

    def pubkey(self) -> str:
        return base58.b58encode(self._take(PUBKEY_LEN)).decode("ascii")

    def raw(self, n: int) -> bytes:
        return self._take(n)

    def rest(self) -> bytes:
        return self._take(self.remaining)

    def bytes_vec(self) -> bytes:
        """bincode Vec<u8>: u64 length then the bytes."""
        return self._take(self._length(self.u64()))

    def string(self) -> str:
        """bincode String: u64 length then utf-8 bytes."""
        raw = self.bytes_vec()
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidValueError(f"invalid utf-8 string: {e}", category=self.category) from e

    def vec(self, read_item: Callable[[], T]) -> list[T]:
        """bincode Vec<T>: u64 length then the items."""
        n = self._length(self.u64())
        return [read_item() for _ in range(n)]

    def option(self, read_item: Callable[[], T]) -> T | None:
        """Option<T> with a one byte discriminant (bincode / spl pack)."""
        tag = self.u8()
        if tag == 0:
            return None
        if tag == 1:
            return read_item()
        raise InvalidValueError(f"invalid option tag {tag}", category=self.category)

    def short_vec_len(self) -> int:
        """compact-u16 length prefix (1 to 3 bytes)."""
        value = 0
        for i in range(3):
            b = self.u8()
            value |= (b & 0x7F) << (7 * i)
            if not b & 0x80:
                return value
        raise InvalidValueError("short_vec length overflows u16", category=self.category)

    def _length(self, n: int) -> int:
        # Reject absurd lengths before allocating
        if n > self.remaining:
            raise TruncatedDataError(
                f"length prefix {n} exceeds remaining {self.remaining} byte(s)",
                category=self.category,
            )
        return n
