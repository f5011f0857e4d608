"""Instruction layout primitives and typed field parsing.

Defines lightweight dataclasses to describe how to decode tagged instructions:
- `FieldSpec`: one typed field read sequentially from the payload
- `InstructionSpec`: one instruction variant (tag, function name, fields)
- `InstructionLayout`: mapping from tag → InstructionSpec

Supported field types
---------------------
Scalars: u8, u16, u32, u64, i64, u128, bool
Keys:    pubkey, hash (both 32 bytes, base58)
Blobs:   bytes32 (hex), bytes (bincode Vec<u8>, base64 on output), string
Generic: option<T> (u8 tag), vec<T> (u64 length) for any scalar/key type above
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from spind.decoding.reader import ByteReader, InvalidValueError

_SCALAR_READERS: dict[str, Callable[[ByteReader], Any]] = {
    "u8": ByteReader.u8,
    "u16": ByteReader.u16,
    "u32": ByteReader.u32,
    "u64": ByteReader.u64,
    "i64": ByteReader.i64,
    "u128": ByteReader.u128,
    "bool": ByteReader.boolean,
    "pubkey": ByteReader.pubkey,
    "hash": ByteReader.pubkey,
    "bytes32": lambda r: r.raw(32).hex(),
    "bytes": ByteReader.bytes_vec,
    "string": ByteReader.string,
}


def _split_generic(type_: str) -> tuple[str, str] | None:
    """Split 'option<u64>' into ('option', 'u64'); None for plain types."""
    if type_.endswith(">") and "<" in type_:
        outer, inner = type_[:-1].split("<", 1)
        return outer, inner
    return None


def is_known_type(type_: str) -> bool:
    generic = _split_generic(type_)
    if generic is None:
        return type_ in _SCALAR_READERS
    outer, inner = generic
    return outer in ("option", "vec") and inner in _SCALAR_READERS


@dataclass(frozen=True)
class FieldSpec:
    """Describe one sequential field.

    `group` overrides the property's parent_key (nested sub-structures);
    `choices` maps an integer enum discriminant to its label.
    """

    name: str
    type: str  # e.g. "u64", "pubkey", "option<pubkey>", "vec<u64>"
    group: str | None = None
    choices: Mapping[int, str] | None = field(default=None, hash=False, compare=False)

    def __post_init__(self) -> None:
        if not is_known_type(self.type):
            raise ValueError(f"{self.name}: unsupported field type {self.type!r}")
        if self.choices is not None and self.type not in ("u8", "u16", "u32"):
            raise ValueError(f"{self.name}: choices need an integer discriminant type")


@dataclass(frozen=True)
class InstructionSpec:
    """One instruction variant: discriminant tag, function name, fields."""

    tag: int
    name: str  # kebab-case function name
    fields: tuple[FieldSpec, ...] = ()

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError(f"tag {self.tag}: function name must not be empty")
        seen: set[tuple[str | None, str]] = set()
        for f in self.fields:
            k = (f.group, f.name)
            if k in seen:
                raise ValueError(f"{self.name}: duplicate field {f.name!r}")
            seen.add(k)

    @property
    def parent_key(self) -> str:
        return self.name.replace("-", "_")


# The full layout keyed by instruction tag.
InstructionLayout = dict[int, InstructionSpec]


def make_layout(*specs: InstructionSpec) -> InstructionLayout:
    """Build a layout, rejecting duplicate tags."""
    layout: InstructionLayout = {}
    for spec in specs:
        if spec.tag in layout:
            raise ValueError(f"duplicate tag {spec.tag} ({layout[spec.tag].name}, {spec.name})")
        layout[spec.tag] = spec
    return layout


def parse_field(reader: ByteReader, spec: FieldSpec) -> Any:
    """Read one field according to its declared type."""
    generic = _split_generic(spec.type)
    if generic is None:
        value = _SCALAR_READERS[spec.type](reader)
    else:
        outer, inner = generic
        read_inner = _SCALAR_READERS[inner]
        if outer == "option":
            value = reader.option(lambda: read_inner(reader))
        else:
            value = reader.vec(lambda: read_inner(reader))

    if spec.choices is not None:
        label = spec.choices.get(value)
        if label is None:
            raise InvalidValueError(
                f"{spec.name}: unknown discriminant {value}", category=reader.category
            )
        return label
    return value
