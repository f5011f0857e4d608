"""Columnar buffers for decoded instruction records.

This module defines `InstructionColumns`, an append-only pair of column
buffers (one for function rows, one for property rows) that converts to
Arrow tables with a fixed schema.

Design notes
------------
- Identity columns are repeated on both tables so property rows join to
  function rows on (transaction_hash, tx_instruction_id) without a key table.
- `parent_index` is nullable; top-level instructions carry null.
- Sorting is applied on (transaction_hash, tx_instruction_id) before write,
  since dispatch order is unspecified.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

import pyarrow as pa

from spind.core.models import InstructionSet

FUNCTION_SCHEMA = pa.schema([
    pa.field("tx_instruction_id", pa.int32()),
    pa.field("transaction_hash", pa.string()),
    pa.field("parent_index", pa.int32()),
    pa.field("program", pa.string()),
    pa.field("function_name", pa.string()),
    pa.field("timestamp", pa.int64()),
])

PROPERTY_SCHEMA = pa.schema([
    pa.field("tx_instruction_id", pa.int32()),
    pa.field("transaction_hash", pa.string()),
    pa.field("parent_index", pa.int32()),
    pa.field("key", pa.string()),
    pa.field("value", pa.string()),
    pa.field("parent_key", pa.string()),
    pa.field("timestamp", pa.int64()),
])

_SORT_KEYS = [("transaction_hash", "ascending"), ("tx_instruction_id", "ascending")]


@dataclass(slots=True)
class InstructionColumns:
    """Append-only columnar buffer for function and property rows."""

    functions: dict[str, list] = field(
        default_factory=lambda: {name: [] for name in FUNCTION_SCHEMA.names}
    )
    properties: dict[str, list] = field(
        default_factory=lambda: {name: [] for name in PROPERTY_SCHEMA.names}
    )

    @staticmethod
    def empty() -> InstructionColumns:
        return InstructionColumns()

    def size(self) -> int:
        """Number of function rows (= instruction sets) stored."""
        return len(self.functions["tx_instruction_id"])

    def property_rows(self) -> int:
        return len(self.properties["tx_instruction_id"])

    def append_set(self, instruction_set: InstructionSet) -> None:
        fn = instruction_set.function
        for name in FUNCTION_SCHEMA.names:
            self.functions[name].append(getattr(fn, name))
        for prop in instruction_set.properties:
            for name in PROPERTY_SCHEMA.names:
                self.properties[name].append(getattr(prop, name))

    def extend_sets(self, instruction_sets: Iterable[InstructionSet]) -> int:
        """Append many sets; return how many were added."""
        n = 0
        for s in instruction_sets:
            self.append_set(s)
            n += 1
        return n

    def to_arrow_tables(self) -> tuple[pa.Table, pa.Table]:
        """Return (functions, properties) as sorted Arrow tables."""
        functions = pa.Table.from_pydict(self.functions, schema=FUNCTION_SCHEMA)
        properties = pa.Table.from_pydict(self.properties, schema=PROPERTY_SCHEMA)
        return functions.sort_by(_SORT_KEYS), properties.sort_by(_SORT_KEYS)
