from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pyarrow.parquet as pq

from spind.core.interfaces import IInstructionSetSink
from spind.core.models import InstructionSet
from spind.storage.columns import InstructionColumns

FUNCTIONS_FILE = "functions.parquet"
PROPERTIES_FILE = "properties.parquet"
JSONL_FILE = "instruction_sets.jsonl"


def write_parquet(
    out_dir: Path,
    instruction_sets: Sequence[InstructionSet],
    *,
    codec: str = "zstd",
) -> tuple[Path, Path]:
    """Write function and property rows to two Parquet files under `out_dir`."""
    out_dir.mkdir(parents=True, exist_ok=True)
    buf = InstructionColumns.empty()
    buf.extend_sets(instruction_sets)
    functions, properties = buf.to_arrow_tables()
    functions_path = out_dir / FUNCTIONS_FILE
    properties_path = out_dir / PROPERTIES_FILE
    pq.write_table(functions, functions_path, compression=codec)
    pq.write_table(properties, properties_path, compression=codec)
    return functions_path, properties_path


def write_jsonl(path: Path, instruction_sets: Sequence[InstructionSet], *, append: bool = False) -> int:
    """Write one JSON line per instruction set; return the number of lines."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "a" if append else "w", encoding="utf-8") as f:
        for s in instruction_sets:
            f.write(s.to_json_line())
    return len(instruction_sets)


class ParquetInstructionSink(IInstructionSetSink):
    """
    Buffers decoded sets in memory and writes functions/properties Parquet
    files on close.
    """

    def __init__(self, out_dir: Path, *, codec: str = "zstd") -> None:
        self.out_dir = out_dir
        self.codec = codec
        self._sets: list[InstructionSet] = []

    def add(self, instruction_sets: Sequence[InstructionSet]) -> int:
        self._sets.extend(instruction_sets)
        return len(instruction_sets)

    def close(self) -> list[Path]:
        if not self._sets:
            return []
        paths = write_parquet(self.out_dir, self._sets, codec=self.codec)
        self._sets = []
        return list(paths)


class JsonlInstructionSink(IInstructionSetSink):
    """Streams decoded sets to a JSONL file as they arrive."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.path.parent.mkdir(parents=True, exist_ok=True)
        open(self.path, "w").close()
        self._rows = 0

    def add(self, instruction_sets: Sequence[InstructionSet]) -> int:
        n = write_jsonl(self.path, instruction_sets, append=True)
        self._rows += n
        return n

    def close(self) -> list[Path]:
        return [self.path] if self._rows else []
