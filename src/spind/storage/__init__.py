"""Storage helpers for decoded instruction records.

This package provides:
- InstructionColumns: columnar buffer converting to Arrow tables
- write_parquet / write_jsonl: one-shot writers
- ParquetInstructionSink / JsonlInstructionSink: IInstructionSetSink implementations
"""

from spind.storage.columns import FUNCTION_SCHEMA, PROPERTY_SCHEMA, InstructionColumns
from spind.storage.sinks import (
    JsonlInstructionSink,
    ParquetInstructionSink,
    write_jsonl,
    write_parquet,
)

__all__ = [
    "FUNCTION_SCHEMA",
    "PROPERTY_SCHEMA",
    "InstructionColumns",
    "JsonlInstructionSink",
    "ParquetInstructionSink",
    "write_jsonl",
    "write_parquet",
]
