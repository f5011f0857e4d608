from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

DataEncoding = Literal["base58", "base64", "hex"]
OutputFormat = Literal["jsonl", "parquet"]


@dataclass(frozen=True)
class ProcessorConfig:
    """Configuration for the concurrent dispatcher."""

    concurrency: int = 16  # max decodes running at once
    timeout_s: float | None = None  # batch-level deadline; None waits for every unit

    def __post_init__(self) -> None:
        if self.concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        if self.timeout_s is not None and self.timeout_s <= 0:
            raise ValueError("timeout_s must be positive when set")


@dataclass(frozen=True)
class DecodeFileConfig:
    """Configuration for decoding a JSONL file of raw instructions (CLI)."""

    input_path: Path
    output_dir: Path
    data_encoding: DataEncoding = "base58"
    siblings_path: Path | None = None
    output_format: OutputFormat = "jsonl"
    concurrency: int = 16
    codec: str = "zstd"  # parquet compression
