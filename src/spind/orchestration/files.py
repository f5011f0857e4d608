"""File-based decoding: JSONL raw instructions → JSONL or Parquet records.

Each transaction in the input file is dispatched as its own batch; decoded
sets are handed to an `IInstructionSetSink` chosen from the config.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from spind.core.config import DecodeFileConfig, ProcessorConfig
from spind.core.interfaces import DecoderMapping, IInstructionSetSink
from spind.core.use_cases.process import ProcessStats
from spind.ingest import load_instructions, load_siblings
from spind.orchestration.processor import process_outcomes
from spind.storage.sinks import JSONL_FILE, JsonlInstructionSink, ParquetInstructionSink


@dataclass(kw_only=True)
class DecodeFileOutput:
    """High-level output of a file decode run."""

    transactions: int
    stats: ProcessStats
    written: list[Path] = field(default_factory=list)


def make_sink(config: DecodeFileConfig) -> IInstructionSetSink:
    if config.output_format == "parquet":
        return ParquetInstructionSink(config.output_dir, codec=config.codec)
    return JsonlInstructionSink(config.output_dir / JSONL_FILE)


async def decode_file(
    config: DecodeFileConfig,
    *,
    registry: DecoderMapping | None = None,
    sink: IInstructionSetSink | None = None,
    on_batch: Callable[[str, ProcessStats], None] | None = None,
) -> DecodeFileOutput:
    """Decode every transaction of `config.input_path` and write the records."""
    batches = load_instructions(config.input_path, config.data_encoding)
    siblings = (
        load_siblings(config.siblings_path, config.data_encoding)
        if config.siblings_path is not None
        else {}
    )
    sink = sink or make_sink(config)
    processor_config = ProcessorConfig(concurrency=config.concurrency)

    totals = ProcessStats()
    for tx_hash, instructions in batches.items():
        result = await process_outcomes(
            instructions,
            siblings.get(tx_hash),
            registry=registry,
            config=processor_config,
        )
        sink.add(result.instruction_sets)

        totals.submitted += result.stats.submitted
        totals.decoded += result.stats.decoded
        totals.unsupported += result.stats.unsupported
        totals.failed += result.stats.failed
        if on_batch is not None:
            on_batch(tx_hash, result.stats)

    return DecodeFileOutput(
        transactions=len(batches),
        stats=totals,
        written=sink.close(),
    )
