"""Public entry points: raw instructions → decoded instruction sets.

This module provides two layers:

1) `InstructionProcessService` (in `spind.core.use_cases.process`):
   - Pure application-layer use case depending only on the registry provider
     interface.

2) `process(...)` / `process_outcomes(...)` (here):
   - Wire the built-in registry and a `ProcessorConfig` for typical library
     usage, and apply the optional batch-level timeout.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from functools import lru_cache

from spind.core.config import ProcessorConfig
from spind.core.interfaces import DecoderMapping
from spind.core.models import CompiledInstruction, InstructionSet, RawInstruction
from spind.core.use_cases.process import InstructionProcessService, ProcessResult, ProcessStats
from spind.decoding.registry import DecoderRegistryProvider
from spind.log import get_logger
from spind.programs import make_default_registry

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def default_registry() -> DecoderMapping:
    """Built-in registry, created once per process and shared read-only."""
    return make_default_registry()


async def process_outcomes(
    instructions: Sequence[RawInstruction],
    sibling_instructions: Sequence[CompiledInstruction] | None = None,
    *,
    registry: DecoderMapping | None = None,
    config: ProcessorConfig | None = None,
) -> ProcessResult:
    """Decode a batch and return typed per-instruction outcomes with stats.

    When `config.timeout_s` elapses first, no outcomes are returned: a
    timed-out batch has no results available yet, never partial ones.
    `stats.submitted` still counts the instructions handed in.
    """
    config = config or ProcessorConfig()
    service = InstructionProcessService(
        DecoderRegistryProvider(registry if registry is not None else default_registry()),
        concurrency=config.concurrency,
    )
    if config.timeout_s is None:
        return await service.run(instructions, sibling_instructions)

    try:
        return await asyncio.wait_for(
            service.run(instructions, sibling_instructions),
            timeout=config.timeout_s,
        )
    except TimeoutError:
        logger.warning(
            "batch.timeout",
            timeout_s=config.timeout_s,
            instructions=len(instructions),
        )
        return ProcessResult(stats=ProcessStats(submitted=len(instructions)))


async def process(
    instructions: Sequence[RawInstruction],
    sibling_instructions: Sequence[CompiledInstruction] | None = None,
    *,
    registry: DecoderMapping | None = None,
    config: ProcessorConfig | None = None,
) -> list[InstructionSet]:
    """Decode a batch of one transaction's instructions.

    Never raises for decode problems: unsupported programs, unparseable
    payloads and failed units are dropped (and logged). The order of the
    returned sets is unspecified; sort on `tx_instruction_id` if needed.
    """
    result = await process_outcomes(
        instructions,
        sibling_instructions,
        registry=registry,
        config=config,
    )
    return result.instruction_sets
