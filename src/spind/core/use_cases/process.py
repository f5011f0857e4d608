from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field

from spind.core.interfaces import DecoderMapping, IDecoderRegistryProvider, IInstructionDecoder
from spind.core.models import CompiledInstruction, DecodeOutcome, InstructionSet, RawInstruction
from spind.decoding.registry import resolve
from spind.log import get_logger

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Stats / result
# ---------------------------------------------------------------------------


@dataclass(kw_only=True)
class ProcessStats:
    """
    Counters for one dispatched batch.

    - submitted: instructions handed to the dispatcher
    - decoded: instructions that produced an InstructionSet
    - unsupported: no decoder registered (or required siblings missing)
    - failed: decoder returned None or its unit of work raised
    """

    submitted: int = 0
    decoded: int = 0
    unsupported: int = 0
    failed: int = 0


@dataclass(kw_only=True)
class ProcessResult:
    """Typed outcomes of a batch plus aggregate counters."""

    outcomes: list[DecodeOutcome] = field(default_factory=list)
    stats: ProcessStats = field(default_factory=ProcessStats)

    @property
    def instruction_sets(self) -> list[InstructionSet]:
        return aggregate(self.outcomes)


# ---------------------------------------------------------------------------
# Dispatch context
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class DispatchContext:
    """
    Shared, read-only state for the units of one batch.

    `siblings` is frozen to a tuple once per batch and handed to every unit
    by reference; no unit mutates it, so no copies are made.
    """

    registry: DecoderMapping
    siblings: tuple[CompiledInstruction, ...] | None
    sem: asyncio.Semaphore


def _outcome(
    instruction: RawInstruction,
    status: str,
    *,
    instruction_set: InstructionSet | None = None,
    reason: str | None = None,
) -> DecodeOutcome:
    return DecodeOutcome(
        tx_instruction_id=instruction.tx_instruction_id,
        transaction_hash=instruction.transaction_hash,
        program=instruction.program,
        status=status,  # type: ignore[arg-type]
        instruction_set=instruction_set,
        reason=reason,
    )


def _resolve_unit(ctx: DispatchContext, instruction: RawInstruction) -> IInstructionDecoder | DecodeOutcome:
    """Return the decoder to run, or an 'unsupported' outcome to record instead."""
    decoder = resolve(ctx.registry, instruction.program)
    if decoder is None:
        logger.info(
            "instruction.unsupported_program",
            program=instruction.program,
            transaction_hash=instruction.transaction_hash,
            tx_instruction_id=instruction.tx_instruction_id,
            reason="no decoder registered for program",
        )
        return _outcome(instruction, "unsupported", reason="no decoder registered for program")

    if decoder.requires_siblings and ctx.siblings is None:
        logger.info(
            "instruction.missing_siblings",
            program=instruction.program,
            transaction_hash=instruction.transaction_hash,
            tx_instruction_id=instruction.tx_instruction_id,
            decoder=decoder.name,
            reason="decoder requires sibling instructions",
        )
        return _outcome(instruction, "unsupported", reason="decoder requires sibling instructions")

    return decoder


async def decode_unit(
    ctx: DispatchContext,
    decoder: IInstructionDecoder,
    instruction: RawInstruction,
) -> DecodeOutcome:
    """
    Run one decoder in the default thread pool, bounded by the batch semaphore.
    """
    async with ctx.sem:
        instruction_set = await asyncio.to_thread(decoder.decode, instruction, ctx.siblings)

    if instruction_set is None:
        # The decoder already logged why
        return _outcome(instruction, "failed", reason="payload could not be decoded")
    return _outcome(instruction, "decoded", instruction_set=instruction_set)


def _join_failure(instruction: RawInstruction, error: BaseException) -> DecodeOutcome:
    reason = f"{type(error).__name__}: {error}"
    logger.error(
        "instruction.task_failed",
        program=instruction.program,
        transaction_hash=instruction.transaction_hash,
        tx_instruction_id=instruction.tx_instruction_id,
        reason=reason,
    )
    return _outcome(instruction, "failed", reason=reason)


# ---------------------------------------------------------------------------
# Result aggregation
# ---------------------------------------------------------------------------


def aggregate(outcomes: Sequence[DecodeOutcome]) -> list[InstructionSet]:
    """Keep decoded sets; drop unsupported and failed outcomes."""
    return [
        o.instruction_set
        for o in outcomes
        if o.status == "decoded" and o.instruction_set is not None
    ]


def tally(outcomes: Sequence[DecodeOutcome]) -> ProcessStats:
    stats = ProcessStats(submitted=len(outcomes))
    for o in outcomes:
        if o.status == "decoded":
            stats.decoded += 1
        elif o.status == "unsupported":
            stats.unsupported += 1
        else:
            stats.failed += 1
    return stats


# ---------------------------------------------------------------------------
# Domain service – InstructionProcessService
# ---------------------------------------------------------------------------


class InstructionProcessService:
    """
    Concurrent dispatcher for one transaction's instructions.

    It depends only on the registry provider interface. Each resolvable
    instruction becomes an independent task; a unit that fails in any way
    yields a 'failed' outcome and never affects its siblings or the batch.
    """

    def __init__(
        self,
        registry_provider: IDecoderRegistryProvider,
        *,
        concurrency: int = 16,
    ) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        self._registry_provider = registry_provider
        self._concurrency = concurrency

    async def run(
        self,
        instructions: Sequence[RawInstruction],
        sibling_instructions: Sequence[CompiledInstruction] | None = None,
    ) -> ProcessResult:
        """
        Decode a batch of instructions.

        Parameters
        ----------
        instructions : Sequence[RawInstruction]
            Instructions of one transaction; never mutated.
        sibling_instructions : Sequence[CompiledInstruction] | None
            The transaction's compiled instructions, for decoders that
            cross-reference other instructions by index.

        Notes
        -----
        - Outcome order is not tied to input order; sort on
          `tx_instruction_id` when transaction order matters.
        - This method never raises for decode problems.
        """
        if not instructions:
            return ProcessResult()

        # 1) Build shared context
        ctx = DispatchContext(
            registry=self._registry_provider.get_registry(),
            siblings=tuple(sibling_instructions) if sibling_instructions is not None else None,
            sem=asyncio.Semaphore(self._concurrency),
        )

        # 2) Resolve decoders and launch one task per resolvable instruction
        outcomes: list[DecodeOutcome] = []
        scheduled: list[tuple[RawInstruction, asyncio.Task[DecodeOutcome]]] = []
        for instruction in instructions:
            unit = _resolve_unit(ctx, instruction)
            if isinstance(unit, DecodeOutcome):
                outcomes.append(unit)
                continue
            scheduled.append((instruction, asyncio.create_task(decode_unit(ctx, unit, instruction))))

        # 3) Join every unit; failures are contained per instruction
        results = await asyncio.gather(*(task for _, task in scheduled), return_exceptions=True)
        for (instruction, _), res in zip(scheduled, results):
            if isinstance(res, BaseException):
                outcomes.append(_join_failure(instruction, res))
            else:
                outcomes.append(res)

        stats = tally(outcomes)
        logger.debug(
            "batch.processed",
            submitted=stats.submitted,
            decoded=stats.decoded,
            unsupported=stats.unsupported,
            failed=stats.failed,
        )
        return ProcessResult(outcomes=outcomes, stats=stats)
