from spind.core.use_cases.process import (
    InstructionProcessService,
    ProcessResult,
    ProcessStats,
    aggregate,
)

__all__ = [
    "InstructionProcessService",
    "ProcessResult",
    "ProcessStats",
    "aggregate",
]
