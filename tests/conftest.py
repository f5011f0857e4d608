from collections.abc import Callable

import pytest

from spind.core.models import RawInstruction


@pytest.fixture
def make_instruction() -> Callable[..., RawInstruction]:
    def _make(
        program: str,
        data: bytes,
        *,
        tx_instruction_id: int = 0,
        transaction_hash: str = "5tx",
        parent_index: int | None = None,
        timestamp: int = 1_700_000_000,
    ) -> RawInstruction:
        return RawInstruction(
            tx_instruction_id=tx_instruction_id,
            transaction_hash=transaction_hash,
            program=program,
            data=data,
            parent_index=parent_index,
            timestamp=timestamp,
        )

    return _make
