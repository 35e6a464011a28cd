"""Assemble the ordered list of cell writes for one batch update."""

from typing import Iterable, List

from .models import WriteInstruction

UpdatePlan = List[WriteInstruction]


def build(
    entry_writes: Iterable[WriteInstruction],
    auxiliary_writes: Iterable[WriteInstruction],
) -> UpdatePlan:
    """Entry writes first, then bookkeeping cells such as the day counter."""
    return [*entry_writes, *auxiliary_writes]


def to_batch_data(plan: Iterable[WriteInstruction]) -> List[dict]:
    return [instruction.to_value_range() for instruction in plan]
