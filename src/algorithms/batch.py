"""Safe-order update plans for consumers that apply a diff as one batch.

Index sets are relative to the pre-update coordinate space, so a consumer
has to apply item deletes (descending), then section changes, then item
inserts (ascending), then moves.
"""
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple

from .array_diff import ArrayDiff
from .nested import NestedDiff
from .utils import index_paths


class StepOp(str, Enum):
    DELETE = 'delete'
    INSERT = 'insert'
    MOVE = 'move'


class StepLevel(str, Enum):
    ITEM = 'item'
    SECTION = 'section'


class UpdateStep(NamedTuple):
    op: StepOp
    level: StepLevel
    source: Optional[Tuple[int, ...]] = None
    destination: Optional[Tuple[int, ...]] = None

    def __repr__(self) -> str:
        return f"UpdateStep({self.op.value} {self.level.value} {self.source} -> {self.destination})"


def _item_deletes(result: ArrayDiff, section: int) -> List[UpdateStep]:
    return [UpdateStep(StepOp.DELETE, StepLevel.ITEM, source=path)
            for path in index_paths(result.removed_indexes, section, ascending=False)]


def _item_inserts(result: ArrayDiff, section: int) -> List[UpdateStep]:
    return [UpdateStep(StepOp.INSERT, StepLevel.ITEM, destination=path)
            for path in index_paths(result.inserted_indexes, section)]


def _item_moves(result: ArrayDiff, old_section: int, new_section: int) -> List[UpdateStep]:
    return [UpdateStep(StepOp.MOVE, StepLevel.ITEM, (old_section, old), (new_section, result.moved_indexes[old]))
            for old in sorted(result.moved_indexes)]


def plan_item_updates(result: ArrayDiff, section: int = 0) -> List[UpdateStep]:
    return (_item_deletes(result, section) + _item_inserts(result, section)
            + _item_moves(result, section, section))


def plan_section_updates(result: ArrayDiff) -> List[UpdateStep]:
    steps = [UpdateStep(StepOp.DELETE, StepLevel.SECTION, source=(i,))
             for i in sorted(result.removed_indexes, reverse=True)]
    steps += [UpdateStep(StepOp.INSERT, StepLevel.SECTION, destination=(j,))
              for j in sorted(result.inserted_indexes)]
    steps += [UpdateStep(StepOp.MOVE, StepLevel.SECTION, (i,), (result.moved_indexes[i],))
              for i in sorted(result.moved_indexes)]
    return steps


def plan_nested_updates(nested: NestedDiff) -> List[UpdateStep]:
    sections = nested.sections_diff
    surviving = []
    for old_section, item_diff in enumerate(nested.item_diffs):
        if item_diff is None:
            continue
        new_section = sections.new_index_for_old_index(old_section)
        if new_section is None:
            raise ValueError(f"Item diff present for removed section {old_section}")
        surviving.append((old_section, new_section, item_diff))

    steps: List[UpdateStep] = []
    for old_section, _, item_diff in surviving:
        steps += _item_deletes(item_diff, old_section)
    steps += plan_section_updates(sections)
    for _, new_section, item_diff in surviving:
        steps += _item_inserts(item_diff, new_section)
    for old_section, new_section, item_diff in surviving:
        steps += _item_moves(item_diff, old_section, new_section)
    return steps


def apply_item_steps(old: List, new: List, steps: List[UpdateStep]) -> List:
    """Replay flat item steps on a copy of *old*, treating a move as delete plus insert."""
    result = list(old)
    deletes = [s.source[-1] for s in steps if s.op in (StepOp.DELETE, StepOp.MOVE)]
    inserts = [s.destination[-1] for s in steps if s.op in (StepOp.INSERT, StepOp.MOVE)]
    for index in sorted(deletes, reverse=True):
        del result[index]
    for index in sorted(inserts):
        result.insert(index, new[index])
    return result
