from __future__ import annotations

import pytest

from common.models import PlannedBatch
from core.counting import BatchPlanner


def test_plan_splits_into_full_batches_and_remainder() -> None:
    planner = BatchPlanner(batch_size=4)
    plan = planner.plan(10)
    assert plan == [
        PlannedBatch(batch_id=0, start_line=0, end_line=3),
        PlannedBatch(batch_id=1, start_line=4, end_line=7),
        PlannedBatch(batch_id=2, start_line=8, end_line=9),
    ]
    assert [block.line_count for block in plan] == [4, 4, 2]


def test_plan_for_empty_input_has_no_batches() -> None:
    assert BatchPlanner(batch_size=10_000).plan(0) == []


def test_plan_exact_multiple_has_no_empty_tail() -> None:
    plan = BatchPlanner(batch_size=5).plan(10)
    assert len(plan) == 2
    assert plan[-1].end_line == 9


def test_default_batch_size() -> None:
    assert BatchPlanner().batch_size == 10_000


def test_rejects_non_positive_batch_size() -> None:
    with pytest.raises(ValueError):
        BatchPlanner(batch_size=0)


def test_iter_planned_yields_line_slices() -> None:
    lines = [f"line {idx}" for idx in range(7)]
    planner = BatchPlanner(batch_size=3)
    batches = [batch for _, batch in planner.iter_planned(lines, planner.plan(len(lines)))]
    assert batches == [lines[0:3], lines[3:6], lines[6:7]]


def test_iter_streamed_matches_planned_partition() -> None:
    lines = [f"line {idx}" for idx in range(7)]
    planner = BatchPlanner(batch_size=3)
    planned = list(planner.iter_planned(lines, planner.plan(len(lines))))
    streamed = list(planner.iter_streamed(iter(lines)))
    assert streamed == planned


def test_iter_streamed_empty_source() -> None:
    assert list(BatchPlanner(batch_size=3).iter_streamed(iter([]))) == []


def test_iter_planned_batches_are_independent_lists() -> None:
    lines = ["a", "b", "c"]
    planner = BatchPlanner(batch_size=2)
    (_, first), (_, second) = planner.iter_planned(lines, planner.plan(len(lines)))
    first.append("x")
    assert lines == ["a", "b", "c"]
    assert second == ["c"]
