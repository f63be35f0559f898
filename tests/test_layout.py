from __future__ import annotations

import logging

import pytest

from timegrid.config import GridConfig
from timegrid.layout import WeekGridLayoutEngine, filter_events, layout
from timegrid.models import ScheduleEvent


def _event(
    id: str,
    day: int = 0,
    start: tuple[int, int] = (9, 0),
    end: tuple[int, int] = (10, 0),
    course: str = "Mathematics",
) -> ScheduleEvent:
    return ScheduleEvent(
        id=id,
        title=course,
        course=course,
        day=day,
        start_time=start[0],
        start_minute=start[1],
        end_time=end[0],
        end_minute=end[1],
        teacher="N/A",
        location="Room 1",
        color="#336699",
    )


GRID = GridConfig(start_hour=8, end_hour=18, pixels_per_hour=80, header_height_px=60, time_column_width_px=80)


def test_block_geometry_for_half_past_lesson() -> None:
    (block,) = layout([_event("e", day=2, start=(9, 30), end=(10, 30))], GRID)
    assert block.top == pytest.approx(180.0)
    assert block.height == pytest.approx(80.0)
    # (1200 - 80) / 7 = 160 per column
    assert block.left == pytest.approx(80 + 2 * 160)
    assert block.width == pytest.approx(150.0)


def test_end_before_start_uses_floor_duration() -> None:
    (block,) = layout([_event("e", start=(9, 30), end=(9, 15))], GRID)
    assert block.height == pytest.approx(40.0)


def test_zero_duration_uses_floor_duration() -> None:
    (block,) = layout([_event("e", start=(11, 0), end=(11, 0))], GRID)
    assert block.height == pytest.approx(40.0)


def test_short_lessons_are_clamped_to_minimum_height() -> None:
    (block,) = layout([_event("e", start=(9, 0), end=(9, 10))], GRID)
    assert block.height == pytest.approx(30.0)


def test_height_never_below_minimum() -> None:
    events = [_event(f"e{m}", start=(9, 0), end=divmod(9 * 60 + m, 60)) for m in range(-30, 121, 5)]
    blocks = layout(events, GRID)
    assert len(blocks) == len(events)
    assert all(b.height >= GRID.min_block_height_px for b in blocks)


def test_top_is_linear_in_start_time() -> None:
    engine = WeekGridLayoutEngine(GRID)
    tops = [engine.position(_event("e", start=(h, 0), end=(h + 1, 0))).top for h in range(8, 17)]
    assert tops[0] == pytest.approx(60.0)
    assert all(b - a == pytest.approx(80.0) for a, b in zip(tops, tops[1:]))


def test_filter_returns_subset_in_input_order() -> None:
    events = [
        _event("m1", day=0, course="Mathematics"),
        _event("p1", day=1, course="Physics"),
        _event("m2", day=3, course="Mathematics"),
    ]
    blocks = layout(events, GRID, filter_course="Mathematics")
    assert [b.event.id for b in blocks] == ["m1", "m2"]
    assert [e.id for e in filter_events(events, None)] == ["m1", "p1", "m2"]
    assert [e.id for e in filter_events(events, "")] == ["m1", "p1", "m2"]
    assert filter_events(events, "History") == []


def test_events_with_invalid_day_are_skipped_and_logged(caplog: pytest.LogCaptureFixture) -> None:
    events = [_event("ok", day=6), _event("late", day=7), _event("early", day=-1)]
    with caplog.at_level(logging.WARNING, logger="timegrid.layout.grid"):
        blocks = layout(events, GRID)
    assert [b.event.id for b in blocks] == ["ok"]
    messages = " ".join(r.message for r in caplog.records)
    assert "late" in messages and "early" in messages


def test_overlapping_events_share_the_column() -> None:
    a, b = layout([_event("a", day=1), _event("b", day=1, start=(9, 30), end=(10, 30))], GRID)
    assert a.left == b.left
    assert a.width == b.width


def test_width_follows_available_width() -> None:
    narrow = GRID.with_width(360)
    (block,) = layout([_event("e", day=6)], narrow)
    assert block.left == pytest.approx(80 + 6 * 40)
    assert block.width == pytest.approx(30.0)
    (squeezed,) = layout([_event("e")], GRID.with_width(50))
    assert squeezed.width == 0.0


def test_layout_is_deterministic_and_leaves_events_untouched() -> None:
    events = [_event("a", day=0), _event("b", day=4, start=(14, 15), end=(15, 0))]
    first = layout(events, GRID)
    second = layout(events, GRID)
    assert first == second
    assert [b.event for b in first] == events
