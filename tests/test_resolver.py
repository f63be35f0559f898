from __future__ import annotations

import asyncio
import logging
from datetime import date

import pytest

from fakes import FakeStore, slot
from timegrid.colors import course_color
from timegrid.config import Labels, ResolverSettings
from timegrid.resolve import Failure, Resolved, ScheduleDataResolver, assignment_keys


def _resolve(store: FakeStore, subject: str = "stu", **kwargs) -> Resolved | Failure:
    return asyncio.run(ScheduleDataResolver(store, **kwargs).resolve(subject, date(2026, 10, 21)))


def test_duplicate_class_subject_pairs_share_one_lookup() -> None:
    store = FakeStore(
        enrollments={"stu": ["C1"]},
        slots=[
            slot("a", "C1", "S1", day=0),
            slot("b", "C1", "S1", day=2),
            slot("c", "C1", "S2", day=1, name="Physics"),
        ],
        teachers={("C1", "S1"): "Dilnoza Rahimova", ("C1", "S2"): "Sardor Aliyev"},
    )
    res = _resolve(store)
    assert isinstance(res, Resolved)
    assert len(res.events) == 3
    assert sorted(store.lookups) == [("C1", "S1"), ("C1", "S2")]
    by_id = {e.id: e for e in res.events}
    assert by_id["a"].teacher == by_id["b"].teacher == "Dilnoza Rahimova"
    assert by_id["c"].teacher == "Sardor Aliyev"


def test_lookup_count_equals_distinct_pairs() -> None:
    slots = [slot(f"s{i}", f"C{i % 3}", f"S{i % 4}") for i in range(24)]
    store = FakeStore(enrollments={"stu": ["C0", "C1", "C2"]}, slots=slots)
    res = _resolve(store)
    assert isinstance(res, Resolved)
    assert len(res.events) == 24
    distinct = {(s.class_id, s.subject_id) for s in slots}
    assert len(store.lookups) == len(distinct)
    assert set(store.lookups) == distinct


def test_lookups_run_concurrently() -> None:
    slots = [slot(f"s{i}", "C1", f"S{i}") for i in range(5)]
    store = FakeStore(enrollments={"stu": ["C1"]}, slots=slots, delays={("C1", f"S{i}"): 0.05 for i in range(5)})
    _resolve(store)
    assert store.max_in_flight == 5


def test_assignment_keys_keep_first_seen_order_and_skip_missing_ids() -> None:
    slots = [
        slot("1", "C2", "S1"),
        slot("2", None, "S1"),
        slot("3", "C1", "S1"),
        slot("4", "C2", "S1"),
        slot("5", "C1", None),
    ]
    assert assignment_keys(slots) == [("C2", "S1"), ("C1", "S1")]


def test_no_enrollments_yields_empty_success_without_timetable_query() -> None:
    store = FakeStore(enrollments={})
    res = _resolve(store)
    assert isinstance(res, Resolved)
    assert res.events == ()
    assert store.timetable_calls == []
    assert store.lookups == []


def test_no_slots_yields_empty_success_without_lookups() -> None:
    store = FakeStore(enrollments={"stu": ["C9"]}, slots=[slot("a", "C1", "S1")])
    res = _resolve(store)
    assert isinstance(res, Resolved)
    assert res.events == ()
    assert store.timetable_calls == [["C9"]]
    assert store.lookups == []


def test_enrollment_failure_is_reported_not_raised(caplog: pytest.LogCaptureFixture) -> None:
    store = FakeStore(fail_enrollments=True)
    with caplog.at_level(logging.ERROR):
        res = _resolve(store)
    assert isinstance(res, Failure)
    assert res.reason == "Failed to fetch enrolled classes"
    assert "enrollment query failed" in (res.cause or "")
    assert store.timetable_calls == []
    assert any("Enrollment lookup failed" in r.message for r in caplog.records)


def test_timetable_failure_is_reported_not_raised() -> None:
    store = FakeStore(enrollments={"stu": ["C1"]}, fail_timetable=True)
    res = _resolve(store)
    assert isinstance(res, Failure)
    assert res.reason == "Failed to fetch timetable"
    assert store.lookups == []


def test_failed_teacher_lookup_degrades_only_its_own_events(caplog: pytest.LogCaptureFixture) -> None:
    store = FakeStore(
        enrollments={"stu": ["C1"]},
        slots=[slot("a", "C1", "S1"), slot("b", "C1", "S2", name="Physics")],
        teachers={("C1", "S1"): "Dilnoza Rahimova", ("C1", "S2"): "Sardor Aliyev"},
        failing_keys=[("C1", "S2")],
    )
    with caplog.at_level(logging.WARNING):
        res = _resolve(store)
    assert isinstance(res, Resolved)
    by_id = {e.id: e for e in res.events}
    assert by_id["a"].teacher == "Dilnoza Rahimova"
    assert by_id["b"].teacher == "N/A"
    assert any("C1/S2 failed" in r.message for r in caplog.records)


def test_slow_teacher_lookup_times_out_to_unknown() -> None:
    store = FakeStore(
        enrollments={"stu": ["C1"]},
        slots=[slot("a", "C1", "S1"), slot("b", "C1", "S2", name="Physics")],
        teachers={("C1", "S1"): "Dilnoza Rahimova", ("C1", "S2"): "Sardor Aliyev"},
        delays={("C1", "S2"): 2.0},
    )
    res = _resolve(store, settings=ResolverSettings(lookup_timeout_s=0.1))
    assert isinstance(res, Resolved)
    by_id = {e.id: e for e in res.events}
    assert by_id["a"].teacher == "Dilnoza Rahimova"
    assert by_id["b"].teacher == "N/A"


def test_retries_are_bounded() -> None:
    store = FakeStore(
        enrollments={"stu": ["C1"]},
        slots=[slot("a", "C1", "S1")],
        failing_keys=[("C1", "S1")],
    )
    res = _resolve(store, settings=ResolverSettings(lookup_retries=2))
    assert isinstance(res, Resolved)
    assert res.events[0].teacher == "N/A"
    assert store.lookups == [("C1", "S1")] * 3


def test_unassigned_and_blank_named_teachers_use_label() -> None:
    store = FakeStore(
        enrollments={"stu": ["C1"]},
        slots=[slot("a", "C1", "S1"), slot("b", "C1", "S2", name="Physics")],
        teachers={("C1", "S2"): "   "},
    )
    res = _resolve(store, labels=Labels(teacher_unknown="Mavjud emas"))
    assert isinstance(res, Resolved)
    assert [e.teacher for e in res.events] == ["Mavjud emas", "Mavjud emas"]


def test_slot_without_ids_gets_unknown_teacher() -> None:
    store = FakeStore(enrollments={"stu": ["C1"]}, slots=[slot("a", "C1", None)])
    res = _resolve(store)
    assert isinstance(res, Resolved)
    assert res.events[0].teacher == "N/A"
    assert store.lookups == []


def test_malformed_times_fall_back_to_defaults(caplog: pytest.LogCaptureFixture) -> None:
    store = FakeStore(
        enrollments={"stu": ["C1"]},
        slots=[
            slot("bad", start=(25, "abc"), end=(None, 75)),
            slot("strings", start=("08", "15"), end=("9", None), day="3"),
        ],
    )
    with caplog.at_level(logging.WARNING):
        res = _resolve(store)
    assert isinstance(res, Resolved)
    bad, strings = res.events
    assert (bad.start_time, bad.start_minute, bad.end_time, bad.end_minute) == (9, 0, 10, 0)
    assert (strings.start_time, strings.start_minute, strings.end_time, strings.end_minute) == (8, 15, 9, 0)
    assert strings.day == 3
    assert any("start_hour=25" in r.message for r in caplog.records)


def test_unparseable_day_defaults_to_monday_and_out_of_range_day_passes_through() -> None:
    store = FakeStore(enrollments={"stu": ["C1"]}, slots=[slot("x", day="soon"), slot("y", day=9)])
    res = _resolve(store)
    assert isinstance(res, Resolved)
    assert [e.day for e in res.events] == [0, 9]


def test_title_course_and_location_fallbacks() -> None:
    store = FakeStore(
        enrollments={"stu": ["C1"]},
        slots=[
            slot("t", title="Chess Club", name="Chess"),
            slot("n", title=None, name="Biology", location=None),
            slot("u", title=None, name=None),
            slot(None),
        ],
    )
    res = _resolve(store)
    assert isinstance(res, Resolved)
    t, n, u, anon = res.events
    assert (t.title, t.course) == ("Chess Club", "Chess")
    assert (n.title, n.course, n.location) == ("Biology", "Biology", "Unknown Location")
    assert (u.title, u.course) == ("Unknown Course", "Unknown Course")
    assert anon.id == "4"
    assert t.color == course_color("Chess")


def test_week_is_normalised_to_monday() -> None:
    store = FakeStore(enrollments={"stu": ["C1"]}, slots=[slot("a")])
    res = _resolve(store)
    assert isinstance(res, Resolved)
    assert res.week_start == date(2026, 10, 19)


def test_resolving_twice_gives_equal_results() -> None:
    store = FakeStore(
        enrollments={"stu": ["C1"]},
        slots=[slot("a", "C1", "S1"), slot("b", "C1", "S2", name="Physics", day=3)],
        teachers={("C1", "S1"): "Dilnoza Rahimova"},
    )
    assert _resolve(store) == _resolve(store)


def test_resolve_without_subject_is_a_caller_error() -> None:
    store = FakeStore()
    with pytest.raises(ValueError):
        asyncio.run(ScheduleDataResolver(store).resolve(""))
    assert store.enrollment_calls == []


def test_times_with_trailing_text_keep_their_leading_number() -> None:
    store = FakeStore(enrollments={"stu": ["C1"]}, slots=[slot("a", start=("10h", "30min"), end=("11h", "15"))])
    res = _resolve(store)
    assert isinstance(res, Resolved)
    e = res.events[0]
    assert (e.start_time, e.start_minute, e.end_time, e.end_minute) == (10, 30, 11, 15)
