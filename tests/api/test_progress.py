"""Tests for api/progress.py: Daily log upsert and summaries."""

from datetime import date

import pytest

from fitness_genie.api.progress import ProgressStore, summarize_progress, total_weight_change


@pytest.fixture
def store():
    return ProgressStore()


def test_new_entry_defaults(store):
    entry = store.log(date(2026, 10, 1), default_weight=180)

    assert entry.weight == 180
    assert entry.workouts == 0
    assert entry.calories is None
    assert len(store) == 1


def test_same_day_updates_only_supplied_fields(store):
    store.log(date(2026, 10, 1), weight=180, workouts=1, calories=2000, default_weight=180)
    store.log(date(2026, 10, 1), weight=179.5, default_weight=180)

    assert len(store) == 1
    entry = store.get(date(2026, 10, 1))
    assert entry.weight == 179.5
    assert entry.workouts == 1
    assert entry.calories == 2000


def test_same_day_zero_overwrites(store):
    store.log(date(2026, 10, 1), workouts=2, default_weight=180)
    store.log(date(2026, 10, 1), workouts=0, default_weight=180)

    assert store.get(date(2026, 10, 1)).workouts == 0


def test_recent_returns_latest_days(store):
    for day in range(1, 6):
        store.log(date(2026, 10, day), weight=180 - day, default_weight=180)

    recent = store.recent(3)

    assert [e.date.day for e in recent] == [3, 4, 5]
    assert store.recent(0) == []


def test_last_workout_date(store):
    assert store.last_workout_date() is None

    store.log(date(2026, 10, 1), workouts=1, default_weight=180)
    store.log(date(2026, 10, 2), workouts=0, default_weight=180)

    assert store.last_workout_date() == date(2026, 10, 1)


def test_summarize_progress(store):
    store.log(date(2026, 10, 1), weight=180, workouts=1, calories=2200, default_weight=180)
    store.log(date(2026, 10, 2), weight=179.5, workouts=0, default_weight=180)
    store.log(date(2026, 10, 3), weight=179.0, workouts=1, calories=2400, default_weight=180)
    store.log(date(2026, 10, 4), weight=178.0, workouts=1, default_weight=180)

    progress = summarize_progress(store.entries)

    assert progress.days_tracked == 4
    assert progress.weekly_weight_change == pytest.approx(-3.5)
    assert progress.workouts_completed == 3
    assert progress.workouts_planned == 4
    assert progress.adherence == pytest.approx(0.75)
    assert progress.average_calories == pytest.approx(2300)
    assert total_weight_change(store.entries) == pytest.approx(-2.0)


def test_summarize_empty():
    progress = summarize_progress([])

    assert progress.days_tracked == 0
    assert progress.adherence == 0.0


def test_backfilled_day_is_stored_in_date_order(store):
    store.log(date(2026, 10, 10), weight=180, default_weight=180)
    store.log(date(2026, 10, 12), weight=178, default_weight=180)
    store.log(date(2026, 10, 11), weight=179, default_weight=180)

    assert [e.date.day for e in store.entries] == [10, 11, 12]
    assert [e.date.day for e in store.recent(2)] == [11, 12]

    progress = summarize_progress(store.entries)

    assert progress.weekly_weight_change == pytest.approx(-2 / 3 * 7)
    assert total_weight_change(store.entries) == pytest.approx(-2.0)


def test_last_workout_date_uses_latest_day_after_backfill(store):
    store.log(date(2026, 10, 12), workouts=1, default_weight=180)
    store.log(date(2026, 10, 5), workouts=1, default_weight=180)

    assert store.last_workout_date() == date(2026, 10, 12)
