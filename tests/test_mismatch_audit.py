"""Tests for the WOD score-type audit, repair and single-record fix."""

from datetime import date

import pytest

from conftest import OTHER_USER_ID, USER_ID, store_workout
from wodlog.core.exceptions import NotFound, PersistenceError, ScoreTypeMismatch
from wodlog.models.wod import WOD
from wodlog.models.workout import WODPerformance
from wodlog.services.mismatch_audit import detect_mismatches, repair_mismatches, update_wod_record
from wodlog.services.score_validation import ScoreFields

pytestmark = pytest.mark.asyncio


@pytest.fixture
def mixed_rows(fran, cindy):
    """Two valid rows and two bad ones (one per user)."""
    return [
        (USER_ID, date(2026, 1, 1), WODPerformance(wod_id=fran.id, time_seconds=240)),
        (USER_ID, date(2026, 1, 2), WODPerformance(wod_id=fran.id, rounds=5)),
        (OTHER_USER_ID, date(2026, 1, 3), WODPerformance(wod_id=cindy.id, rounds=20, weight=50)),
        (OTHER_USER_ID, date(2026, 1, 4), WODPerformance(wod_id=cindy.id, rounds=18, reps=4)),
    ]


async def _store_all(repos, rows):
    stored = []
    for user_id, workout_date, row in rows:
        workout = await store_workout(repos, user_id, workout_date, wod_rows=[row])
        stored.append(workout.wods[0])
    return stored


async def test_detect_finds_violations_newest_first(repos, mixed_rows):
    await _store_all(repos, mixed_rows)

    mismatches = await detect_mismatches(repos.performances)

    assert [m.wod_name for m in mismatches] == ["Cindy", "Fran"]
    cindy_bad, fran_bad = mismatches
    assert cindy_bad.user_id == OTHER_USER_ID
    assert cindy_bad.violating_fields == ("weight",)
    assert cindy_bad.weight == 50
    assert fran_bad.expected_score_type == "Time (HH:MM:SS)"
    assert fran_bad.issue == "Missing time_seconds for Time-based WOD"
    assert fran_bad.violating_fields == ("time_seconds",)


async def test_free_form_score_types_are_never_flagged(repos):
    wod = await repos.wods.add(WOD(name="Legacy", source="Other Coach", type="Notables", score_type="Points"))
    await store_workout(repos, USER_ID, date(2026, 1, 1), wod_rows=[WODPerformance(wod_id=wod.id, reps=3)])
    assert await detect_mismatches(repos.performances) == []


async def test_repair_deletes_only_mismatches(repos, mixed_rows):
    stored = await _store_all(repos, mixed_rows)

    result = await repair_mismatches(repos.performances)

    assert (result.total_found, result.deleted_count) == (2, 2)
    assert await detect_mismatches(repos.performances) == []
    assert await repos.performances.get_wod_performance(stored[0].id) is not None
    assert await repos.performances.get_wod_performance(stored[1].id) is None


async def test_repair_continues_past_failed_delete(repos, mixed_rows, monkeypatch):
    stored = await _store_all(repos, mixed_rows)
    failing_id = stored[2].id
    real_delete = repos.performances.delete_wod_performance

    async def flaky_delete(row_id):
        if row_id == failing_id:
            raise PersistenceError("boom")
        await real_delete(row_id)

    monkeypatch.setattr(repos.performances, "delete_wod_performance", flaky_delete)

    result = await repair_mismatches(repos.performances)

    assert (result.total_found, result.deleted_count) == (2, 1)
    remaining = await detect_mismatches(repos.performances)
    assert [m.id for m in remaining] == [failing_id]


async def test_update_wod_record_fixes_row(repos, fran):
    workout = await store_workout(
        repos, USER_ID, date(2026, 1, 1), wod_rows=[WODPerformance(wod_id=fran.id, rounds=5, is_pr=True, order_index=2)]
    )
    row_id = workout.wods[0].id

    row = await update_wod_record(repos.performances, row_id, ScoreFields(time_seconds=280), notes="fixed")

    assert (row.time_seconds, row.rounds, row.notes) == (280, None, "fixed")
    assert row.is_pr is True
    assert row.order_index == 2
    assert await detect_mismatches(repos.performances) == []


async def test_update_wod_record_rejects_invalid(repos, fran):
    workout = await store_workout(
        repos, USER_ID, date(2026, 1, 1), wod_rows=[WODPerformance(wod_id=fran.id, time_seconds=300)]
    )
    with pytest.raises(ScoreTypeMismatch):
        await update_wod_record(repos.performances, workout.wods[0].id, ScoreFields(weight=95))


async def test_update_wod_record_unknown(repos):
    with pytest.raises(NotFound):
        await update_wod_record(repos.performances, 12345, ScoreFields(time_seconds=1))
