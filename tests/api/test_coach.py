"""Tests for api/coach.py: Rule ordering, daily advice and research queries."""

import pytest

from fitness_genie.api.coach import (
    READY_AGAIN_ADVICE,
    RECOVERY_ADVICE,
    RESTART_ADVICE,
    ROUTINE_ADVICE,
    STARTER_ADVICE,
    assess_progress,
    get_daily_advice,
    select_research_query,
)
from fitness_genie.api.model import RecentProgress


def progress(delta, completed=7, planned=7, calories=None):
    return RecentProgress(
        days_tracked=planned,
        weekly_weight_change=delta,
        workouts_completed=completed,
        workouts_planned=planned,
        average_calories=calories,
    )


class TestAssessProgress:
    def test_excellent_progress(self, user_profile):
        result = assess_progress(user_profile, progress(-1.0, completed=6))

        assert result.rule == "excellent_progress"
        assert result.urgency == "low"
        assert "1.0 lbs per week" in result.reasoning
        assert "86% workout adherence" in result.reasoning

    def test_excellent_wins_over_plateau_band(self, user_profile):
        # -0.5 with full adherence satisfies rule 1 before rule 2 is checked
        assert assess_progress(user_profile, progress(-0.5)).rule == "excellent_progress"

    def test_plateau(self, user_profile):
        result = assess_progress(user_profile, progress(0.0, completed=5))

        assert result.rule == "plateau"
        assert result.urgency == "medium"
        assert len(result.action_items) == 4

    def test_losing_too_fast(self, user_profile):
        result = assess_progress(user_profile, progress(-3.0))

        assert result.rule == "losing_too_fast"
        assert result.urgency == "high"

    def test_low_adherence(self, user_profile):
        result = assess_progress(user_profile, progress(-1.0, completed=2))

        assert result.rule == "low_adherence"
        assert result.urgency == "high"

    def test_calories_too_high(self, user_profile):
        # Between the plateau and excellent bands, adherence too low for a plateau
        result = assess_progress(user_profile, progress(-0.3, completed=4, calories=2600))

        assert result.rule == "calories_too_high"
        assert "2600 calories" in result.reasoning
        assert "2263" in result.reasoning

    def test_calories_within_tolerance(self, user_profile):
        result = assess_progress(user_profile, progress(-0.3, completed=4, calories=2400))
        assert result.rule == "insufficient_data"

    def test_zero_planned_counts_as_zero_adherence(self, user_profile):
        result = assess_progress(user_profile, progress(-1.0, completed=0, planned=0))
        assert result.rule == "low_adherence"


class TestDailyAdvice:
    @pytest.mark.parametrize("days, expected", [
        (None, STARTER_ADVICE),
        (0, RECOVERY_ADVICE),
        (1, READY_AGAIN_ADVICE),
        (2, ROUTINE_ADVICE),
        (3, RESTART_ADVICE),
        (10, RESTART_ADVICE),
    ])
    def test_advice_by_days_since_workout(self, days, expected):
        assert get_daily_advice(days) == expected


class TestSelectResearchQuery:
    def test_plateau(self):
        query, situation = select_research_query(progress(0.1))
        assert "plateaued" in query
        assert situation == "plateau_with_exercise_adherence_1.0"

    def test_rapid_loss(self):
        query, situation = select_research_query(progress(-3.0))
        assert "too quickly" in query
        assert situation == "rapid_weight_loss_3.0_lbs_per_week"

    def test_low_adherence(self):
        _, situation = select_research_query(progress(-1.0, completed=2, planned=5))
        assert situation == "low_adherence_40_percent"

    def test_steady(self):
        query, situation = select_research_query(progress(-1.0))
        assert "1.0 lbs per week" in query
        assert situation == "steady_progress_1.0_lbs_per_week"
