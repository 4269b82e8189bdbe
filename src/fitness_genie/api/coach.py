"""
Rule-based coach.

assess_progress() walks an ordered list of rules and returns the first
outcome whose condition matches. Conditions overlap (a plateau with good
adherence also satisfies the adherence part of "excellent progress"), so
the order of RULES is part of the behaviour.
"""

from typing import Callable, List, NamedTuple, Optional, Tuple

from fitness_genie.api.model import Assessment, RecentProgress, UserProfile
from fitness_genie.utils import round_half_up


# Calories above target that count as overeating
CALORIE_TOLERANCE = 200


class Rule(NamedTuple):
    name: str
    applies: Callable[[UserProfile, RecentProgress], bool]
    assess: Callable[[UserProfile, RecentProgress], Assessment]


def _excellent_progress(profile: UserProfile, progress: RecentProgress) -> Assessment:
    delta = progress.weekly_weight_change
    return Assessment(
        rule="excellent_progress",
        recommendation="Excellent progress! Keep doing exactly what you're doing.",
        reasoning=(
            f"You're losing {abs(delta):.1f} lbs per week with "
            f"{round_half_up(progress.adherence * 100)}% workout adherence. "
            "This is sustainable and healthy."
        ),
        action_items=[
            "Continue your current eating and workout routine",
            "Take progress photos to track visual changes",
            "Consider adding one new healthy habit to build momentum",
        ],
        urgency="low",
    )


def _plateau(profile: UserProfile, progress: RecentProgress) -> Assessment:
    return Assessment(
        rule="plateau",
        recommendation="Your weight loss has stalled. Time to make adjustments.",
        reasoning=(
            "You're doing the workouts but not losing weight. "
            "This is normal - your metabolism has adapted."
        ),
        action_items=[
            "Reduce daily calories by 200 (temporarily)",
            "Add 10 minutes to your cardio sessions",
            "Track your food more carefully for a week",
            "Consider a 'refeed day' this weekend to reset metabolism",
        ],
        urgency="medium",
    )


def _losing_too_fast(profile: UserProfile, progress: RecentProgress) -> Assessment:
    return Assessment(
        rule="losing_too_fast",
        recommendation="You're losing weight too quickly. Let's slow down for better health.",
        reasoning="Rapid weight loss can cause muscle loss, fatigue, and metabolic damage.",
        action_items=[
            "Increase daily calories by 200-300",
            "Add more protein to preserve muscle mass",
            "Focus on strength training to maintain muscle",
            "Monitor energy levels closely",
        ],
        urgency="high",
    )


def _low_adherence(profile: UserProfile, progress: RecentProgress) -> Assessment:
    return Assessment(
        rule="low_adherence",
        recommendation="Let's focus on building a sustainable workout habit first.",
        reasoning="Consistency beats intensity. Let's make workouts easier to stick with.",
        action_items=[
            "Reduce workout time to 15-20 minutes",
            "Choose activities you actually enjoy",
            "Set workout reminders on your phone",
            "Find an accountability partner or join a group",
        ],
        urgency="high",
    )


def _calories_too_high(profile: UserProfile, progress: RecentProgress) -> Assessment:
    return Assessment(
        rule="calories_too_high",
        recommendation="Your workouts are great, but calories are too high for weight loss.",
        reasoning=(
            f"You're eating about {round_half_up(progress.average_calories)} calories "
            f"but need around {profile.daily_calories} for your goal."
        ),
        action_items=[
            "Focus on protein at each meal to feel fuller",
            "Drink a large glass of water before meals",
            "Use smaller plates and measure portions",
            "Plan your meals in advance",
        ],
        urgency="medium",
    )


def _insufficient_data(profile: UserProfile, progress: RecentProgress) -> Assessment:
    return Assessment(
        rule="insufficient_data",
        recommendation="I need more information to give you the best advice.",
        reasoning="Track your progress for a few more days so I can spot patterns.",
        action_items=[
            "Weigh yourself daily at the same time",
            "Log your workouts when you complete them",
            "Track calories for at least 3 days",
            "Rate your energy and motivation daily (1-10)",
        ],
        urgency="low",
    )


def _eats_over_target(profile: UserProfile, progress: RecentProgress) -> bool:
    if not progress.average_calories:
        return False
    return progress.average_calories > (profile.daily_calories or 0) + CALORIE_TOLERANCE


RULES: List[Rule] = [
    Rule(
        "excellent_progress",
        lambda p, r: -2.0 <= r.weekly_weight_change <= -0.5 and r.adherence >= 0.8,
        _excellent_progress,
    ),
    Rule(
        "plateau",
        lambda p, r: r.weekly_weight_change > -0.2 and r.adherence >= 0.7,
        _plateau,
    ),
    Rule(
        "losing_too_fast",
        lambda p, r: r.weekly_weight_change < -2.5,
        _losing_too_fast,
    ),
    Rule(
        "low_adherence",
        lambda p, r: r.adherence < 0.5,
        _low_adherence,
    ),
    Rule("calories_too_high", _eats_over_target, _calories_too_high),
    Rule("insufficient_data", lambda p, r: True, _insufficient_data),
]


def assess_progress(profile: UserProfile, progress: RecentProgress) -> Assessment:
    """First matching rule wins; the last rule always matches."""
    rule = next(r for r in RULES if r.applies(profile, progress))
    return rule.assess(profile, progress)


# ── Daily advice ─────────────────────────────────────────────────────

STARTER_ADVICE = (
    "Ready to start your fitness journey? "
    "Let's begin with a simple 20-minute walk today!"
)
RECOVERY_ADVICE = (
    "Great job on today's workout! Make sure to get good protein "
    "within 2 hours and stay hydrated."
)
READY_AGAIN_ADVICE = (
    "Perfect timing for your next workout! Your muscles have recovered. "
    "What sounds good today?"
)
RESTART_ADVICE = (
    "It's been a few days since your last workout. No judgment! "
    "Let's get back on track with something easy today."
)
ROUTINE_ADVICE = (
    "You're in a great routine! Keep up the consistency - "
    "that's the key to success."
)


def get_daily_advice(days_since_last_workout: Optional[int] = None) -> str:
    """One of four fixed messages keyed on days since the last workout."""
    if days_since_last_workout is None:
        return STARTER_ADVICE
    if days_since_last_workout == 0:
        return RECOVERY_ADVICE
    if days_since_last_workout == 1:
        return READY_AGAIN_ADVICE
    if days_since_last_workout >= 3:
        return RESTART_ADVICE
    return ROUTINE_ADVICE


# ── Research query selection ─────────────────────────────────────────

BEGINNER_QUERY = (
    "I'm just starting my fitness journey and need guidance on tracking and consistency"
)
BEGINNER_SITUATION = "new_user_insufficient_data"


def select_research_query(progress: RecentProgress) -> Tuple[str, str]:
    """
    Pick the knowledge-base query and situation label for a progress pattern.

    Returns:
        (query, situation)
    """
    delta = progress.weekly_weight_change
    adherence = progress.adherence

    if delta > -0.2 and adherence >= 0.7:
        return (
            "my weight loss has plateaued despite consistent exercise what should I do",
            f"plateau_with_exercise_adherence_{adherence:.1f}",
        )
    if delta < -2.5:
        return (
            "I'm losing weight too quickly what are the risks and how should I slow down",
            f"rapid_weight_loss_{abs(delta):.1f}_lbs_per_week",
        )
    if adherence < 0.5:
        return (
            "I'm struggling with workout consistency and building exercise habits",
            f"low_adherence_{round_half_up(adherence * 100)}_percent",
        )
    return (
        f"I'm making progress with {abs(delta):.1f} lbs per week loss how can I optimize further",
        f"steady_progress_{abs(delta):.1f}_lbs_per_week",
    )
