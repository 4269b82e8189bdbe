"""
Personal coaching tools for the Fitness Genie MCP server.

Profile setup with calorie/protein targets, daily progress logging,
rule-based coaching reports and daily check-ins.
"""

import logging
from datetime import date, datetime

from fastmcp import Context

from fitness_genie.api import calculator, coach
from fitness_genie.api import knowledge as api_knowledge
from fitness_genie.api import progress as api_progress
from fitness_genie.client_factory import get_session, tool_errors
from fitness_genie.sdk.errors import ToolArgumentError
from fitness_genie.utils import format_signed, parse_date

logger = logging.getLogger(__name__)

PROFILE_REQUIRED = "❌ Please set up your profile first using the setup_user_profile tool."

URGENCY_MARKERS = {"high": "🚨", "medium": "⚠️", "low": "✅"}

# Extra passages pulled from user-added sources into a coaching report
ADDED_SOURCE_RESULTS = 2


def _today() -> date:
    return datetime.now().date()


def _label(value: str) -> str:
    return value.replace("_", " ").upper()


def register_tools(app):
    """Register coaching tools with the MCP app."""

    @app.tool()
    @tool_errors
    async def setup_user_profile(
        age: int,
        gender: str,
        weight: float,
        height: float,
        goal: str,
        activity_level: str,
        ctx: Context,
        target_weight: float = None,
    ) -> str:
        """
        Set up your coaching profile and daily targets.

        Calculates daily calories (Mifflin-St Jeor BMR x activity multiplier,
        adjusted for the goal) and a protein target. Running it again
        replaces the previous profile.

        Args:
            age: Age in years
            gender: male or female
            weight: Current weight in lbs
            height: Height in inches
            goal: lose_weight, gain_muscle or get_fit
            activity_level: sedentary, lightly_active, moderately_active or very_active
            target_weight: Target weight in lbs (optional)

        Returns:
            Profile summary with calorie and protein targets
        """
        session = get_session(ctx)
        profile = calculator.create_user_profile(
            age=age,
            gender=gender,
            weight=weight,
            height=height,
            goal=goal,
            activity_level=activity_level,
            target_weight=target_weight,
        )
        session.profile = profile
        logger.info(f"Profile set up: goal={goal}, daily_calories={profile.daily_calories}")

        feet, inches = divmod(height, 12)
        lines = [
            "🧞‍♂️ **Profile Created Successfully!**",
            "",
            "**Your Stats:**",
            f"- Age: {age} years old",
            f"- Height: {int(feet)}'{inches:g}\"",
            f"- Current Weight: {weight:g} lbs",
        ]
        if target_weight:
            difference = abs(weight - target_weight)
            direction = "lose" if weight > target_weight else "gain"
            lines.append(
                f"- Target Weight: {target_weight:g} lbs ({difference:g} lbs to {direction})"
            )
        lines += [
            f"- Goal: {_label(goal)}",
            f"- Activity Level: {_label(activity_level)}",
            "",
            "**Your Daily Targets:**",
            f"- Calories: {profile.daily_calories} per day",
            f"- Protein: {profile.protein_target}g per day",
            "",
            "**What's Next:**",
            "1. Start tracking your daily weight",
            "2. Log your workouts when you complete them",
            "3. Ask me for daily coaching advice anytime!",
        ]
        return "\n".join(lines)

    @app.tool()
    @tool_errors
    async def log_progress(
        ctx: Context,
        weight: float = None,
        workouts_today: int = None,
        calories: int = None,
        notes: str = None,
        date: str = None,
    ) -> str:
        """
        Log today's weight, workouts and calories.

        Logging twice on the same day updates that day's entry with the
        values you provide.

        Args:
            weight: Weight in lbs (optional)
            workouts_today: Number of workouts completed (optional)
            calories: Calories eaten (optional)
            notes: Free-form notes (optional)
            date: Day to log in YYYY-MM-DD format, today or earlier (default: today)

        Returns:
            Confirmation with changes versus your starting weight and calorie target
        """
        session = get_session(ctx)
        profile = session.profile
        if profile is None:
            return PROFILE_REQUIRED

        today = _today()
        try:
            entry_date = parse_date(date) if date else today
        except ValueError:
            raise ToolArgumentError(f"Invalid date '{date}'. Use YYYY-MM-DD format")
        if entry_date > today:
            raise ToolArgumentError(f"Cannot log progress for a future date ({entry_date.isoformat()})")

        session.progress.log(
            entry_date,
            weight=weight,
            workouts=workouts_today,
            calories=calories,
            notes=notes,
            default_weight=profile.weight,
        )

        lines = [f"✅ **Progress Logged for {entry_date.isoformat()}**", ""]
        if weight is not None:
            change = format_signed(weight - profile.weight)
            lines.append(f"⚖️ Weight: {weight:g} lbs ({change} lbs from start)")
        if workouts_today:
            lines.append(f"💪 Workouts: {workouts_today} completed")
        if calories is not None:
            target = profile.daily_calories or 0
            lines.append(
                f"🍽️ Calories: {calories} ({calories - target:+d} vs target of {target})"
            )
        if notes:
            lines.append(f"📝 Notes: {notes}")
        lines += ["", "💡 Use 'get_coaching_advice' to see how you're doing overall!"]
        return "\n".join(lines)

    @app.tool()
    @tool_errors
    async def get_coaching_advice(ctx: Context, days: int = 7) -> str:
        """
        Get a personal coaching report from your recent progress.

        Compares your weekly weight trend and workout adherence against a
        fixed set of coaching rules and adds matching research passages.
        Needs at least 2 logged days.

        Args:
            days: Number of most recent logged days to analyze (default: 7)

        Returns:
            Coaching report with recommendation, reasoning and action items
        """
        session = get_session(ctx)
        profile = session.profile
        if profile is None:
            return PROFILE_REQUIRED
        if days is None or days < 1:
            raise ToolArgumentError("days must be a positive integer")

        recent = session.progress.recent(days)
        if len(recent) < 2:
            guidance = api_knowledge.generate_rag_response(
                session.static_knowledge,
                coach.BEGINNER_QUERY,
                profile.goal,
                coach.BEGINNER_SITUATION,
            )
            return "\n".join([
                "📊 **Need More Data**",
                "",
                "I need at least 2 days of progress logs to give you personalized advice. "
                "Please log your weight and workouts for a few more days, then ask for "
                "coaching advice again!",
                "",
                "**Quick Tip for Today:**",
                coach.get_daily_advice(None),
                "",
                "**What the research says:**",
                guidance,
            ])

        progress = api_progress.summarize_progress(recent)
        assessment = coach.assess_progress(profile, progress)
        query, situation = coach.select_research_query(progress)
        research = api_knowledge.generate_rag_response(
            session.static_knowledge, query, profile.goal, situation,
        )
        added = session.dynamic_knowledge.search(query, ADDED_SOURCE_RESULTS)

        weight_change = api_progress.total_weight_change(recent)
        workouts_per_week = progress.workouts_completed / progress.days_tracked * 7
        marker = URGENCY_MARKERS.get(assessment.urgency, "")

        lines = [
            f"🧞‍♂️ **Your Personal Coaching Report** {marker}",
            "",
            f"**Recent Progress ({progress.days_tracked} days):**",
            f"- Weight Change: {format_signed(weight_change)} lbs "
            f"({progress.weekly_weight_change:.1f} lbs/week)",
            f"- Workouts: {progress.workouts_completed} completed "
            f"({workouts_per_week:.1f}/week average)",
            f"- Workout Adherence: {progress.adherence * 100:.0f}%",
        ]
        if progress.average_calories:
            lines.append(
                f"- Average Calories: {progress.average_calories:.0f} "
                f"(target {profile.daily_calories})"
            )
        lines += [
            "",
            "**🎯 Recommendation:**",
            assessment.recommendation,
            "",
            "**🤔 Why:**",
            assessment.reasoning,
            "",
            "**📋 Action Items:**",
        ]
        lines += [f"{i}. {item}" for i, item in enumerate(assessment.action_items, 1)]
        lines += [
            "",
            f"**Urgency:** {assessment.urgency}",
            "",
            "**🧠 Research Context:**",
            research,
        ]
        if added:
            lines += ["", "**📚 Additional Sources:**"]
            lines += [f"• {doc.source}: {doc.content[:100]}..." for doc in added]
        lines += [
            "",
            "---",
            "💪 Keep up the great work! Small consistent actions lead to big results.",
        ]
        return "\n".join(lines)

    @app.tool()
    @tool_errors
    async def get_daily_advice(ctx: Context) -> str:
        """
        Get today's coaching check-in.

        Advice depends on how many days ago your last logged workout was.

        Returns:
            Daily advice plus your calorie and protein targets
        """
        session = get_session(ctx)
        profile = session.profile
        if profile is None:
            return PROFILE_REQUIRED

        today = _today()
        advice = coach.get_daily_advice(session.days_since_last_workout(today))

        lines = ["🌅 **Daily Coaching Check-in**", ""]
        today_entry = session.progress.get(today)
        if today_entry and today_entry.workouts:
            lines += [
                f"🎉 You've already completed {today_entry.workouts} workout(s) today - amazing!",
                "",
            ]
        lines += [
            advice,
            "",
            "**Quick Reminder:**",
            f"- Calorie target: {profile.daily_calories} calories",
            f"- Protein target: {profile.protein_target}g protein",
        ]
        return "\n".join(lines)

    return app
