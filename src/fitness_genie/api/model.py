"""
Domain types for the coaching API.

UserProfile is what the LLM fills in through setup_user_profile, so it
validates its enumerated fields. The rest are plain records.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional


VALID_GENDERS = {"male", "female"}
VALID_GOALS = {"lose_weight", "gain_muscle", "get_fit"}
VALID_ACTIVITY_LEVELS = {"sedentary", "lightly_active", "moderately_active", "very_active"}
VALID_URGENCIES = ("low", "medium", "high")


@dataclass
class UserProfile:
    """Biometrics, goal and the targets derived from them.

    Weight is in lbs and height in inches.
    """
    age: int
    gender: str
    weight: float
    height: float
    goal: str
    activity_level: str
    target_weight: Optional[float] = None
    daily_calories: Optional[int] = None
    protein_target: Optional[int] = None

    def validate(self):
        """Validate the enumerated and numeric fields.

        Raises:
            ValueError: If the profile is invalid.
        """
        if self.gender not in VALID_GENDERS:
            raise ValueError(
                f"Invalid gender '{self.gender}'. "
                f"Must be one of: {', '.join(sorted(VALID_GENDERS))}"
            )
        if self.goal not in VALID_GOALS:
            raise ValueError(
                f"Invalid goal '{self.goal}'. "
                f"Must be one of: {', '.join(sorted(VALID_GOALS))}"
            )
        if self.activity_level not in VALID_ACTIVITY_LEVELS:
            raise ValueError(
                f"Invalid activity_level '{self.activity_level}'. "
                f"Must be one of: {', '.join(sorted(VALID_ACTIVITY_LEVELS))}"
            )
        if self.age <= 0:
            raise ValueError("age must be positive")
        if self.weight <= 0:
            raise ValueError("weight must be positive")
        if self.height <= 0:
            raise ValueError("height must be positive")
        if self.target_weight is not None and self.target_weight <= 0:
            raise ValueError("target_weight must be positive")


@dataclass
class ProgressEntry:
    """One tracked day. The date is the key."""
    date: date
    weight: float
    workouts: int = 0
    calories: Optional[int] = None
    notes: Optional[str] = None


@dataclass
class RecentProgress:
    """Aggregated view over the last few progress entries."""
    days_tracked: int
    weekly_weight_change: float  # lbs per week, negative = loss
    workouts_completed: int
    workouts_planned: int
    average_calories: Optional[float] = None

    @property
    def adherence(self) -> float:
        """Completed / planned workouts, 0 when nothing was planned."""
        if self.workouts_planned <= 0:
            return 0.0
        return self.workouts_completed / self.workouts_planned


@dataclass
class Assessment:
    """Outcome of the coaching decision tree."""
    rule: str
    recommendation: str
    reasoning: str
    action_items: List[str] = field(default_factory=list)
    urgency: str = "low"
