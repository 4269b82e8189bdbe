"""
Daily progress log: weight, workouts and calories keyed by date.
"""

import bisect
from datetime import date
from typing import List, Optional

from fitness_genie.api.model import ProgressEntry, RecentProgress


# Coaching assumes one planned workout per tracked day
PLANNED_WORKOUTS_PER_DAY = 1


class ProgressStore:
    """
    In-memory list of ProgressEntry records, at most one per date.

    Entries are kept sorted by date, so a backfilled day lands in its
    place and the window summaries always run oldest to newest.
    """

    def __init__(self):
        self._entries: List[ProgressEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> List[ProgressEntry]:
        return list(self._entries)

    def get(self, entry_date: date) -> Optional[ProgressEntry]:
        for entry in self._entries:
            if entry.date == entry_date:
                return entry
        return None

    def log(
        self,
        entry_date: date,
        weight: Optional[float] = None,
        workouts: Optional[int] = None,
        calories: Optional[int] = None,
        notes: Optional[str] = None,
        default_weight: float = 0.0,
    ) -> ProgressEntry:
        """
        Upsert the entry for a date.

        An existing entry only gets the fields that were supplied. A new
        entry takes default_weight (the profile's starting weight) when no
        weight is given, and zero workouts.

        Returns:
            The stored entry
        """
        entry = self.get(entry_date)
        if entry is not None:
            if weight is not None:
                entry.weight = weight
            if workouts is not None:
                entry.workouts = workouts
            if calories is not None:
                entry.calories = calories
            if notes is not None:
                entry.notes = notes
            return entry

        entry = ProgressEntry(
            date=entry_date,
            weight=weight if weight is not None else default_weight,
            workouts=workouts if workouts is not None else 0,
            calories=calories,
            notes=notes,
        )
        bisect.insort(self._entries, entry, key=lambda e: e.date)
        return entry

    def recent(self, n: int) -> List[ProgressEntry]:
        """Last n entries by date, oldest first."""
        if n <= 0:
            return []
        return self._entries[-n:]

    def last_workout_date(self) -> Optional[date]:
        """Latest date with at least one workout."""
        for entry in reversed(self._entries):
            if entry.workouts > 0:
                return entry.date
        return None


def summarize_progress(entries: List[ProgressEntry]) -> RecentProgress:
    """
    Weekly weight trend and workout totals over a window of entries.

    The weekly rate scales the first-to-last change by 7 / number of
    entries. Average calories only count days that reported calories.
    """
    if not entries:
        return RecentProgress(
            days_tracked=0,
            weekly_weight_change=0.0,
            workouts_completed=0,
            workouts_planned=0,
        )

    weight_change = entries[-1].weight - entries[0].weight
    calories = [e.calories for e in entries if e.calories]

    return RecentProgress(
        days_tracked=len(entries),
        weekly_weight_change=weight_change / len(entries) * 7,
        workouts_completed=sum(e.workouts for e in entries),
        workouts_planned=len(entries) * PLANNED_WORKOUTS_PER_DAY,
        average_calories=sum(calories) / len(calories) if calories else None,
    )


def total_weight_change(entries: List[ProgressEntry]) -> float:
    """First-to-last weight change over the window, in lbs."""
    if not entries:
        return 0.0
    return entries[-1].weight - entries[0].weight
