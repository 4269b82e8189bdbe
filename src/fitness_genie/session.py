"""
Per-conversation coaching state.

Everything a user builds up during a conversation (profile, progress log,
added knowledge sources) lives on one CoachingSession that the tool layer
looks up and passes into the domain functions. Nothing is persisted.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from fitness_genie.api.ingestion import KnowledgeIngestor
from fitness_genie.api.knowledge import (
    KnowledgeBase,
    dynamic_knowledge_base,
    static_knowledge_base,
)
from fitness_genie.api.model import UserProfile
from fitness_genie.api.progress import ProgressStore


@dataclass
class CoachingSession:
    """Profile, progress and knowledge bases for one MCP session."""
    profile: Optional[UserProfile] = None
    progress: ProgressStore = field(default_factory=ProgressStore)
    static_knowledge: KnowledgeBase = field(default_factory=static_knowledge_base)
    dynamic_knowledge: KnowledgeBase = field(default_factory=dynamic_knowledge_base)
    ingestion_mode: str = "mock"
    ingestor: KnowledgeIngestor = field(init=False, repr=False)

    def __post_init__(self):
        self.ingestor = KnowledgeIngestor(self.dynamic_knowledge, mode=self.ingestion_mode)

    def days_since_last_workout(self, today: date) -> Optional[int]:
        last = self.progress.last_workout_date()
        if last is None:
            return None
        return max((today - last).days, 0)
