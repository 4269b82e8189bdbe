"""
High-Level API: domain model for Strava-backed fitness coaching.

Every function returns plain data the LLM can reason about.
Composes with the low-level SDK internally.

Modules:
    activities  What have you done?      (recent sessions, detail, training load)
    profile     Who are you?             (Strava athlete profile)
    calculator  What should you eat?     (BMR, TDEE, calorie and protein targets)
    progress    How is it going?         (daily weight/workout log)
    coach       What should you do?      (rule-based assessment, daily advice)
    knowledge   What does research say?  (keyword-vector retrieval)
    ingestion   Add your own sources     (websites, files)
"""

# Model
from fitness_genie.api.model import Assessment, ProgressEntry, RecentProgress, UserProfile

# Activities
from fitness_genie.api.activities import (
    get_recent_activities,
    get_activity_detail,
    get_training_load,
    summarize_activity,
    summarize_training_load,
)

# Profile
from fitness_genie.api.profile import get_athlete_profile

# Calculator
from fitness_genie.api.calculator import (
    calculate_bmr,
    calculate_tdee,
    calculate_calorie_target,
    calculate_protein_target,
    create_user_profile,
)

# Progress
from fitness_genie.api.progress import ProgressStore, summarize_progress

# Coach
from fitness_genie.api.coach import assess_progress, get_daily_advice, select_research_query

# Knowledge
from fitness_genie.api.knowledge import (
    DocumentChunk,
    KeywordEmbedder,
    KnowledgeBase,
    Retriever,
    cosine_similarity,
    dynamic_knowledge_base,
    generate_rag_response,
    static_knowledge_base,
)
from fitness_genie.api.ingestion import KnowledgeIngestor

__all__ = [
    # Model
    "Assessment", "ProgressEntry", "RecentProgress", "UserProfile",
    # Activities
    "get_recent_activities", "get_activity_detail", "get_training_load",
    "summarize_activity", "summarize_training_load",
    # Profile
    "get_athlete_profile",
    # Calculator
    "calculate_bmr", "calculate_tdee", "calculate_calorie_target",
    "calculate_protein_target", "create_user_profile",
    # Progress
    "ProgressStore", "summarize_progress",
    # Coach
    "assess_progress", "get_daily_advice", "select_research_query",
    # Knowledge
    "DocumentChunk", "KeywordEmbedder", "KnowledgeBase", "Retriever",
    "cosine_similarity", "dynamic_knowledge_base", "generate_rag_response",
    "static_knowledge_base", "KnowledgeIngestor",
]
