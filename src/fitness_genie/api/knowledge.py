"""
Keyword-vector knowledge retrieval.

This is a stand-in for a real embedding search: a document's "embedding"
marks which of a few hardcoded keywords appear in its text, and documents
are ranked by cosine similarity to the query's vector. Anything that
implements Retriever (embed + search) can replace KnowledgeBase without
touching the coaching tools.
"""

import itertools
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Sequence


EMBEDDING_DIMENSION = 50
BUCKET_STRIDE = 10

STATIC_TOP_K = 3
DYNAMIC_TOP_K = 5

# Keyword buckets for the built-in research documents, one per 10-wide segment
STATIC_KEYWORD_BUCKETS = [
    ["weight", "loss", "plateau", "deficit", "metabolism"],
    ["protein", "muscle", "amino", "leucine", "synthesis"],
    ["exercise", "cardio", "zone", "heart", "rate", "training"],
    ["sleep", "recovery", "hormone", "leptin", "ghrelin"],
]

# Single flat keyword set for user-added sources
DYNAMIC_KEYWORDS = ["fitness", "exercise", "weight", "muscle", "cardio", "nutrition", "protein"]


@dataclass
class DocumentChunk:
    """A piece of indexed text with its feature vector."""
    id: str
    content: str
    category: str
    source: str
    relevance_score: Optional[float] = None
    embedding: List[float] = field(default_factory=list, repr=False)


class Retriever(ABC):
    """Embedding + similarity search interface."""

    @abstractmethod
    def embed(self, text: str) -> List[float]:
        """Feature vector for a piece of text."""

    @abstractmethod
    def search(self, query: str, top_k: Optional[int] = None) -> List[DocumentChunk]:
        """Documents most similar to the query, best first."""


class KeywordEmbedder:
    """
    Keyword-presence vectors.

    Position bucket*stride + i is 1.0 when any whitespace token of the
    lower-cased text contains keyword i of that bucket.
    """

    def __init__(
        self,
        buckets: Sequence[Sequence[str]],
        dimension: int = EMBEDDING_DIMENSION,
        stride: int = BUCKET_STRIDE,
    ):
        if any(len(b) > stride for b in buckets):
            raise ValueError(f"Keyword buckets may hold at most {stride} keywords")
        if len(buckets) * stride > dimension:
            raise ValueError(f"{len(buckets)} buckets do not fit in {dimension} dimensions")
        self.buckets = [list(b) for b in buckets]
        self.dimension = dimension
        self.stride = stride

    def __call__(self, text: str) -> List[float]:
        words = text.lower().split()
        vector = [0.0] * self.dimension
        for b, keywords in enumerate(self.buckets):
            for i, keyword in enumerate(keywords):
                if any(keyword in word for word in words):
                    vector[b * self.stride + i] = 1.0
        return vector


def cosine_similarity(vec1: Sequence[float], vec2: Sequence[float]) -> float:
    """Cosine of the angle between two vectors, 0 if either is all zeros."""
    dot = sum(a * b for a, b in zip(vec1, vec2))
    mag1 = math.sqrt(sum(a * a for a in vec1))
    mag2 = math.sqrt(sum(b * b for b in vec2))
    if mag1 == 0 or mag2 == 0:
        return 0.0
    return dot / (mag1 * mag2)


class KnowledgeBase(Retriever):
    """In-memory document list searched by cosine similarity."""

    def __init__(
        self,
        embedder: KeywordEmbedder,
        default_top_k: int = STATIC_TOP_K,
        id_prefix: str = "doc",
    ):
        self._embedder = embedder
        self._documents: List[DocumentChunk] = []
        self._ids = itertools.count(1)
        self._id_prefix = id_prefix
        self.default_top_k = default_top_k

    def __len__(self) -> int:
        return len(self._documents)

    @property
    def documents(self) -> List[DocumentChunk]:
        return list(self._documents)

    def embed(self, text: str) -> List[float]:
        return self._embedder(text)

    def add_document(
        self,
        content: str,
        category: str,
        source: str,
        doc_id: Optional[str] = None,
    ) -> DocumentChunk:
        """Index a document and return the stored chunk."""
        doc = DocumentChunk(
            id=doc_id or f"{self._id_prefix}_{next(self._ids)}",
            content=content,
            category=category,
            source=source,
            relevance_score=0.0,
            embedding=self.embed(content),
        )
        self._documents.append(doc)
        return doc

    def search(self, query: str, top_k: Optional[int] = None) -> List[DocumentChunk]:
        """
        Rank all documents against the query.

        Returns copies carrying relevance_score; ties keep insertion order.
        """
        if not self._documents:
            return []

        top_k = self.default_top_k if top_k is None else top_k
        query_vector = self.embed(query)

        scored = [
            replace(doc, relevance_score=cosine_similarity(query_vector, doc.embedding))
            for doc in self._documents
        ]
        scored.sort(key=lambda d: d.relevance_score, reverse=True)
        return scored[:top_k]

    def stats(self) -> Dict[str, object]:
        sources = _unique(d.source for d in self._documents)
        return {
            "total_documents": len(self._documents),
            "categories": _unique(d.category for d in self._documents),
            "sources": sources,
            "most_recently_added": sources[-1] if sources else "none",
            "embedding_dimension": self._embedder.dimension,
        }


def _unique(values) -> List[str]:
    return list(dict.fromkeys(values))


# ── Built-in research documents ──────────────────────────────────────

FITNESS_DOCUMENTS = [
    {
        "id": "plateau_1",
        "category": "weight_loss",
        "source": "metabolic_research",
        "content": (
            "Weight loss plateaus occur when your metabolism adapts to sustained calorie "
            "restriction. The body reduces NEAT (non-exercise activity thermogenesis) by up "
            "to 15% and increases hunger hormones like ghrelin while decreasing leptin "
            "sensitivity."
        ),
    },
    {
        "id": "plateau_2",
        "category": "weight_loss",
        "source": "hormone_research",
        "content": (
            "Research shows that strategic refeed days can restore leptin levels and thyroid "
            "function. A 2-day period eating at maintenance calories can reset metabolic "
            "hormones and break through plateaus in 70% of cases."
        ),
    },
    {
        "id": "protein_1",
        "category": "nutrition",
        "source": "protein_research",
        "content": (
            "Protein requirements for weight loss are higher than for maintenance. Studies "
            "indicate 1.2-1.6g per lb of body weight preserves muscle mass during calorie "
            "restriction. Protein also has the highest thermic effect, burning 20-30% of "
            "calories consumed."
        ),
    },
    {
        "id": "cardio_1",
        "category": "exercise",
        "source": "cardio_research",
        "content": (
            "The fat-burning zone (Zone 2, 60-70% max HR) burns 85% fat vs 15% carbs, but "
            "higher intensity intervals burn more total calories. Optimal fat loss combines "
            "80% Zone 2 work with 20% high-intensity intervals."
        ),
    },
    {
        "id": "sleep_1",
        "category": "recovery",
        "source": "sleep_research",
        "content": (
            "Sleep deprivation increases ghrelin by 15% and decreases leptin by 18%, leading "
            "to increased appetite and cravings. People sleeping 5.5 hours lose 55% less fat "
            "than those sleeping 8.5 hours despite identical calorie intake."
        ),
    },
    {
        "id": "habits_1",
        "category": "psychology",
        "source": "behavioral_research",
        "content": (
            "Habit formation takes an average of 66 days, with a range of 18-254 days "
            "depending on complexity. The key is consistency over intensity - performing a "
            "behavior 90% of the time is more effective than 100% intensity 50% of the time."
        ),
    },
]


def static_knowledge_base() -> KnowledgeBase:
    """Knowledge base preloaded with the built-in research documents."""
    kb = KnowledgeBase(KeywordEmbedder(STATIC_KEYWORD_BUCKETS), default_top_k=STATIC_TOP_K)
    for doc in FITNESS_DOCUMENTS:
        kb.add_document(doc["content"], doc["category"], doc["source"], doc_id=doc["id"])
    return kb


def dynamic_knowledge_base() -> KnowledgeBase:
    """Empty knowledge base for user-added websites and files."""
    return KnowledgeBase(KeywordEmbedder([DYNAMIC_KEYWORDS]), default_top_k=DYNAMIC_TOP_K)


# ── Retrieval-augmented advice ───────────────────────────────────────

_SECTION_TITLES = [
    ("weight_loss", "Weight Loss Science"),
    ("nutrition", "Nutrition Research"),
    ("exercise", "Exercise Science"),
]


def generate_rag_response(
    retriever: Retriever,
    query: str,
    goal: str,
    situation: str,
    top_k: int = STATIC_TOP_K,
) -> str:
    """
    Retrieve the best documents for a query and compose advice from them.

    There is no language model behind this: the response stitches the
    retrieved passages together by category.
    """
    docs = retriever.search(query, top_k)
    if not docs:
        return "**RAG-Enhanced Response** (0.0% relevance)\n\nNo matching research found."

    avg_relevance = sum(d.relevance_score or 0 for d in docs) / len(docs)

    lines = [f"**RAG-Enhanced Response** ({avg_relevance * 100:.1f}% relevance)", ""]
    lines.append(f"**Your Situation:** goal {goal.replace('_', ' ')}, {situation}")
    lines.append("")

    for category, title in _SECTION_TITLES:
        doc = next((d for d in docs if d.category == category), None)
        if doc:
            lines.append(f"**{title}:**")
            lines.append(doc.content)
            lines.append("")

    lines.append(f"**Retrieved Sources:** {', '.join(d.source for d in docs)}")
    lines.append(f"**Semantic Match Quality:** {avg_relevance * 100:.1f}%")
    return "\n".join(lines)
