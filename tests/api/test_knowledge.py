"""Tests for api/knowledge.py: Keyword vectors, ranking and RAG text."""

import pytest

from fitness_genie.api.knowledge import (
    KeywordEmbedder,
    KnowledgeBase,
    cosine_similarity,
    dynamic_knowledge_base,
    generate_rag_response,
    static_knowledge_base,
)


class TestKeywordEmbedder:
    def test_bucket_positions(self):
        embed = KeywordEmbedder([["weight", "loss"], ["protein"]], dimension=20, stride=10)
        vector = embed("Protein helps WEIGHT management")

        assert len(vector) == 20
        assert vector[0] == 1.0   # weight
        assert vector[1] == 0.0   # loss
        assert vector[10] == 1.0  # protein
        assert sum(vector) == 2.0

    def test_substring_match(self):
        embed = KeywordEmbedder([["plateau"]], dimension=10)
        assert embed("plateaus happen")[0] == 1.0

    def test_rejects_overfull_bucket(self):
        with pytest.raises(ValueError):
            KeywordEmbedder([["k"] * 11], dimension=50, stride=10)


class TestCosineSimilarity:
    def test_identical(self):
        assert cosine_similarity([1, 0, 1], [1, 0, 1]) == pytest.approx(1.0)

    def test_orthogonal(self):
        assert cosine_similarity([1, 0], [0, 1]) == 0.0

    def test_zero_vector(self):
        assert cosine_similarity([0, 0], [1, 1]) == 0.0


@pytest.fixture
def small_kb():
    kb = KnowledgeBase(KeywordEmbedder([["a", "b", "c"]], dimension=10), default_top_k=2)
    kb.add_document("a b", "one", "src_one", doc_id="ab")
    kb.add_document("a", "two", "src_two", doc_id="a1")
    kb.add_document("a", "two", "src_three", doc_id="a2")
    kb.add_document("c", "three", "src_three", doc_id="c")
    return kb


class TestKnowledgeBase:
    def test_empty_search(self):
        assert dynamic_knowledge_base().search("anything") == []

    def test_ranks_descending_and_truncates(self, small_kb):
        results = small_kb.search("a")

        assert [d.id for d in results] == ["a1", "a2"]
        assert results[0].relevance_score == pytest.approx(1.0)

    def test_ties_keep_insertion_order(self, small_kb):
        results = small_kb.search("a", top_k=4)

        assert [d.id for d in results] == ["a1", "a2", "ab", "c"]
        scores = [d.relevance_score for d in results]
        assert scores == sorted(scores, reverse=True)
        assert scores[-1] == 0.0

    def test_search_does_not_mutate_documents(self, small_kb):
        small_kb.search("a")
        assert all(d.relevance_score == 0.0 for d in small_kb.documents)

    def test_generated_ids(self):
        kb = dynamic_knowledge_base()
        doc = kb.add_document("fitness", "fitness", "manual")
        assert doc.id == "doc_1"

    def test_stats(self, small_kb):
        stats = small_kb.stats()

        assert stats["total_documents"] == 4
        assert stats["categories"] == ["one", "two", "three"]
        assert stats["sources"] == ["src_one", "src_two", "src_three"]
        assert stats["most_recently_added"] == "src_three"
        assert stats["embedding_dimension"] == 10

    def test_stats_empty(self):
        stats = dynamic_knowledge_base().stats()

        assert stats["total_documents"] == 0
        assert stats["most_recently_added"] == "none"


class TestStaticKnowledgeBase:
    def test_preloaded(self):
        kb = static_knowledge_base()

        assert len(kb) == 6
        assert [d.id for d in kb.documents] == [
            "plateau_1", "plateau_2", "protein_1", "cardio_1", "sleep_1", "habits_1",
        ]
        assert kb.stats()["embedding_dimension"] == 50

    def test_plateau_query(self):
        results = static_knowledge_base().search("weight loss plateau")

        assert len(results) == 3
        assert results[0].id == "plateau_1"


class TestGenerateRagResponse:
    def test_composes_sections(self):
        text = generate_rag_response(
            static_knowledge_base(), "weight loss plateau", "lose_weight", "plateau_test",
        )

        assert text.startswith("**RAG-Enhanced Response** (")
        assert "**Your Situation:** goal lose weight, plateau_test" in text
        assert "**Weight Loss Science:**" in text
        assert "**Retrieved Sources:** metabolic_research" in text
        assert "**Semantic Match Quality:**" in text

    def test_empty_knowledge_base(self):
        text = generate_rag_response(dynamic_knowledge_base(), "anything", "get_fit", "x")
        assert "No matching research found." in text
