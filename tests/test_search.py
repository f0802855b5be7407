"""
Tests for search expansion/ranking, medical insights, and content reports.
"""

import pytest

from medpulse.analysis.search import expand_query, rank_results, compute_ai_relevance
from medpulse.analysis.insights import generate_medical_insights, KNOWLEDGE_BASE
from medpulse.analysis.content import build_content_report, SIMPLIFY_SUGGESTION
from medpulse.models.post import SearchResult

from tests.test_config import TEST_DATA, MESSAGES


@pytest.fixture
def candidates():
    """Search candidates with baseline relevance."""
    return [SearchResult.from_dict(row) for row in TEST_DATA["search_candidates"]]


# =============================================================================
# Test Query Expansion
# =============================================================================

class TestExpandQuery:
    """Tests for expand_query."""

    def test_heart_pain(self):
        expanded = expand_query("heart pain")
        assert expanded == "heart pain cardiac cardiovascular coronary discomfort ache soreness"

    def test_table_order_not_query_order(self):
        assert expand_query("pain in the heart") == (
            "pain in the heart cardiac cardiovascular coronary discomfort ache soreness"
        )

    def test_case_insensitive_match_keeps_original_query(self):
        assert expand_query("Brain fog") == "Brain fog cerebral neurological cranial"

    def test_substring_match(self):
        assert expand_query("lungs").endswith("pulmonary respiratory bronchial")

    def test_no_synonyms(self):
        assert expand_query("diabetes") == "diabetes"


# =============================================================================
# Test Ranking
# =============================================================================

class TestRankResults:
    """Tests for rank_results and compute_ai_relevance."""

    def test_medical_matches_boost_score(self, candidates):
        ranked = rank_results(candidates, "chronic pain treatment", ["chronic", "treatment"])

        assert [r.id for r in ranked] == ["r2", "r1", "r3"]
        assert ranked[0].ai_relevance_score == pytest.approx(0.7)

    def test_no_terms_keeps_baseline(self, candidates):
        ranked = rank_results(candidates, "exercise", [])
        assert [r.id for r in ranked] == ["r1", "r3", "r2"]
        assert [r.ai_relevance_score for r in ranked] == [0.5, 0.4, 0.3]

    def test_score_capped_at_one(self):
        result = SearchResult(id="x", title="therapy therapy", relevance_score=0.9)
        assert compute_ai_relevance(result, ["therapy", "therapy"]) == 1.0

    def test_baseline_capped_even_without_terms(self):
        result = SearchResult(id="x", relevance_score=1.4)
        assert compute_ai_relevance(result, []) == 1.0

    def test_equal_scores_keep_incoming_order(self):
        results = [SearchResult(id=str(i), relevance_score=0.5) for i in range(5)]
        ranked = rank_results(results, "q")
        assert [r.id for r in ranked] == ["0", "1", "2", "3", "4"]

    def test_inputs_not_mutated(self, candidates):
        rank_results(candidates, "chronic", ["chronic"])
        assert all(c.ai_relevance_score is None for c in candidates)

    def test_empty_results(self):
        assert rank_results([], "anything", ["therapy"]) == []


# =============================================================================
# Test Medical Insights
# =============================================================================

class TestMedicalInsights:
    """Tests for generate_medical_insights."""

    def test_chest_pain(self):
        insights = generate_medical_insights("Patient reports chest pain")
        assert [i.condition for i in insights] == ["Acute Coronary Syndrome"]
        assert insights[0].evidence_level == "high"

    def test_multiple_matches_in_knowledge_base_order(self):
        insights = generate_medical_insights("Migraine with dyspnea")
        assert [i.condition for i in insights] == [
            "Respiratory Distress",
            "Primary Headache Disorders",
        ]

    def test_case_insensitive(self):
        assert len(generate_medical_insights("HEADACHE")) == 1

    def test_no_match(self):
        assert generate_medical_insights("sprained ankle") == []
        assert generate_medical_insights("") == []

    def test_entries_are_immutable(self):
        insight = KNOWLEDGE_BASE[0][1]
        with pytest.raises(AttributeError):
            insight.confidence = 1.0

    def test_to_dict_lists(self):
        data = generate_medical_insights("cardiac")[0].to_dict()
        assert isinstance(data["treatments"], list)
        assert "Aspirin" in data["treatments"]


# =============================================================================
# Test Content Report
# =============================================================================

class TestContentReport:
    """Tests for build_content_report."""

    def test_dense_jargon_gets_suggestion(self):
        text = "Chronic inflammatory pathology necessitates multidisciplinary therapeutic intervention."
        report = build_content_report(text)

        assert report.medical_terms_count == 3
        assert report.readability < 50
        assert report.suggestion == SIMPLIFY_SUGGESTION
        assert MESSAGES["simplify_suggestion"] in report.suggestion

    def test_plain_text_has_no_suggestion(self):
        report = build_content_report("The cat sat on the mat.")

        assert report.suggestion is None
        assert report.readability_level == "Very Easy"
        assert report.word_count == 6
        assert report.sentence_count == 1

    def test_hard_text_without_medical_terms_has_no_suggestion(self):
        report = build_content_report(
            "Incomprehensibility characterizes institutionalized bureaucratization."
        )
        assert report.medical_terms_count == 0
        assert report.suggestion is None

    def test_empty_text(self):
        report = build_content_report("")
        assert report.word_count == 0
        assert report.readability == 0.0
        assert report.sentiment.label == "neutral"

    def test_to_dict_nests_sentiment(self):
        data = build_content_report("Excellent therapy.").to_dict()
        assert data["sentiment"]["label"] == "positive"
