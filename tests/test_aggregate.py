"""
Tests for score aggregation and grading.
"""

import pytest

from scoring import build_match_result, full_score, grade, restricted_score
from scoring.aggregate import MatchResult
from shared.models import MatchAnalysis, ScoreBreakdown


class TestFormulas:
    """Test the full and restricted weighted sums."""

    def test_full_score(self):
        breakdown = ScoreBreakdown(
            technical_skills_score=80,
            soft_skills_score=10,
            experience_score=70,
            education_score=60,
            hidden_criteria_score=90,
        )
        # 32 + 14 + 6 + 27
        assert full_score(breakdown) == 79

    def test_restricted_score(self):
        breakdown = ScoreBreakdown(
            technical_skills_score=80,
            experience_score=70,
            education_score=60,
            hidden_criteria_score=0,
        )
        # 48 + 21 + 6
        assert restricted_score(breakdown) == 75

    def test_soft_skills_carry_no_weight(self):
        low = ScoreBreakdown(technical_skills_score=50, soft_skills_score=0)
        high = ScoreBreakdown(technical_skills_score=50, soft_skills_score=100)

        assert full_score(low) == full_score(high)
        assert restricted_score(low) == restricted_score(high)

    def test_hidden_criteria_only_affect_full_score(self):
        without = ScoreBreakdown(technical_skills_score=60, hidden_criteria_score=0)
        with_hidden = ScoreBreakdown(technical_skills_score=60, hidden_criteria_score=100)

        assert full_score(with_hidden) == full_score(without) + 30
        assert restricted_score(with_hidden) == restricted_score(without)

    def test_half_rounds_up(self):
        # 0.1 * 45 = 4.5
        assert full_score(ScoreBreakdown(education_score=45)) == 5

    def test_bounds(self):
        top = ScoreBreakdown(
            technical_skills_score=100,
            soft_skills_score=100,
            experience_score=100,
            education_score=100,
            hidden_criteria_score=100,
        )
        assert full_score(top) == 100
        assert restricted_score(top) == 100
        assert full_score(ScoreBreakdown()) == 0


class TestGrade:
    @pytest.mark.parametrize(
        "score,expected",
        [
            (100, "Excellent"),
            (80, "Excellent"),
            (79, "Good"),
            (65, "Good"),
            (64, "Fair"),
            (50, "Fair"),
            (49, "Poor"),
            (0, "Poor"),
        ],
    )
    def test_boundaries(self, score, expected):
        assert grade(score) == expected


class TestMatchResult:
    """Test that aggregates are always derived from the breakdown."""

    def test_scores_follow_breakdown(self, make_result):
        result = make_result(technical=100, experience=100, education=100, hidden=100)

        assert result.overall_score == 100
        assert result.public_score == 100
        assert result.match_grade == "Excellent"

        result.scoring_breakdown.hidden_criteria_score = 0

        assert result.overall_score == 70
        assert result.match_grade == "Good"

    def test_stored_aggregates_are_recomputed(self, make_result):
        document = make_result(technical=50).to_document()
        document["overall_score"] = 99
        document["public_score"] = 99
        document["match_grade"] = "Excellent"

        reloaded = MatchResult(**document)

        assert reloaded.overall_score == 20
        assert reloaded.public_score == 30
        assert reloaded.match_grade == "Poor"

    def test_document_contains_scores(self, make_result):
        document = make_result(technical=100).to_document()

        assert document["overall_score"] == 40
        assert document["public_score"] == 60
        assert document["match_grade"] == "Poor"
        assert "analyzed_at" in document

    def test_build_is_idempotent(self):
        analysis = MatchAnalysis(
            candidate_id="c",
            job_id="j",
            scoring_breakdown=ScoreBreakdown(technical_skills_score=90, experience_score=80),
        )

        first = build_match_result(analysis)
        second = build_match_result(first)

        assert first.overall_score == second.overall_score == 52
        assert first.public_score == second.public_score == 78
