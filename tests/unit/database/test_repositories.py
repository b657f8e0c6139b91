"""
Unit tests for repositories against a mocked Session.
"""
from unittest.mock import MagicMock

import pytest

from core.matcher.models import (
    MatchResult, RankResult, ScoreBreakdown, Recommendation, ResultSource
)
from database.models import (
    Application, ApplicationStatus, RecommendationSnapshot, StudentAssessment
)
from database.repositories import (
    ApplicationRepository, AssessmentRepository, RecommendationRepository
)
from tests.fixtures.scholarship_fixtures import make_application


@pytest.fixture
def db():
    return MagicMock()


class TestAssessmentRepository:

    def test_01_upsert_creates_new_assessment(self, db):
        db.get.return_value = None
        repo = AssessmentRepository(db)

        assessment = repo.upsert("stu-1", {"full_name": "Maria", "gpa": "3.5", "unknown": "ignored"})

        assert isinstance(assessment, StudentAssessment)
        assert assessment.student_id == "stu-1"
        assert assessment.gpa == "3.5"
        assert not hasattr(assessment, "unknown")
        db.add.assert_called_once_with(assessment)
        db.flush.assert_called_once()

    def test_02_upsert_overwrites_existing(self, db):
        existing = StudentAssessment(student_id="stu-1", full_name="Old", gpa="2.0")
        db.get.return_value = existing
        repo = AssessmentRepository(db)

        assessment = repo.upsert("stu-1", {"gpa": "3.9"})

        assert assessment is existing
        assert existing.gpa == "3.9"
        assert existing.full_name == "Old"
        db.add.assert_not_called()


class TestApplicationRepository:

    def _rank(self, application_id, score, rank):
        return RankResult(
            application_id=application_id,
            student_name="X",
            rank_score=score,
            rank=rank,
            eligible=True,
            score_breakdown=ScoreBreakdown(academic_score=80, overall_fit_score=score),
            strengths=["High GPA"],
            weaknesses=[],
            recommendation="Recommended for Approval",
            source=ResultSource.AI,
        )

    def test_01_apply_rankings_writes_results(self, db):
        apps = [make_application("a"), make_application("b")]
        repo = ApplicationRepository(db)

        count = repo.apply_rankings(apps, [self._rank("b", 90, 1), self._rank("a", 70, 2)])

        assert count == 2
        assert apps[1].rank == 1
        assert apps[1].rank_score == 90
        assert apps[0].rank == 2
        assert apps[0].strengths == ["High GPA"]
        assert apps[0].score_breakdown["academic_score"] == 80
        assert apps[0].ranking_source == "ai"
        assert all(a.status == ApplicationStatus.UNDER_REVIEW for a in apps)

    def test_02_unknown_application_is_skipped(self, db):
        apps = [make_application("a")]
        repo = ApplicationRepository(db)

        count = repo.apply_rankings(apps, [self._rank("a", 70, 1), self._rank("zzz", 60, 2)])

        assert count == 1


class TestRecommendationRepository:

    def _result(self, scholarship_id):
        return MatchResult(
            scholarship_id=scholarship_id,
            match_score=75,
            eligible=True,
            recommendation=Recommendation.RECOMMENDED,
            source=ResultSource.FALLBACK,
        )

    def test_01_replace_creates_snapshot(self, db):
        db.get.return_value = None
        repo = RecommendationRepository(db)

        snapshot = repo.replace("stu-1", [self._result("a")], {"gpa": "3.5"})

        assert isinstance(snapshot, RecommendationSnapshot)
        assert snapshot.recommendations[0]["scholarship_id"] == "a"
        assert snapshot.recommendations[0]["recommendation"] == "Recommended"
        assert snapshot.recommendations[0]["source"] == "fallback"
        assert snapshot.assessment_snapshot == {"gpa": "3.5"}
        assert snapshot.generated_at is not None
        db.add.assert_called_once_with(snapshot)

    def test_02_replace_overwrites_not_merges(self, db):
        existing = RecommendationSnapshot(student_id="stu-1", recommendations=[{"scholarship_id": "old"}])
        db.get.return_value = existing
        repo = RecommendationRepository(db)

        repo.replace("stu-1", [self._result("new")])

        assert [r["scholarship_id"] for r in existing.recommendations] == ["new"]
        db.add.assert_not_called()
