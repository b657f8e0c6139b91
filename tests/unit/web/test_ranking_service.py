#!/usr/bin/env python3
"""
Unit tests for RankingService.
"""

import unittest
from unittest.mock import MagicMock

from core.matcher.models import ResultSource
from core.matcher.service import MatchingService
from database.models import ApplicationStatus
from database.repositories.application import ApplicationRepository
from tests.fixtures.scholarship_fixtures import make_scholarship, make_application
from web.backend.exceptions import ScholarshipNotFoundException, NotScholarshipOwnerException
from web.backend.services.ranking_service import RankingService


class TestRankingService(unittest.TestCase):

    def setUp(self):
        self.db = MagicMock()
        self.service = RankingService(self.db, MatchingService(llm=None))
        self.service.scholarships = MagicMock()
        self.scholarship = make_scholarship("sch-1", sponsor_id="sponsor-1")
        self.service.scholarships.get_by_id.return_value = self.scholarship

        self.applications = [
            make_application("a", gpa="3.1"),
            make_application("b", gpa="3.9", status=ApplicationStatus.UNDER_REVIEW),
            make_application("c", gpa="2.5"),
        ]
        self.service.applications = ApplicationRepository(self.db)
        self.service.applications.list_rankable = MagicMock(return_value=self.applications)

    def test_unknown_scholarship(self):
        self.service.scholarships.get_by_id.return_value = None

        with self.assertRaises(ScholarshipNotFoundException):
            self.service.rank_applicants("missing", "sponsor-1")

    def test_other_sponsor_is_rejected(self):
        with self.assertRaises(NotScholarshipOwnerException):
            self.service.rank_applicants("sch-1", "sponsor-2")
        self.service.applications.list_rankable.assert_not_called()

    def test_rankings_are_written_back(self):
        rankings = self.service.rank_applicants("sch-1", "sponsor-1")

        self.assertEqual([r.application_id for r in rankings], ["b", "a", "c"])
        self.assertEqual([r.rank for r in rankings], [1, 2, 3])
        self.assertTrue(all(r.source == ResultSource.FALLBACK for r in rankings))

        by_id = {a.id: a for a in self.applications}
        self.assertEqual(by_id["b"].rank, 1)
        self.assertEqual(by_id["c"].rank, 3)
        self.assertEqual(by_id["c"].weaknesses, ["GPA below requirement"])
        self.assertEqual(by_id["a"].score_breakdown["skills_score"], 50)
        self.assertEqual(by_id["a"].ranking_source, "fallback")
        self.assertIsNotNone(by_id["a"].ranked_at)
        self.assertTrue(all(a.status == ApplicationStatus.UNDER_REVIEW for a in self.applications))

    def test_no_applications(self):
        self.service.applications.list_rankable.return_value = []

        self.assertEqual(self.service.rank_applicants("sch-1", "sponsor-1"), [])


if __name__ == '__main__':
    unittest.main()
