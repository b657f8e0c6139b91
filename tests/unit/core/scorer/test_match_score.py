"""
Unit tests for the rule-based student x scholarship fit score.
"""
import pytest

from core.matcher.models import StudentProfile, ScholarshipCriteria, Recommendation
from core.scorer.match_score import score_match, recommendation_for, contains_either_way


def make_student(**overrides):
    data = {
        "student_id": "stu-1",
        "full_name": "Maria Santos",
        "course": "Computer Science",
        "year_level": "3rd Year",
        "gpa": "3.8",
        "income_range": "Below ₱10,000",
        "scholarship_type": "",
    }
    data.update(overrides)
    return StudentProfile(**data)


def make_scholarship(**overrides):
    data = {
        "id": "sch-1",
        "name": "STEM Excellence Grant",
        "scholarship_type": "Merit-based",
        "min_gpa": 3.0,
        "eligible_courses": ["Computer Science", "IT"],
        "eligible_year_levels": [],
        "slots_total": 5,
    }
    data.update(overrides)
    return ScholarshipCriteria(**data)


class TestScoreMatch:

    def test_01_strong_student_is_highly_recommended(self):
        """GPA and course both met, no year restriction."""
        scored = score_match(make_student(), make_scholarship())

        # 50 + 15 (GPA) + 15 (course) + 5 (no year restriction)
        assert scored.score == 85
        assert scored.details.gpa_match is True
        assert scored.details.course_match is True
        assert scored.eligible is True
        assert recommendation_for(scored.score) == Recommendation.HIGHLY_RECOMMENDED

    def test_02_low_gpa_no_course_restriction(self):
        student = make_student(gpa=2.0)
        scholarship = make_scholarship(min_gpa=3.5, eligible_courses=[], eligible_year_levels=["3rd Year"])

        scored = score_match(student, scholarship)

        # 50 - 20 + 10 (open course) + 10 (year listed)
        assert scored.score == 50
        assert scored.details.gpa_match is False
        assert scored.eligible is False

    def test_03_score_of_exactly_40_is_consider(self):
        student = make_student(course="Nursing", year_level="1st Year")
        scholarship = make_scholarship(eligible_year_levels=["4th Year"])

        scored = score_match(student, scholarship)

        # 50 + 15 (GPA) - 15 (course) - 10 (year)
        assert scored.score == 40
        assert recommendation_for(scored.score) == Recommendation.CONSIDER
        assert recommendation_for(39.9) == Recommendation.NOT_RECOMMENDED

    def test_03b_lowest_reachable_score(self):
        student = make_student(gpa=2.0, course="Nursing", year_level="1st Year")
        scholarship = make_scholarship(min_gpa=3.5, eligible_year_levels=["4th Year"])

        scored = score_match(student, scholarship)

        # 50 - 20 - 15 - 10
        assert scored.score == 5
        assert recommendation_for(scored.score) == Recommendation.NOT_RECOMMENDED

    def test_04_open_course_and_open_year_bonuses(self):
        student = make_student(gpa=2.0)
        scholarship = make_scholarship(min_gpa=3.5, eligible_courses=[], eligible_year_levels=[])

        scored = score_match(student, scholarship)

        # 50 - 20 + 10 + 5
        assert scored.score == 45
        assert scored.details.course_match is True
        assert scored.details.year_level_match is True

    def test_05_course_mismatch_makes_ineligible(self):
        scored = score_match(make_student(course="Nursing"), make_scholarship())

        assert scored.details.course_match is False
        assert scored.eligible is False
        # 50 + 15 - 15 + 5
        assert scored.score == 55

    def test_06_year_mismatch_lowers_score_but_keeps_eligibility(self):
        scholarship = make_scholarship(eligible_year_levels=["1st Year", "2nd Year"])

        scored = score_match(make_student(), scholarship)

        assert scored.details.year_level_match is False
        assert scored.eligible is True
        # 50 + 15 + 15 - 10
        assert scored.score == 70

    def test_07_preference_bonus_only_for_exact_type(self):
        matching = score_match(make_student(scholarship_type="Merit-based"), make_scholarship())
        other = score_match(make_student(scholarship_type="Need-based"), make_scholarship())

        assert other.score == 85
        assert matching.score == 95

    def test_08_empty_preference_never_gets_bonus(self):
        scholarship = make_scholarship(scholarship_type="")
        scored = score_match(make_student(scholarship_type=""), scholarship)

        assert scored.score == 85  # 50 + 15 + 15 + 5

    def test_09_best_case_stays_within_bounds(self):
        scholarship = make_scholarship(eligible_courses=[], eligible_year_levels=["3rd Year"])
        scored = score_match(make_student(scholarship_type="Merit-based"), scholarship)

        # 50 + 15 + 10 + 10 + 10
        assert scored.score == 95
        assert 0 <= scored.score <= 100

    def test_10_unparseable_gpa_counts_as_zero(self):
        scored = score_match(make_student(gpa="N/A"), make_scholarship())

        assert scored.details.gpa_match is False


class TestContainsEitherWay:

    @pytest.mark.parametrize("value, allowed, expected", [
        ("Computer Science", ["Computer Science", "IT"], True),
        ("BS Computer Science", ["computer science"], True),
        ("IT", ["Information Technology (IT)"], True),
        ("Nursing", ["Computer Science", "IT"], False),
    ])
    def test_substring_match_either_direction(self, value, allowed, expected):
        assert contains_either_way(value, allowed) is expected
