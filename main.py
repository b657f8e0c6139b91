"""
ScholarMatch command-line driver.

    python main.py init-db
    python main.py recommend --student-id <id>
    python main.py rank --scholarship-id <id>
    python main.py serve
"""
import argparse
import logging
import sys

from core.app_context import AppContext
from core.config_loader import load_config
from database.converters import (
    assessment_to_profile,
    assessment_snapshot,
    scholarship_to_criteria,
    application_to_profile,
)
from database.database import make_engine, make_session_factory

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def run_recommend(ctx: AppContext, student_id: str, session_factory=None) -> int:
    """Regenerate and save one student's recommendations."""
    from database.uow import uow

    with uow(session_factory) as repos:
        assessment = repos.assessments.get_by_student(student_id)
        if assessment is None:
            logger.error(f"No assessment found for student {student_id}")
            return 1

        scholarships = repos.scholarships.list_open_with_slots()
        if not scholarships:
            logger.error("No open scholarships with remaining slots")
            return 1

        results = ctx.matching_service.match_student_to_scholarships(
            assessment_to_profile(assessment),
            [scholarship_to_criteria(s) for s in scholarships],
            student_id=student_id
        )
        results.sort(key=lambda r: r.match_score, reverse=True)
        repos.recommendations.replace(student_id, results, assessment_snapshot(assessment))

    for r in results:
        logger.info(f"  {r.match_score:5.1f}  {r.recommendation.value:<18}  [{r.source.value}]  {r.scholarship_name}")
    return 0


def run_rank(ctx: AppContext, scholarship_id: str, session_factory=None) -> int:
    """Rank a scholarship's pending and under-review applications (admin batch, no ownership check)."""
    from database.uow import uow

    with uow(session_factory) as repos:
        scholarship = repos.scholarships.get_by_id(scholarship_id)
        if scholarship is None:
            logger.error(f"Scholarship {scholarship_id} not found")
            return 1

        applications = repos.applications.list_rankable(scholarship_id)
        rankings = ctx.matching_service.rank_applicants_for_scholarship(
            [application_to_profile(a) for a in applications],
            scholarship_to_criteria(scholarship)
        )
        repos.applications.apply_rankings(applications, rankings)

    for r in rankings:
        logger.info(f"  #{r.rank:<3} {r.rank_score:5.1f}  {r.recommendation:<25}  [{r.source.value}]  {r.student_name}")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="ScholarMatch Main Driver")
    subparsers = parser.add_subparsers(dest='command', required=True)

    subparsers.add_parser('init-db', help='Create missing database tables')

    recommend = subparsers.add_parser('recommend', help="Regenerate a student's recommendations")
    recommend.add_argument('--student-id', required=True)

    rank = subparsers.add_parser('rank', help="Rank a scholarship's applicants")
    rank.add_argument('--scholarship-id', required=True)

    subparsers.add_parser('serve', help='Run the web API')

    args = parser.parse_args(argv)

    if args.command == 'serve':
        from web.backend.app import main as serve
        serve()
        return 0

    config = load_config()
    # Same database as the web API: config.yaml, overridden by DATABASE_URL
    engine = make_engine(config.database.url)

    if args.command == 'init-db':
        from database.init_db import init_db
        init_db(engine)
        return 0

    session_factory = make_session_factory(engine)
    ctx = AppContext.build(config)
    if not ctx.ai_service.is_configured:
        logger.info("OPENAI_API_KEY not set; using rule-based scoring")

    if args.command == 'recommend':
        return run_recommend(ctx, args.student_id, session_factory)
    return run_rank(ctx, args.scholarship_id, session_factory)


if __name__ == "__main__":
    sys.exit(main())
