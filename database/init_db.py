import logging
from sqlalchemy import text
from tenacity import retry, stop_after_attempt, wait_fixed
from database.database import engine as default_engine
from database.models import Base

logger = logging.getLogger(__name__)


@retry(stop=stop_after_attempt(5), wait=wait_fixed(2))
def init_db(engine=None):
    """Create missing tables, retrying while the database container starts up.

    Uses the DATABASE_URL engine unless one is given.
    """
    engine = engine or default_engine
    logger.info("Initializing database...")
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))

        Base.metadata.create_all(bind=engine)
        logger.info(f"Tables created or verified: {', '.join(sorted(Base.metadata.tables))}")

    except Exception as e:
        logger.error(f"Error initializing DB: {e}")
        raise


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
