"""
Script to create the tables, the default folder and the sample exercises.
Sample exercises are only added to an empty exercise table.
"""
import sys
import logging
from pathlib import Path

# Add the api directory to Python path so we can import from app
script_dir = Path(__file__).parent
api_dir = script_dir.parent
sys.path.insert(0, str(api_dir))

from sqlmodel import Session, SQLModel
from app.core.database import engine
from app.models import models  # noqa: F401
from app.services.folder_service import ensure_default_folder
from app.services.exercise_service import seed_sample_exercises

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def seed():
    """Create tables and seed the built-in rows."""
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        ensure_default_folder(session)
        seeded = seed_sample_exercises(session)
        logger.info(f"Seeded {seeded} sample exercise(s)")


if __name__ == "__main__":
    logger.info("Starting seeding...")
    try:
        seed()
        logger.info("Successfully completed!")
    except Exception as e:
        logger.error("Error during seeding: %s", e, exc_info=True)
        sys.exit(1)
