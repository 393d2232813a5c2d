"""
Script to import exercises from a JSON file, or export them to one.

Usage:
    python init/1_import_exercises.py import exercises.json
    python init/1_import_exercises.py export exercises.json

Importing resets solved progress, exactly like an import through the API.
"""
import sys
import json
import logging
from pathlib import Path

# Add the api directory to Python path so we can import from app
script_dir = Path(__file__).parent
api_dir = script_dir.parent
sys.path.insert(0, str(api_dir))

from sqlmodel import Session
from app.core.database import engine, init_db
from app.schemas.exercise import ExerciseResponse
from app.services.exercise_service import import_exercises, export_exercises

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def import_file(path: Path) -> int:
    records = json.loads(path.read_text(encoding="utf-8"))
    with Session(engine) as session:
        imported = import_exercises(session, records)
    return len(imported)


def export_file(path: Path) -> int:
    with Session(engine) as session:
        exercises = export_exercises(session)
        records = [ExerciseResponse.model_validate(exercise).model_dump(mode="json") for exercise in exercises]
    path.write_text(json.dumps(records, indent=2, ensure_ascii=False), encoding="utf-8")
    return len(records)


if __name__ == "__main__":
    if len(sys.argv) != 3 or sys.argv[1] not in ("import", "export"):
        logger.error("Usage: 1_import_exercises.py import|export <file.json>")
        sys.exit(2)

    action, file_path = sys.argv[1], Path(sys.argv[2])
    try:
        init_db()
        if action == "import":
            count = import_file(file_path)
            logger.info(f"Imported {count} exercise(s) from {file_path}")
        else:
            count = export_file(file_path)
            logger.info(f"Exported {count} exercise(s) to {file_path}")
    except Exception as e:
        logger.error("Error during %s: %s", action, e, exc_info=True)
        sys.exit(1)
