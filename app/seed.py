"""
Catalog seeding

Run directly to (re)load the built-in modules:  python -m app.seed
"""
import logging
import sys
from typing import List

from sqlalchemy.orm import Session

from app.data.modules import MODULES
from app.models import Exercise, Module
from app.utils.cache import CacheService, cache_service

logger = logging.getLogger(__name__)


def seed_catalog(db: Session, modules: List[dict] = None, replace: bool = False) -> int:
    """
    Insert the module catalog

    Args:
        db: Database session
        modules: Catalog entries, defaults to the built-in MODULES
        replace: Delete existing modules and exercises first

    Returns:
        Number of modules inserted (0 when the catalog was already present)
    """
    modules = MODULES if modules is None else modules

    if replace:
        logger.info("Clearing existing modules and exercises")
        db.query(Exercise).delete()
        db.query(Module).delete()
        db.flush()
    elif db.query(Module.id).first() is not None:
        logger.info("Catalog already seeded, skipping")
        return 0

    try:
        for module_position, data in enumerate(modules):
            logger.info(f"Inserting module: {data['title']}")
            module = Module(
                id=data["id"],
                title=data["title"],
                description=data["description"],
                objectives=data["objectives"],
                concepts=data["concepts"],
                position=module_position
            )
            module.exercises = [
                Exercise(
                    id=exercise["id"],
                    title=exercise["title"],
                    description=exercise["description"],
                    problem=exercise["problem"],
                    example=exercise["example"],
                    model_answer=exercise.get("model_answer"),
                    position=exercise_position
                )
                for exercise_position, exercise in enumerate(data["exercises"])
            ]
            db.add(module)

        db.commit()
    except Exception:
        db.rollback()
        raise

    total_exercises = sum(len(data["exercises"]) for data in modules)
    logger.info(f"Seeded {len(modules)} modules with {total_exercises} exercises")
    return len(modules)


def reseed(db: Session, replace: bool = False, cache: CacheService = None) -> int:
    """Seed the catalog and drop cached catalog entries when anything changed"""
    inserted = seed_catalog(db, replace=replace)
    if inserted:
        (cache or cache_service).clear_catalog()
    return inserted


if __name__ == "__main__":
    from app.database import SessionLocal, init_db

    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    init_db()
    session = SessionLocal()
    try:
        reseed(session, replace="--keep" not in sys.argv)
    except Exception as e:
        logger.error(f"Seeding failed: {str(e)}")
        sys.exit(1)
    finally:
        session.close()
