"""Create the schema and seed the default community categories."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from forum_stage.db.session import SessionLocal, create_tables
from forum_stage.models import Category

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = (
    "Discussion",
    "Humor/Memes",
    "Gaming",
    "Movies",
    "TV",
    "Music",
    "Literature",
    "Comics",
    "Photography",
    "Art",
    "Learning",
    "DIY",
    "Lifestyle",
    "News",
    "Politics",
    "Society",
    "Gender/Identity/Sexuality",
    "Race/Colonisation",
    "Religion",
    "Science/Technology",
    "Programming/Software",
    "Health/Sports/Fitness",
    "Porn",
    "Places",
    "Meta",
    "Other",
)


def seed_categories(db: Session, names: tuple[str, ...] = DEFAULT_CATEGORIES) -> int:
    """Insert the categories that are missing and return how many were added."""
    existing = set(db.execute(select(Category.name)).scalars())
    missing = [name for name in names if name not in existing]
    db.add_all(Category(name=name) for name in missing)
    db.commit()
    return len(missing)


def init_db() -> None:
    """Initialize the database by creating all tables."""
    create_tables()
    with SessionLocal() as db:
        added = seed_categories(db)
    logger.info("Database initialized, %d categories added", added)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
