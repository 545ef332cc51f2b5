# tests/test_init_db.py
from sqlalchemy import func, select

from forum_stage.init_db import DEFAULT_CATEGORIES, seed_categories
from forum_stage.models import Category


def test_seed_categories_is_idempotent(db_session) -> None:
    db_session.add(Category(name="Meta"))
    db_session.commit()

    added = seed_categories(db_session)

    assert added == len(DEFAULT_CATEGORIES) - 1
    assert seed_categories(db_session) == 0
    total = db_session.execute(select(func.count(Category.id))).scalar_one()
    assert total == len(DEFAULT_CATEGORIES)
