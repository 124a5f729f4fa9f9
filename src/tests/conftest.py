"""Pytest configuration and fixtures for service layer tests."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, scoped_session

from recipe_keeper.models.base import Base
from recipe_keeper.services import recipe_service
import recipe_keeper.services.database as db_module


@pytest.fixture(scope="function")
def test_db():
    """Provide a clean test database for each test function.

    This fixture:
    1. Creates an in-memory SQLite database
    2. Creates all tables
    3. Points the global session factory at it
    4. Drops all tables after the test completes
    """
    engine = create_engine("sqlite:///:memory:", echo=False)

    Base.metadata.create_all(engine)

    session_factory = sessionmaker(bind=engine, expire_on_commit=False)
    Session = scoped_session(session_factory)

    original_get_session_factory = db_module.get_session_factory
    db_module.get_session_factory = lambda: Session

    yield Session

    Session.remove()
    Base.metadata.drop_all(engine)
    engine.dispose()

    db_module.get_session_factory = original_get_session_factory


@pytest.fixture(scope="function")
def make_recipe(test_db):
    """Factory fixture creating recipes through the recipe service."""

    def _make(title, servings=4, nutrition=None, tags=None, **fields):
        data = {
            "title": title,
            "servings": servings,
            "ingredients": fields.pop("ingredients", ["1 ingredient"]),
            "instructions": fields.pop("instructions", ["Cook it"]),
            "nutrition": nutrition,
            **fields,
        }
        return recipe_service.create_recipe(data, tag_names=tags)

    return _make


@pytest.fixture(scope="function")
def lasagna_recipes(make_recipe):
    """Provide a small compound-recipe catalog.

    Creates (no component edges yet):
    - Lasagna (serves 8)
    - Marinara Sauce (serves 4, tagged "sauce")
    - Roasted Garlic (serves 2)
    - Fresh Pasta (serves 6)
    """

    class LasagnaData:
        def __init__(self):
            self.lasagna = make_recipe("Lasagna", servings=8, nutrition={"calories": 350})
            self.sauce = make_recipe(
                "Marinara Sauce",
                servings=4,
                nutrition={"calories": 120, "sodium": 480},
                tags=["sauce", "vegetarian"],
            )
            self.garlic = make_recipe("Roasted Garlic", servings=2, nutrition={"calories": 40})
            self.pasta = make_recipe(
                "Fresh Pasta", servings=6, nutrition={"calories": 210, "protein": 6}
            )

    return LasagnaData()
