"""Tests for database session handling and write serialization."""

import threading

import pytest
from sqlalchemy import text
from sqlalchemy.orm import scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool

import recipe_keeper.services.database as db_module
from recipe_keeper.models import Recipe
from recipe_keeper.models.base import Base
from recipe_keeper.services import recipe_component_service, recipe_service
from recipe_keeper.services.database import begin_write, create_database_engine, session_scope
from recipe_keeper.services.exceptions import CircularReferenceError
from recipe_keeper.utils.config import reset_config


class TestCreateDatabaseEngine:
    """Tests for create_database_engine()."""

    def test_memory_database_uses_static_pool(self):
        engine = create_database_engine("sqlite:///:memory:")
        try:
            assert isinstance(engine.pool, StaticPool)
        finally:
            engine.dispose()

    def test_sqlite_foreign_keys_enabled(self, tmp_path):
        engine = create_database_engine(f"sqlite:///{tmp_path / 'fk.db'}")
        try:
            with engine.connect() as connection:
                assert connection.execute(text("PRAGMA foreign_keys")).scalar() == 1
        finally:
            engine.dispose()


class TestSessionScope:
    """Tests for session_scope() and begin_write()."""

    def test_commits_on_success(self, test_db):
        with session_scope() as session:
            session.add(Recipe(title="Broth"))

        session = test_db()
        assert session.query(Recipe).filter(Recipe.title == "Broth").count() == 1

    def test_rolls_back_on_exception(self, test_db):
        with pytest.raises(RuntimeError):
            with session_scope() as session:
                session.add(Recipe(title="Broth"))
                session.flush()
                raise RuntimeError("boom")

        session = test_db()
        assert session.query(Recipe).count() == 0

    def test_write_scope_starts_transaction(self, test_db):
        with session_scope(write=True) as session:
            assert session.in_transaction()

    def test_begin_write_leaves_existing_transaction_alone(self, test_db):
        session = test_db()
        session.execute(text("SELECT 1"))
        transaction = session.get_transaction()

        begin_write(session)

        assert session.get_transaction() is transaction
        session.rollback()


class TestConcurrentWrites:
    """Concurrent edge inserts against a shared file database."""

    @pytest.fixture
    def file_db(self, tmp_path):
        engine = create_database_engine(f"sqlite:///{tmp_path / 'concurrent.db'}")
        Base.metadata.create_all(engine)
        Session = scoped_session(sessionmaker(bind=engine, expire_on_commit=False))

        original_get_session_factory = db_module.get_session_factory
        db_module.get_session_factory = lambda: Session

        yield Session

        Session.remove()
        engine.dispose()
        db_module.get_session_factory = original_get_session_factory

    def test_opposite_edges_cannot_both_commit(self, file_db):
        """A->B and B->A racing: exactly one succeeds, the other sees the cycle."""
        a = recipe_service.create_recipe({"title": "A", "servings": 1})
        b = recipe_service.create_recipe({"title": "B", "servings": 1})

        barrier = threading.Barrier(2)
        results = []
        lock = threading.Lock()

        def worker(parent_id, child_id):
            barrier.wait()
            try:
                recipe_component_service.add_component(parent_id, child_id)
                outcome = "ok"
            except CircularReferenceError:
                outcome = "cycle"
            finally:
                file_db.remove()
            with lock:
                results.append(outcome)

        threads = [
            threading.Thread(target=worker, args=(a.id, b.id)),
            threading.Thread(target=worker, args=(b.id, a.id)),
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=60)

        assert sorted(results) == ["cycle", "ok"]
        edges = recipe_component_service.get_components(a.id) + (
            recipe_component_service.get_components(b.id)
        )
        assert len(edges) == 1


class TestInitializeAppDatabase:
    """Tests for the global engine lifecycle."""

    @pytest.fixture
    def app_db(self, tmp_path, monkeypatch):
        monkeypatch.setenv("RECIPE_KEEPER_DATABASE_URL", f"sqlite:///{tmp_path / 'app.db'}")
        reset_config()
        db_module.close_connections()

        yield tmp_path / "app.db"

        db_module.close_connections()
        reset_config()

    def test_initialize_creates_tables(self, app_db):
        db_module.initialize_app_database()

        assert app_db.exists()
        assert db_module.verify_database() is True

    def test_initialize_is_repeatable(self, app_db):
        db_module.initialize_app_database()
        recipe_service.create_recipe({"title": "Stock"})

        db_module.initialize_app_database()

        assert recipe_service.get_recipe_by_id(1).title == "Stock"

    def test_reset_requires_confirmation(self, app_db):
        db_module.initialize_app_database()

        with pytest.raises(ValueError):
            db_module.reset_database()

    def test_reset_deletes_data(self, app_db):
        db_module.initialize_app_database()
        recipe_service.create_recipe({"title": "Stock"})

        db_module.reset_database(confirm=True)

        assert recipe_service.get_recipe_by_id(1) is None
        assert db_module.verify_database() is True
