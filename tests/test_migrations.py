"""The initial migration creates the same tables and columns as the models."""

import importlib.util
from pathlib import Path

from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy import create_engine, inspect

import repledger.models  # noqa: F401 - register all models
from repledger.db.base import Base

MIGRATION = Path(__file__).resolve().parents[1] / "alembic" / "versions" / "001_initial_schema.py"


def _load_migration():
    spec = importlib.util.spec_from_file_location("initial_schema", MIGRATION)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestInitialMigration:
    def test_upgrade_matches_models(self):
        migration = _load_migration()
        engine = create_engine("sqlite://")
        with engine.begin() as conn:
            with Operations.context(MigrationContext.configure(conn)):
                migration.upgrade()
            inspector = inspect(conn)
            assert set(inspector.get_table_names()) == set(Base.metadata.tables)
            for table in Base.metadata.sorted_tables:
                columns = {c["name"]: c for c in inspector.get_columns(table.name)}
                assert set(columns) == {c.name for c in table.columns}, table.name
                for column in table.columns:
                    assert columns[column.name]["nullable"] == column.nullable, f"{table.name}.{column.name}"

    def test_downgrade_drops_everything(self):
        migration = _load_migration()
        engine = create_engine("sqlite://")
        with engine.begin() as conn:
            with Operations.context(MigrationContext.configure(conn)):
                migration.upgrade()
                migration.downgrade()
            assert inspect(conn).get_table_names() == []
