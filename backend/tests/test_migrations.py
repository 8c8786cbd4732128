"""
The board-draw migration must build the same tables the models declare.
"""

import importlib.util
from pathlib import Path

from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy import create_engine, inspect
from sqlmodel import SQLModel

import boarddraw.models  # noqa: F401

MIGRATION = Path(__file__).resolve().parent.parent / "alembic" / "versions" / "001_board_draw_tables.py"


def load_migration():
    spec = importlib.util.spec_from_file_location("board_draw_migration", MIGRATION)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_upgrade_matches_models():
    migration = load_migration()
    engine = create_engine("sqlite:///:memory:")

    with engine.begin() as conn:
        with Operations.context(MigrationContext.configure(conn)):
            migration.upgrade()

        inspector = inspect(conn)
        tables = set(inspector.get_table_names())
        assert tables == {t.name for t in SQLModel.metadata.sorted_tables}

        for table in SQLModel.metadata.sorted_tables:
            migrated = {c["name"] for c in inspector.get_columns(table.name)}
            assert migrated == {c.name for c in table.columns}, table.name


def test_upgrade_is_idempotent_and_downgrade_drops_everything():
    migration = load_migration()
    engine = create_engine("sqlite:///:memory:")

    with engine.begin() as conn:
        with Operations.context(MigrationContext.configure(conn)):
            migration.upgrade()
            migration.upgrade()
            migration.downgrade()

        assert inspect(conn).get_table_names() == []
