from datetime import timezone

from sqlmodel import Session, select

from boarddraw.models import BoardEvent, BoardGame, BoardMatch, BoardMatchPlayer, BoardPlayer


class TestTimestamps:
    def test_defaults_are_timezone_aware(self):
        for row in (
            BoardEvent(slug="autumn", name="Autumn Cup"),
            BoardGame(event_id=1, name="Azul"),
            BoardPlayer(event_id=1, category_id=1, short_code="P001"),
            BoardMatch(event_id=1, category_id=1, block_id=1, round_number=1, table_number=1),
            BoardMatchPlayer(match_id=1, player_id=1, seat=1),
        ):
            assert row.created_at.tzinfo is not None
            assert row.created_at.utcoffset() == timezone.utc.utcoffset(None)

    def test_insert_with_default_timestamps(self, session: Session):
        event = BoardEvent(slug="autumn", name="Autumn Cup")
        session.add(event)
        session.commit()
        session.refresh(event)

        game = BoardGame(event_id=event.id, name="Azul", scoring_type="placement")
        session.add(game)
        session.commit()

        stored = session.exec(select(BoardGame).where(BoardGame.event_id == event.id)).one()
        assert stored.created_at is not None
        assert stored.points_order == "desc"


class TestBuildEngine:
    def test_sqlite_file_directory_created(self, tmp_path):
        from boarddraw.database import build_engine

        db_file = tmp_path / "nested" / "draw.db"
        engine = build_engine(f"sqlite:///{db_file}")
        assert db_file.parent.is_dir()
        assert engine.url.database == str(db_file)

    def test_in_memory_sqlite(self):
        from boarddraw.database import build_engine

        engine = build_engine("sqlite:///:memory:")
        with engine.connect() as conn:
            assert conn.exec_driver_sql("select 1").scalar() == 1
