import random

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from boarddraw.database import get_session
from boarddraw.main import app

TEST_DATABASE_URL = "sqlite:///:memory:"

# ============================================================================
# Test Database Setup with StaticPool
# ============================================================================
# 1. sqlite:///:memory: with StaticPool so ALL sessions share the same DB
# 2. check_same_thread=False required for TestClient/threaded access
# 3. All models MUST be imported before create_all() (see session_fixture)
# 4. App dependency overridden to use test_engine (see client_fixture)
# 5. Tables dropped after every test so ids and rows never leak between tests
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


def override_get_session():
    """Override session to use test engine"""
    with Session(test_engine) as session:
        yield session


@pytest.fixture(name="session", scope="function")
def session_fixture():
    """Provide a test database session on a freshly created schema."""
    # Import all models to ensure they're registered BEFORE create_all
    from boarddraw.models.board_block import BoardBlock  # noqa: F401
    from boarddraw.models.board_category import BoardCategory  # noqa: F401
    from boarddraw.models.board_event import BoardEvent  # noqa: F401
    from boarddraw.models.board_game import BoardGame  # noqa: F401
    from boarddraw.models.board_match import BoardMatch  # noqa: F401
    from boarddraw.models.board_match_player import BoardMatchPlayer  # noqa: F401
    from boarddraw.models.board_player import BoardPlayer  # noqa: F401

    SQLModel.metadata.create_all(test_engine)

    with Session(test_engine) as session:
        yield session

    SQLModel.metadata.drop_all(test_engine)


@pytest.fixture(name="client")
def client_fixture(session: Session):
    """Provide a test client with overridden database session

    Override MUST be set BEFORE TestClient() and stay in place for the
    entire duration so the app never touches its own engine.
    """
    app.dependency_overrides[get_session] = override_get_session

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def rng():
    """Seeded random source; every draw test is reproducible."""
    return random.Random(20260117)


@pytest.fixture
def board_event(session: Session):
    """
    Build an event: one game per scoring type, and a category per roster.

    Usage:
        event = board_event(rosters={"Juniors": ["Sokoli", None, ...]}, blocks=2)
        event["categories"]["Juniors"]["players"] -> list of player ids
    """
    from boarddraw.models import BoardBlock, BoardCategory, BoardEvent, BoardGame, BoardPlayer

    def _build(rosters, blocks=1, scoring_type="both", points_order="desc", slug="spring-cup"):
        event = BoardEvent(slug=slug, name="Spring Cup")
        session.add(event)
        session.commit()
        session.refresh(event)

        game = BoardGame(event_id=event.id, name="Carcassonne", scoring_type=scoring_type, points_order=points_order)
        session.add(game)
        session.commit()
        session.refresh(game)

        categories = {}
        code = 0
        for name, teams in rosters.items():
            category = BoardCategory(event_id=event.id, name=name, primary_game_id=game.id)
            session.add(category)
            session.commit()
            session.refresh(category)

            players = []
            for team_name in teams:
                code += 1
                player = BoardPlayer(
                    event_id=event.id,
                    category_id=category.id,
                    short_code=f"P{code:03d}",
                    team_name=team_name,
                    display_name=f"Player {code}",
                )
                session.add(player)
                players.append(player)

            block_rows = [
                BoardBlock(event_id=event.id, category_id=category.id, block_number=n, game_id=game.id)
                for n in range(1, blocks + 1)
            ]
            session.add_all(block_rows)
            session.commit()

            categories[name] = {
                "id": category.id,
                "players": [p.id for p in players],
                "blocks": [b.id for b in block_rows],
            }

        return {"id": event.id, "game_id": game.id, "categories": categories}

    return _build
