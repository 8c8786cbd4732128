"""Create board-game draw tables

Revision ID: 001_board_draw
Revises:
Create Date: 2026-10-17 00:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy import inspect

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001_board_draw"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    bind = op.get_bind()
    inspector = inspect(bind)
    tables = inspector.get_table_names()

    if "board_event" not in tables:
        op.create_table(
            "board_event",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("slug", sa.String(), nullable=False),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("start_date", sa.Date(), nullable=True),
            sa.Column("end_date", sa.Date(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(op.f("ix_board_event_slug"), "board_event", ["slug"], unique=True)

    if "board_game" not in tables:
        op.create_table(
            "board_game",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("event_id", sa.Integer(), nullable=False),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("scoring_type", sa.String(), nullable=False, server_default="both"),
            sa.Column("points_order", sa.String(), nullable=False, server_default="desc"),
            sa.Column("notes", sa.String(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(["event_id"], ["board_event.id"]),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(op.f("ix_board_game_event_id"), "board_game", ["event_id"], unique=False)

    if "board_category" not in tables:
        op.create_table(
            "board_category",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("event_id", sa.Integer(), nullable=False),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("primary_game_id", sa.Integer(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(["event_id"], ["board_event.id"]),
            sa.ForeignKeyConstraint(["primary_game_id"], ["board_game.id"]),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("event_id", "name", name="uq_board_category_name"),
        )
        op.create_index(op.f("ix_board_category_event_id"), "board_category", ["event_id"], unique=False)

    if "board_block" not in tables:
        op.create_table(
            "board_block",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("event_id", sa.Integer(), nullable=False),
            sa.Column("category_id", sa.Integer(), nullable=False),
            sa.Column("block_number", sa.Integer(), nullable=False),
            sa.Column("game_id", sa.Integer(), nullable=False),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(["event_id"], ["board_event.id"]),
            sa.ForeignKeyConstraint(["category_id"], ["board_category.id"]),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("category_id", "block_number", name="uq_board_block_number"),
        )
        op.create_index(op.f("ix_board_block_event_id"), "board_block", ["event_id"], unique=False)
        op.create_index(op.f("ix_board_block_category_id"), "board_block", ["category_id"], unique=False)
        op.create_index(op.f("ix_board_block_game_id"), "board_block", ["game_id"], unique=False)

    if "board_player" not in tables:
        op.create_table(
            "board_player",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("event_id", sa.Integer(), nullable=False),
            sa.Column("category_id", sa.Integer(), nullable=False),
            sa.Column("short_code", sa.String(), nullable=False),
            sa.Column("team_name", sa.String(), nullable=True),
            sa.Column("display_name", sa.String(), nullable=True),
            sa.Column("disqualified", sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(["event_id"], ["board_event.id"]),
            sa.ForeignKeyConstraint(["category_id"], ["board_category.id"]),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("event_id", "short_code", name="uq_board_player_code"),
        )
        op.create_index(op.f("ix_board_player_event_id"), "board_player", ["event_id"], unique=False)
        op.create_index(op.f("ix_board_player_category_id"), "board_player", ["category_id"], unique=False)

    if "board_match" not in tables:
        op.create_table(
            "board_match",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("event_id", sa.Integer(), nullable=False),
            sa.Column("category_id", sa.Integer(), nullable=False),
            sa.Column("block_id", sa.Integer(), nullable=False),
            sa.Column("round_number", sa.Integer(), nullable=False),
            sa.Column("table_number", sa.Integer(), nullable=False),
            sa.Column("status", sa.String(), nullable=False, server_default="drawn"),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.Column("submitted_at", sa.DateTime(), nullable=True),
            sa.ForeignKeyConstraint(["event_id"], ["board_event.id"]),
            sa.ForeignKeyConstraint(["category_id"], ["board_category.id"]),
            sa.ForeignKeyConstraint(["block_id"], ["board_block.id"]),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("block_id", "round_number", "table_number", name="uq_board_match_table"),
        )
        op.create_index(op.f("ix_board_match_event_id"), "board_match", ["event_id"], unique=False)
        op.create_index(op.f("ix_board_match_category_id"), "board_match", ["category_id"], unique=False)
        op.create_index(op.f("ix_board_match_block_id"), "board_match", ["block_id"], unique=False)

    if "board_match_player" not in tables:
        op.create_table(
            "board_match_player",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("match_id", sa.Integer(), nullable=False),
            sa.Column("player_id", sa.Integer(), nullable=False),
            sa.Column("seat", sa.Integer(), nullable=False),
            sa.Column("points", sa.Float(), nullable=True),
            sa.Column("placement", sa.Float(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(["match_id"], ["board_match.id"]),
            sa.ForeignKeyConstraint(["player_id"], ["board_player.id"]),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("match_id", "seat", name="uq_board_match_seat"),
            sa.UniqueConstraint("match_id", "player_id", name="uq_board_match_player"),
        )
        op.create_index(op.f("ix_board_match_player_match_id"), "board_match_player", ["match_id"], unique=False)
        op.create_index(op.f("ix_board_match_player_player_id"), "board_match_player", ["player_id"], unique=False)


def downgrade() -> None:
    for table in (
        "board_match_player",
        "board_match",
        "board_player",
        "board_block",
        "board_category",
        "board_game",
        "board_event",
    ):
        op.drop_table(table)
