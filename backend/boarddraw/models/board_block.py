from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from boarddraw.models.timestamps import utc_now

if TYPE_CHECKING:
    from boarddraw.models.board_category import BoardCategory


class BoardBlock(SQLModel, table=True):
    """One game played by a category; every block runs a fixed number of rounds."""

    __tablename__ = "board_block"
    __table_args__ = (SAUniqueConstraint("category_id", "block_number", name="uq_board_block_number"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    event_id: int = Field(foreign_key="board_event.id", index=True)
    category_id: int = Field(foreign_key="board_category.id", index=True)
    block_number: int
    # Not a FK on purpose: a dangling game id is reported by the draw as an unknown game
    game_id: int = Field(index=True)
    created_at: datetime = Field(default_factory=utc_now)

    # Relationships
    category: "BoardCategory" = Relationship(back_populates="blocks")
