from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from boarddraw.models.timestamps import utc_now

if TYPE_CHECKING:
    from boarddraw.models.board_block import BoardBlock
    from boarddraw.models.board_event import BoardEvent
    from boarddraw.models.board_player import BoardPlayer


class BoardCategory(SQLModel, table=True):
    __tablename__ = "board_category"
    __table_args__ = (SAUniqueConstraint("event_id", "name", name="uq_board_category_name"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    event_id: int = Field(foreign_key="board_event.id", index=True)
    name: str
    primary_game_id: Optional[int] = Field(default=None, foreign_key="board_game.id")
    created_at: datetime = Field(default_factory=utc_now)

    # Relationships
    event: "BoardEvent" = Relationship(back_populates="categories")
    blocks: List["BoardBlock"] = Relationship(back_populates="category")
    players: List["BoardPlayer"] = Relationship(back_populates="category")
