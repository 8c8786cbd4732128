from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from boarddraw.models.timestamps import utc_now

if TYPE_CHECKING:
    from boarddraw.models.board_category import BoardCategory


class BoardPlayer(SQLModel, table=True):
    __tablename__ = "board_player"
    __table_args__ = (SAUniqueConstraint("event_id", "short_code", name="uq_board_player_code"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    event_id: int = Field(foreign_key="board_event.id", index=True)
    category_id: int = Field(foreign_key="board_category.id", index=True)
    short_code: str  # printed on the QR badge, e.g. "P07"
    team_name: Optional[str] = None  # free text; grouped by team key for separation
    display_name: Optional[str] = None
    disqualified: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now)

    # Relationships
    category: "BoardCategory" = Relationship(back_populates="players")
