from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlmodel import Field, Relationship, SQLModel

from boarddraw.models.timestamps import utc_now

if TYPE_CHECKING:
    from boarddraw.models.board_event import BoardEvent


class BoardGame(SQLModel, table=True):
    __tablename__ = "board_game"

    id: Optional[int] = Field(default=None, primary_key=True)
    event_id: int = Field(foreign_key="board_event.id", index=True)
    name: str
    scoring_type: str = Field(default="both")  # "points" | "placement" | "both"
    points_order: str = Field(default="desc")  # "desc" = higher is better
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)

    # Relationships
    event: "BoardEvent" = Relationship(back_populates="games")
