from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from boarddraw.models.timestamps import utc_now

if TYPE_CHECKING:
    from boarddraw.models.board_match import BoardMatch


class BoardMatchPlayer(SQLModel, table=True):
    __tablename__ = "board_match_player"
    __table_args__ = (
        SAUniqueConstraint("match_id", "seat", name="uq_board_match_seat"),
        SAUniqueConstraint("match_id", "player_id", name="uq_board_match_player"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    match_id: int = Field(foreign_key="board_match.id", index=True)
    player_id: int = Field(foreign_key="board_player.id", index=True)
    seat: int  # 1-based
    points: Optional[float] = Field(default=None)
    placement: Optional[float] = Field(default=None)  # may be fractional after averaged ties
    created_at: datetime = Field(default_factory=utc_now)

    # Relationships
    match: "BoardMatch" = Relationship(back_populates="players")
