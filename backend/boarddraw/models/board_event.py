from datetime import date, datetime
from typing import TYPE_CHECKING, List, Optional

from sqlmodel import Field, Relationship, SQLModel

from boarddraw.models.timestamps import utc_now

if TYPE_CHECKING:
    from boarddraw.models.board_category import BoardCategory
    from boarddraw.models.board_game import BoardGame


class BoardEvent(SQLModel, table=True):
    __tablename__ = "board_event"

    id: Optional[int] = Field(default=None, primary_key=True)
    slug: str = Field(index=True, unique=True)
    name: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    created_at: datetime = Field(default_factory=utc_now)

    # Relationships
    categories: List["BoardCategory"] = Relationship(back_populates="event")
    games: List["BoardGame"] = Relationship(back_populates="event")
