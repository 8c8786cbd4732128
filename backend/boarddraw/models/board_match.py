from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from boarddraw.models.timestamps import utc_now

if TYPE_CHECKING:
    from boarddraw.models.board_match_player import BoardMatchPlayer

MATCH_STATUS_DRAWN = "drawn"
MATCH_STATUS_SUBMITTED = "submitted"
MATCH_STATUS_VOID = "void"


class BoardMatch(SQLModel, table=True):
    """One table of one round of one block."""

    __tablename__ = "board_match"
    __table_args__ = (
        SAUniqueConstraint("block_id", "round_number", "table_number", name="uq_board_match_table"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    event_id: int = Field(foreign_key="board_event.id", index=True)
    category_id: int = Field(foreign_key="board_category.id", index=True)
    block_id: int = Field(foreign_key="board_block.id", index=True)
    round_number: int
    table_number: int
    status: str = Field(default=MATCH_STATUS_DRAWN)  # "drawn" | "submitted" | "void"
    created_at: datetime = Field(default_factory=utc_now)
    submitted_at: Optional[datetime] = Field(default=None)

    # Relationships
    players: List["BoardMatchPlayer"] = Relationship(
        back_populates="match", sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )
