"""
Draw API Routes
Runs the seating draw for an event and returns the persisted seating.
"""

import os
import random
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlmodel import Session

from boarddraw.database import get_session
from boarddraw.models.board_event import BoardEvent
from boarddraw.services.draw_plan_engine import DrawError
from boarddraw.services.draw_service import load_event_draw, run_event_draw

router = APIRouter()

_default_seed = os.getenv("DRAW_RANDOM_SEED")
DRAW_RANDOM_SEED: Optional[int] = int(_default_seed) if _default_seed else None


# ============================================================================
# Response Models
# ============================================================================


class CategoryDrawSummaryResponse(BaseModel):
    category_id: int
    category_name: str
    player_count: int
    block_count: int
    table_sizes: List[int]
    relaxed_block_numbers: List[int]


class DrawRunResponse(BaseModel):
    event_id: int
    dry_run: bool
    seed: Optional[int] = None
    matches_created: int
    seats_created: int
    matches_replaced: int
    relaxed_blocks: List[str]
    categories: List[CategoryDrawSummaryResponse]


class EventDrawResponse(BaseModel):
    event_id: int
    categories: List[Dict[str, Any]]


# ============================================================================
# Endpoints
# ============================================================================


@router.post("/events/{event_id}/draw", response_model=DrawRunResponse)
def run_draw(
    event_id: int,
    seed: Optional[int] = Query(None, description="Seed for a reproducible draw"),
    dry_run: bool = Query(False, description="Compute the draw without writing matches"),
    session: Session = Depends(get_session),
):
    """
    Draw every category of an event and replace its matches.

    Returns 422 when a category cannot be drawn (too few players, unknown
    game, malformed roster); the previous draw is then left untouched.
    """
    event = session.get(BoardEvent, event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")

    if seed is None:
        seed = DRAW_RANDOM_SEED
    rng = random.Random(seed) if seed is not None else random.Random()

    try:
        result = run_event_draw(session, event_id, rng=rng, dry_run=dry_run)
    except DrawError as e:
        session.rollback()
        raise HTTPException(status_code=422, detail=str(e))

    return DrawRunResponse(
        event_id=result.event_id,
        dry_run=result.dry_run,
        seed=seed,
        matches_created=result.matches_created,
        seats_created=result.seats_created,
        matches_replaced=result.matches_replaced,
        relaxed_blocks=result.relaxed_blocks,
        categories=[
            CategoryDrawSummaryResponse(
                category_id=c.category_id,
                category_name=c.category_name,
                player_count=c.player_count,
                block_count=c.block_count,
                table_sizes=c.table_sizes,
                relaxed_block_numbers=c.relaxed_block_numbers,
            )
            for c in result.categories
        ],
    )


@router.get("/events/{event_id}/draw", response_model=EventDrawResponse)
def get_draw(event_id: int, session: Session = Depends(get_session)):
    """Persisted seating grouped by category, block, round and table."""
    event = session.get(BoardEvent, event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")

    return EventDrawResponse(event_id=event_id, categories=load_event_draw(session, event_id))
