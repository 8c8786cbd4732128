"""
Match result routes: judges submit points and/or placements per table.
"""
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlmodel import Session

from boarddraw.database import get_session
from boarddraw.models.board_match import BoardMatch
from boarddraw.services.match_scoring import save_match_results

router = APIRouter()


class SeatResultInput(BaseModel):
    player_id: int
    # Raw judge input; "3,5" is accepted as 3.5
    points: Optional[Union[float, str]] = None
    placement: Optional[Union[float, str]] = None


class MatchResultsRequest(BaseModel):
    results: List[SeatResultInput]


class SeatResultResponse(BaseModel):
    player_id: int
    seat: int
    points: Optional[float] = None
    placement: Optional[float] = None


class MatchResultsResponse(BaseModel):
    match_id: int
    status: str
    scoring_type: str
    points_order: str
    has_tied_points: bool
    results: List[SeatResultResponse]


@router.put("/matches/{match_id}/results", response_model=MatchResultsResponse)
def put_match_results(match_id: int, request: MatchResultsRequest, session: Session = Depends(get_session)):
    match = session.get(BoardMatch, match_id)
    if not match:
        raise HTTPException(status_code=404, detail="Match not found")

    try:
        summary = save_match_results(session, match_id, [r.model_dump() for r in request.results])
    except ValueError as e:
        session.rollback()
        raise HTTPException(status_code=422, detail=str(e))

    return MatchResultsResponse(
        match_id=summary.match_id,
        status=summary.status,
        scoring_type=summary.scoring_type,
        points_order=summary.points_order,
        has_tied_points=summary.has_tied_points,
        results=[SeatResultResponse(**r) for r in summary.results],
    )
