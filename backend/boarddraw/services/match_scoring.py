"""
Store the results of one played table.

Placements follow the game's scoring type:
- points:    points stored, placement left empty
- placement: judge placements stored, points left empty
- both:      points stored; judge placement wins, else computed from points
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence

from sqlmodel import Session, select

from boarddraw.models.board_block import BoardBlock
from boarddraw.models.board_game import BoardGame
from boarddraw.models.board_match import MATCH_STATUS_SUBMITTED, MATCH_STATUS_VOID, BoardMatch
from boarddraw.models.board_match_player import BoardMatchPlayer
from boarddraw.models.timestamps import utc_now
from boarddraw.services.draw_plan_engine import UnknownGameError
from boarddraw.services.placement import (
    PointsEntry,
    ResultEntry,
    ResultValidationError,
    has_tied_points,
    resolve_table_results,
    validate_result_entries,
)

logger = logging.getLogger(__name__)


@dataclass
class MatchResultSummary:
    match_id: int
    status: str
    scoring_type: str
    points_order: str
    has_tied_points: bool = False
    results: List[Dict[str, Any]] = field(default_factory=list)


def save_match_results(
    session: Session,
    match_id: int,
    entries: Sequence[Mapping[str, Any]],
) -> MatchResultSummary:
    """
    Validate and store results for every seat of a match.

    entries: one mapping per seated player with "player_id" and raw
    "points"/"placement" values as typed by the judge.

    Raises:
        ValueError: match not found
        UnknownGameError: the match's block points at a missing game
        ResultValidationError: entries do not cover the table or miss a required input
    """
    match = session.get(BoardMatch, match_id)
    if not match:
        raise ValueError(f"Match {match_id} not found")
    if match.status == MATCH_STATUS_VOID:
        raise ResultValidationError(f"Match {match_id} is void")

    block = session.get(BoardBlock, match.block_id)
    game = session.get(BoardGame, block.game_id) if block else None
    if not game:
        raise UnknownGameError(f"Match {match_id} has no configured game")

    seats = session.exec(
        select(BoardMatchPlayer).where(BoardMatchPlayer.match_id == match_id).order_by(BoardMatchPlayer.seat)
    ).all()
    seats_by_player = {s.player_id: s for s in seats}

    by_player: Dict[int, Mapping[str, Any]] = {}
    for entry in entries:
        player_id = entry.get("player_id")
        if player_id not in seats_by_player:
            raise ResultValidationError(f"Player {player_id} is not seated at match {match_id}")
        if player_id in by_player:
            raise ResultValidationError(f"Player {player_id} appears twice")
        by_player[player_id] = entry

    missing = [s.seat for s in seats if s.player_id not in by_player]
    if missing:
        raise ResultValidationError(f"Results missing for seats {missing}")

    result_entries = [
        ResultEntry(
            id=s.player_id,
            seat=s.seat,
            points=by_player[s.player_id].get("points"),
            placement=by_player[s.player_id].get("placement"),
        )
        for s in seats
    ]
    validate_result_entries(game.scoring_type, result_entries)
    rows = resolve_table_results(game.scoring_type, game.points_order, result_entries)

    for row in rows:
        seat = seats_by_player[row["id"]]
        seat.points = row["points"]
        seat.placement = row["placement"]
        session.add(seat)

    match.status = MATCH_STATUS_SUBMITTED
    match.submitted_at = utc_now()
    session.add(match)
    session.commit()

    tied = game.scoring_type != "placement" and has_tied_points(
        [PointsEntry(id=e.id, seat=e.seat, points=e.points) for e in result_entries]
    )
    logger.info("Match %s results stored (%s, %d seats, tied=%s)", match_id, game.scoring_type, len(rows), tied)

    return MatchResultSummary(
        match_id=match_id,
        status=match.status,
        scoring_type=game.scoring_type,
        points_order=game.points_order,
        has_tied_points=tied,
        results=[
            {"player_id": r["id"], "seat": r["seat"], "points": r["points"], "placement": r["placement"]}
            for r in rows
        ],
    )
