"""
Event draw: load an event's rosters, run the draw engine per category and
persist the seating as matches.

One BoardMatch per (block, round, table), one BoardMatchPlayer per seat with
seat numbers 1..k in table order. A new draw replaces every match of the
event; any engine error aborts before anything is written.
"""
import logging
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from sqlmodel import Session, select

from boarddraw.models.board_block import BoardBlock
from boarddraw.models.board_category import BoardCategory
from boarddraw.models.board_event import BoardEvent
from boarddraw.models.board_game import BoardGame
from boarddraw.models.board_match import BoardMatch
from boarddraw.models.board_match_player import BoardMatchPlayer
from boarddraw.models.board_player import BoardPlayer
from boarddraw.services.draw_plan_engine import (
    Block,
    Competitor,
    DrawBlockPlan,
    DrawError,
    Game,
    InvalidRosterError,
    plan_category_draw,
    validate_draw_plan,
)
from boarddraw.services.draw_rules import MAX_PLAYERS_PER_CATEGORY, build_round_table_sizes

logger = logging.getLogger(__name__)


@dataclass
class CategoryDrawSummary:
    category_id: int
    category_name: str
    player_count: int
    block_count: int
    table_sizes: List[int] = field(default_factory=list)
    relaxed_block_numbers: List[int] = field(default_factory=list)


@dataclass
class EventDrawResult:
    event_id: int
    dry_run: bool
    matches_created: int = 0
    seats_created: int = 0
    matches_replaced: int = 0
    categories: List[CategoryDrawSummary] = field(default_factory=list)
    relaxed_blocks: List[str] = field(default_factory=list)  # "Category / block N"
    plans: Dict[int, List[DrawBlockPlan]] = field(default_factory=dict)


def _load_games(session: Session, event_id: int) -> Dict[int, Game]:
    rows = session.exec(select(BoardGame).where(BoardGame.event_id == event_id)).all()
    return {
        g.id: Game(id=g.id, scoring_type=g.scoring_type, points_order=g.points_order, name=g.name)
        for g in rows
    }


def _load_competitors(session: Session, category: BoardCategory) -> List[Competitor]:
    players = session.exec(
        select(BoardPlayer).where(BoardPlayer.category_id == category.id).order_by(BoardPlayer.id)
    ).all()
    return [
        Competitor(
            id=p.id,
            team_name=p.team_name,
            category_id=p.category_id,
            display_name=p.display_name or p.short_code,
            active=not p.disqualified,
        )
        for p in players
    ]


def _load_blocks(session: Session, category: BoardCategory) -> List[Block]:
    rows = session.exec(
        select(BoardBlock).where(BoardBlock.category_id == category.id).order_by(BoardBlock.block_number)
    ).all()
    return [Block(block_number=b.block_number, game_id=b.game_id, category_id=b.category_id, id=b.id) for b in rows]


def _delete_event_matches(session: Session, event_id: int) -> int:
    matches = session.exec(select(BoardMatch).where(BoardMatch.event_id == event_id)).all()
    for match in matches:
        seats = session.exec(select(BoardMatchPlayer).where(BoardMatchPlayer.match_id == match.id)).all()
        for seat in seats:
            session.delete(seat)
        session.delete(match)
    session.flush()
    return len(matches)


def run_event_draw(
    session: Session,
    event_id: int,
    rng: Optional[random.Random] = None,
    dry_run: bool = False,
) -> EventDrawResult:
    """
    Draw every category of an event.

    Raises:
        ValueError: event does not exist
        DrawError: roster, block or game problems (nothing is written)
    """
    event = session.get(BoardEvent, event_id)
    if not event:
        raise ValueError(f"Event {event_id} not found")

    rng = rng or random.Random()
    games = _load_games(session, event_id)
    categories = session.exec(
        select(BoardCategory).where(BoardCategory.event_id == event_id).order_by(BoardCategory.id)
    ).all()

    result = EventDrawResult(event_id=event_id, dry_run=dry_run)

    # Plan everything first so a failing category leaves the old draw intact
    for category in categories:
        competitors = _load_competitors(session, category)
        blocks = _load_blocks(session, category)
        active_count = sum(1 for c in competitors if c.active)

        if blocks and active_count > MAX_PLAYERS_PER_CATEGORY:
            raise InvalidRosterError(
                f"Category '{category.name}' has {active_count} active players; "
                f"at most {MAX_PLAYERS_PER_CATEGORY} can be drawn"
            )

        plans = plan_category_draw(competitors, blocks, games=games, rng=rng)
        violations = validate_draw_plan(plans, [c.id for c in competitors if c.active])
        if violations:
            logger.error("Draw for category %s failed validation: %s", category.id, violations)
            raise DrawError(f"Draw for category '{category.name}' is invalid: {violations[0]}")
        result.plans[category.id] = plans

        summary = CategoryDrawSummary(
            category_id=category.id,
            category_name=category.name,
            player_count=active_count,
            block_count=len(blocks),
            table_sizes=build_round_table_sizes(active_count) if plans else [],
        )
        for plan in plans:
            if plan.used_relaxed_same_team_rule:
                summary.relaxed_block_numbers.append(plan.block.block_number)
                result.relaxed_blocks.append(f"{category.name} / block {plan.block.block_number}")
        result.categories.append(summary)

    for label in result.relaxed_blocks:
        logger.warning("Event %s: same-team rule relaxed in %s", event_id, label)

    if dry_run:
        for plans in result.plans.values():
            for plan in plans:
                for draw_round in plan.rounds:
                    result.matches_created += len(draw_round.tables)
                    result.seats_created += sum(len(t.player_ids) for t in draw_round.tables)
        logger.info(
            "Dry-run draw for event %s: %d matches, %d seats",
            event_id, result.matches_created, result.seats_created,
        )
        return result

    result.matches_replaced = _delete_event_matches(session, event_id)

    for category_id, plans in result.plans.items():
        for plan in plans:
            for draw_round in plan.rounds:
                for table in draw_round.tables:
                    match = BoardMatch(
                        event_id=event_id,
                        category_id=category_id,
                        block_id=plan.block.id,
                        round_number=draw_round.round_number,
                        table_number=table.table_number,
                    )
                    session.add(match)
                    session.flush()
                    for seat, player_id in enumerate(table.player_ids, start=1):
                        session.add(BoardMatchPlayer(match_id=match.id, player_id=player_id, seat=seat))
                        result.seats_created += 1
                    result.matches_created += 1

    session.commit()
    logger.info(
        "Draw for event %s: %d matches, %d seats (replaced %d matches), relaxed blocks: %d",
        event_id,
        result.matches_created,
        result.seats_created,
        result.matches_replaced,
        len(result.relaxed_blocks),
    )
    return result


def _seat_payload(seat: BoardMatchPlayer, player: Optional[BoardPlayer]) -> Dict[str, Any]:
    return {
        "player_id": seat.player_id,
        "seat": seat.seat,
        "short_code": player.short_code if player else None,
        "display_name": player.display_name if player else None,
        "team_name": player.team_name if player else None,
        "points": seat.points,
        "placement": seat.placement,
    }


def load_event_draw(session: Session, event_id: int) -> List[Dict[str, Any]]:
    """
    Persisted seating of an event grouped category -> block -> round -> table.

    Deterministic order: category id, block number, round, table, seat.
    """
    categories = session.exec(
        select(BoardCategory).where(BoardCategory.event_id == event_id).order_by(BoardCategory.id)
    ).all()
    blocks = session.exec(select(BoardBlock).where(BoardBlock.event_id == event_id)).all()
    blocks_by_id = {b.id: b for b in blocks}
    players = session.exec(select(BoardPlayer).where(BoardPlayer.event_id == event_id)).all()
    players_by_id = {p.id: p for p in players}

    matches = session.exec(
        select(BoardMatch)
        .where(BoardMatch.event_id == event_id)
        .order_by(BoardMatch.category_id, BoardMatch.block_id, BoardMatch.round_number, BoardMatch.table_number)
    ).all()

    # category_id -> block_number -> round_number -> [table dicts]
    grouped: Dict[int, Dict[int, Dict[int, List[Dict[str, Any]]]]] = {}
    for match in matches:
        block = blocks_by_id.get(match.block_id)
        if block is None:
            continue
        seats = session.exec(
            select(BoardMatchPlayer).where(BoardMatchPlayer.match_id == match.id).order_by(BoardMatchPlayer.seat)
        ).all()
        table = {
            "match_id": match.id,
            "table_number": match.table_number,
            "status": match.status,
            "players": [_seat_payload(s, players_by_id.get(s.player_id)) for s in seats],
        }
        rounds = grouped.setdefault(match.category_id, {}).setdefault(block.block_number, {})
        rounds.setdefault(match.round_number, []).append(table)

    output = []
    for category in categories:
        blocks_out = []
        for block_number in sorted(grouped.get(category.id, {})):
            rounds = grouped[category.id][block_number]
            block = next(b for b in blocks if b.category_id == category.id and b.block_number == block_number)
            blocks_out.append({
                "block_id": block.id,
                "block_number": block_number,
                "game_id": block.game_id,
                "rounds": [
                    {"round_number": rn, "tables": sorted(rounds[rn], key=lambda t: t["table_number"])}
                    for rn in sorted(rounds)
                ],
            })
        output.append({"category_id": category.id, "category_name": category.name, "blocks": blocks_out})
    return output
