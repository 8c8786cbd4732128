"""
Placement scoring for one played table.

Supports:
  build_placements_from_points  raw points -> placements, ties averaged
  resolve_placement_for_save    which placement value is stored per entry
  parse_numeric                 judge input such as " 3,5 " -> 3.5

Placements are 1-based (1 = best). A run of tied scores shares the mean of the
ranks it occupies, so the placements of k entries always sum to k(k+1)/2.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Hashable, List, Optional, Sequence, Union

from boarddraw.services.draw_rules import PointsOrder, ScoringType

NumericInput = Union[str, int, float, None]

SCORING_TYPES = ("points", "placement", "both")
POINTS_ORDERS = ("asc", "desc")


class ResultValidationError(ValueError):
    """Table results are missing an input the game's scoring type requires."""


@dataclass
class PointsEntry:
    id: Hashable
    seat: int
    points: NumericInput


@dataclass
class ResultEntry:
    """Raw judge input for one seat."""
    id: Hashable
    seat: int
    points: NumericInput = None
    placement: NumericInput = None


def parse_numeric(value: NumericInput) -> Optional[float]:
    """Parse a judge-entered number; decimal comma allowed. Returns None when blank or invalid."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        parsed = float(value)
    else:
        normalized = str(value).replace(",", ".").strip()
        if not normalized:
            return None
        try:
            parsed = float(normalized)
        except ValueError:
            return None
    if not math.isfinite(parsed):
        return None
    return parsed


def build_placements_from_points(
    entries: Sequence[PointsEntry],
    points_order: PointsOrder,
) -> Dict[Hashable, float]:
    """Rank entries by points; entries without parseable points get no placement."""
    if points_order not in POINTS_ORDERS:
        raise ValueError(f"points_order must be 'asc' or 'desc', got {points_order!r}")

    scored = []
    for entry in entries:
        points = parse_numeric(entry.points)
        if points is not None:
            scored.append((points, entry.seat, entry.id))

    # Equal points keep seat order
    if points_order == "asc":
        scored.sort(key=lambda item: (item[0], item[1]))
    else:
        scored.sort(key=lambda item: (-item[0], item[1]))

    placements: Dict[Hashable, float] = {}
    index = 0
    while index < len(scored):
        start = index
        tied_points = scored[index][0]
        while index + 1 < len(scored) and scored[index + 1][0] == tied_points:
            index += 1

        average_rank = ((start + 1) + (index + 1)) / 2
        for _, _, entry_id in scored[start:index + 1]:
            placements[entry_id] = average_rank

        index += 1

    return placements


def has_tied_points(entries: Sequence[PointsEntry]) -> bool:
    """True when two entries share the same parsed points (manual tie-break may be wanted)."""
    seen = set()
    for entry in entries:
        points = parse_numeric(entry.points)
        if points is None:
            continue
        if points in seen:
            return True
        seen.add(points)
    return False


def resolve_placement_for_save(
    scoring_type: ScoringType,
    parsed_points: Optional[float],
    parsed_placement: Optional[float],
    auto_placement: Optional[float],
) -> Optional[float]:
    """
    Decide the placement stored for one entry.

    points    -> None (placement never stored)
    placement -> manual placement, or None
    both      -> manual placement, else the one computed from points;
                 None when the entry has no points to compute from
    """
    if scoring_type not in SCORING_TYPES:
        raise ValueError(f"scoring_type must be one of {SCORING_TYPES}, got {scoring_type!r}")

    if scoring_type == "placement":
        return parsed_placement
    if scoring_type == "both":
        if parsed_placement is not None:
            return parsed_placement
        if parsed_points is not None:
            return auto_placement
        return None
    return None


def validate_result_entries(scoring_type: ScoringType, entries: Sequence[ResultEntry]) -> None:
    """Raise ResultValidationError naming the first seat missing a required input."""
    if scoring_type not in SCORING_TYPES:
        raise ValueError(f"scoring_type must be one of {SCORING_TYPES}, got {scoring_type!r}")
    if not entries:
        raise ResultValidationError("Match has no seated players")

    for entry in sorted(entries, key=lambda e: e.seat):
        if scoring_type in ("points", "both") and parse_numeric(entry.points) is None:
            raise ResultValidationError(f"Points missing for seat {entry.seat}")
        if scoring_type == "placement" and parse_numeric(entry.placement) is None:
            raise ResultValidationError(f"Placement missing for seat {entry.seat}")


def resolve_table_results(scoring_type: ScoringType, points_order: PointsOrder, entries: Sequence[ResultEntry]) -> List[Dict]:
    """
    Stored values for every entry of a table: parsed points (None for pure
    placement games) and the resolved placement.
    """
    auto = {}
    if scoring_type != "placement":
        auto = build_placements_from_points(
            [PointsEntry(id=e.id, seat=e.seat, points=e.points) for e in entries],
            points_order,
        )

    rows = []
    for entry in entries:
        parsed_points = parse_numeric(entry.points)
        parsed_placement = parse_numeric(entry.placement)
        rows.append({
            "id": entry.id,
            "seat": entry.seat,
            "points": None if scoring_type == "placement" else parsed_points,
            "placement": resolve_placement_for_save(
                scoring_type,
                parsed_points=parsed_points,
                parsed_placement=parsed_placement,
                auto_placement=auto.get(entry.id),
            ),
        })
    return rows
