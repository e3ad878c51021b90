from __future__ import annotations

from enum import Enum
from typing import Optional

from .move import DestinationKind, SourceKind
from .rules import DrawMode

MINIMUM_SCORE = 0
TIMED_POINTS_LOST_PER_SECOND = 1
TIMED_MAX_BONUS_DRAW_ONE = 600
TIMED_MAX_BONUS_DRAW_THREE = 900


class ScoringAction(str, Enum):
    WASTE_TO_TABLEAU = "WASTE_TO_TABLEAU"
    WASTE_TO_FOUNDATION = "WASTE_TO_FOUNDATION"
    TABLEAU_TO_FOUNDATION = "TABLEAU_TO_FOUNDATION"
    TURN_OVER_TABLEAU_CARD = "TURN_OVER_TABLEAU_CARD"
    FOUNDATION_TO_TABLEAU = "FOUNDATION_TO_TABLEAU"
    RECYCLE_WASTE_IN_DRAW_ONE = "RECYCLE_WASTE_IN_DRAW_ONE"


_DELTAS = {
    ScoringAction.WASTE_TO_TABLEAU: 5,
    ScoringAction.WASTE_TO_FOUNDATION: 10,
    ScoringAction.TABLEAU_TO_FOUNDATION: 10,
    ScoringAction.TURN_OVER_TABLEAU_CARD: 5,
    ScoringAction.FOUNDATION_TO_TABLEAU: -15,
    ScoringAction.RECYCLE_WASTE_IN_DRAW_ONE: -100,
}

_MOVE_ACTIONS = {
    (SourceKind.WASTE, DestinationKind.TABLEAU): ScoringAction.WASTE_TO_TABLEAU,
    (SourceKind.WASTE, DestinationKind.FOUNDATION): ScoringAction.WASTE_TO_FOUNDATION,
    (SourceKind.TABLEAU, DestinationKind.FOUNDATION): ScoringAction.TABLEAU_TO_FOUNDATION,
    (SourceKind.FOUNDATION, DestinationKind.TABLEAU): ScoringAction.FOUNDATION_TO_TABLEAU,
}


def delta(action: ScoringAction) -> int:
    return _DELTAS[action]


def clamped(score: int) -> int:
    return max(MINIMUM_SCORE, score)


def applying(action: ScoringAction, score: int) -> int:
    return clamped(score + delta(action))


def time_bonus(
    elapsed_seconds: int, max_bonus: int, points_lost_per_second: int = TIMED_POINTS_LOST_PER_SECOND
) -> int:
    if elapsed_seconds <= 0 or max_bonus <= 0 or points_lost_per_second <= 0:
        return max(0, max_bonus)
    return max(0, max_bonus - elapsed_seconds * points_lost_per_second)


def timed_max_bonus(draw_count: int) -> int:
    if draw_count == DrawMode.ONE.value:
        return TIMED_MAX_BONUS_DRAW_ONE
    return TIMED_MAX_BONUS_DRAW_THREE


def action_for_move(source: SourceKind, destination: DestinationKind) -> Optional[ScoringAction]:
    return _MOVE_ACTIONS.get((source, destination))
