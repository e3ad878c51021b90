from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .advisor import best_advisable_move_evaluation
from .candidates import candidate_selections
from .evaluation import Baseline, MoveEvaluation, ranking_key
from .move import Destination, Move, Selection
from .rules import GameVariant
from .state import GameState, stock_tap

logger = logging.getLogger(__name__)


class HintKind(str, Enum):
    MOVE = "MOVE"
    STOCK_TAP = "STOCK_TAP"


@dataclass(frozen=True)
class HintMove:
    selection: Selection
    destination: Destination

    def as_move(self) -> Move:
        return Move.transfer(self.selection, self.destination)


@dataclass(frozen=True)
class Hint:
    kind: HintKind
    move: Optional[HintMove] = None

    @staticmethod
    def for_move(move: HintMove) -> "Hint":
        return Hint(HintKind.MOVE, move)

    @staticmethod
    def stock_tap() -> "Hint":
        return Hint(HintKind.STOCK_TAP)


def best_hint_move(state: GameState, draw_count: int = 3) -> Optional[HintMove]:
    baseline = Baseline.of(state)
    best: Optional[Tuple[Selection, MoveEvaluation]] = None
    for selection in candidate_selections(state):
        evaluation = best_advisable_move_evaluation(selection, state, draw_count, baseline)
        if evaluation is None:
            continue
        # Strictly better only, so the earliest selection wins a full tie.
        if best is None or ranking_key(evaluation) < ranking_key(best[1]):
            best = (selection, evaluation)
    if best is None:
        return None
    return HintMove(best[0], best[1].destination)


def stock_tap_lookahead_steps(state: GameState, draw_count: int = 3) -> int:
    cycle_cards = len(state.stock) + len(state.waste)
    if cycle_cards == 0:
        return 0
    draw_count = max(1, draw_count)
    draws_per_pass = (cycle_cards + draw_count - 1) // draw_count
    # Two passes, plus the recycle taps between them.
    return draws_per_pass * 2 + 2


def can_reveal_playable_move_via_stock_tap(state: GameState, draw_count: int = 3) -> bool:
    simulated = state
    for step in range(stock_tap_lookahead_steps(state, draw_count)):
        next_state = stock_tap(simulated, draw_count)
        if next_state is None:
            return False
        simulated = next_state
        if best_hint_move(simulated, draw_count) is not None:
            logger.debug("stock tap exposes a move after %d taps", step + 1)
            return True
    return False


def best_hint(state: GameState, draw_count: int = 3) -> Optional[Hint]:
    move = best_hint_move(state, draw_count)
    if move is not None:
        return Hint.for_move(move)
    if state.variant == GameVariant.KLONDIKE and can_reveal_playable_move_via_stock_tap(state, draw_count):
        return Hint.stock_tap()
    return None
