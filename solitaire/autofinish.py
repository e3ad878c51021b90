from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .move import Destination, DestinationKind, Move, Selection, Source, SourceKind
from .rules import can_move_to_foundation
from .state import GameState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AutoFinishMove:
    selection: Selection
    destination: Destination

    def as_move(self) -> Move:
        return Move.transfer(self.selection, self.destination)


def is_auto_finish_candidate(state: GameState) -> bool:
    if state.is_won():
        return False
    if state.stock or state.waste:
        return False
    return not state.has_face_down_tableau_cards()


def _next_move(state: GameState) -> Optional[AutoFinishMove]:
    best = None
    best_key = None
    for pile_index, pile in enumerate(state.tableau):
        if not pile or not pile[-1].face_up:
            continue
        card = pile[-1]
        for foundation_index, foundation in enumerate(state.foundations):
            if not can_move_to_foundation(card, foundation):
                continue
            key = (card.rank, pile_index, foundation_index)
            if best_key is None or key < best_key:
                best_key = key
                best = AutoFinishMove(
                    Selection(Source.tableau(pile_index, len(pile) - 1), (card,)),
                    Destination.foundation(foundation_index),
                )
    return best


def _apply(move: AutoFinishMove, state: GameState) -> bool:
    source = move.selection.source
    if source.kind != SourceKind.TABLEAU or move.destination.kind != DestinationKind.FOUNDATION:
        return False
    pile = state.tableau[source.pile]
    if not pile or source.index != len(pile) - 1 or pile[-1].card_id != move.selection.cards[0].card_id:
        return False
    foundation = state.foundations[move.destination.index]
    if not can_move_to_foundation(pile[-1], foundation):
        return False
    foundation.append(pile.pop())
    if pile and not pile[-1].face_up:
        pile[-1] = pile[-1].flipped(True)
    return True


def next_auto_finish_move(state: GameState) -> Optional[AutoFinishMove]:
    if not is_auto_finish_candidate(state):
        return None
    return _next_move(state)


def can_auto_finish(state: GameState) -> bool:
    if not is_auto_finish_candidate(state):
        return False
    scratch = state.copy()
    max_steps = sum(len(pile) for pile in scratch.tableau)
    for _ in range(max_steps):
        if scratch.is_won():
            return True
        move = _next_move(scratch)
        if move is None or not _apply(move, scratch):
            logger.debug("auto finish stuck with %d foundation cards", scratch.foundation_card_count())
            return False
    return scratch.is_won()
