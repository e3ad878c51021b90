from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from . import scoring
from .candidates import legal_destinations, selection_matches_state, simulated_state
from .cards import SUITS, Card
from .move import Destination, DestinationKind, Move, MoveKind, Selection, Source, SourceKind
from .rules import DrawMode, GameVariant, Ruleset
from .state import GameEvent, GameState, drawn_from_stock, recycled_waste

logger = logging.getLogger(__name__)


def is_legal_move(state: GameState, move: Move, ruleset: Ruleset | None = None) -> Tuple[bool, str]:
    ruleset = ruleset or Ruleset(variant=state.variant)
    if state.is_won():
        return False, "game already finished"

    if move.kind == MoveKind.DRAW:
        if not state.variant.has_stock:
            return False, "variant has no stock"
        if not state.stock:
            return False, "stock is empty"
        return True, ""

    if move.kind == MoveKind.RECYCLE:
        if not state.variant.has_stock:
            return False, "variant has no stock"
        if state.stock:
            return False, "stock is not empty"
        if not state.waste:
            return False, "waste is empty"
        if ruleset.max_recycles is not None and state.recycle_count >= ruleset.max_recycles:
            return False, "no recycles left"
        return True, ""

    if move.kind == MoveKind.FLIP:
        if move.pile is None or not 0 <= move.pile < len(state.tableau):
            return False, "invalid pile"
        pile = state.tableau[move.pile]
        if not pile:
            return False, "pile is empty"
        if pile[-1].face_up:
            return False, "top card already face up"
        return True, ""

    if move.kind != MoveKind.MOVE or move.selection is None or move.destination is None:
        return False, "invalid move payload"
    if not selection_matches_state(move.selection, state):
        return False, "selection does not match the board"
    if move.destination not in legal_destinations(move.selection, state):
        return False, "destination does not accept the selection"
    return True, ""


def _score(state: GameState, action: Optional[scoring.ScoringAction]) -> None:
    # Only Klondike keeps a running score.
    if action is None or state.variant != GameVariant.KLONDIKE:
        return
    state.score = scoring.applying(action, state.score)


def _apply_time_bonus_if_won(state: GameState, ruleset: Ruleset, elapsed_seconds: Optional[int]) -> None:
    if not state.is_won() or state.time_bonus_applied:
        return
    state.time_bonus_applied = True
    if not ruleset.timed or elapsed_seconds is None:
        return
    bonus = scoring.time_bonus(elapsed_seconds, scoring.timed_max_bonus(ruleset.draw_count))
    state.score = scoring.clamped(state.score + bonus)
    logger.debug("won after %ss, time bonus %d", elapsed_seconds, bonus)


def _apply_transfer(state: GameState, move: Move, ruleset: Ruleset) -> GameState:
    selection = move.selection
    destination = move.destination
    source = selection.source
    exposed_face_down = (
        state.variant == GameVariant.KLONDIKE
        and source.kind == SourceKind.TABLEAU
        and source.index > 0
        and not state.tableau[source.pile][source.index - 1].face_up
    )

    next_state = simulated_state(selection, destination, state, ruleset.draw_count)
    if next_state is None:
        raise ValueError("illegal move: simulation rejected the transfer")

    _score(next_state, scoring.action_for_move(source.kind, destination.kind))
    if exposed_face_down:
        _score(next_state, scoring.ScoringAction.TURN_OVER_TABLEAU_CARD)
    next_state.moves_count += 1
    next_state.event_log.append(
        GameEvent(
            move_kind=MoveKind.MOVE.value,
            payload={
                "source": [source.kind.value, source.pile, source.index],
                "cards": list(selection.card_ids()),
                "destination": [destination.kind.value, destination.index],
            },
        )
    )
    return next_state


def _apply_draw(state: GameState, ruleset: Ruleset) -> GameState:
    next_state = drawn_from_stock(state, ruleset.draw_count)
    next_state.moves_count += 1
    next_state.event_log.append(GameEvent(move_kind=MoveKind.DRAW.value, payload={"count": next_state.waste_draw_count}))
    return next_state


def _apply_recycle(state: GameState, ruleset: Ruleset) -> GameState:
    next_state = recycled_waste(state)
    next_state.moves_count += 1
    next_state.recycle_count += 1
    if ruleset.draw_count == DrawMode.ONE.value:
        _score(next_state, scoring.ScoringAction.RECYCLE_WASTE_IN_DRAW_ONE)
    next_state.event_log.append(GameEvent(move_kind=MoveKind.RECYCLE.value, payload={}))
    return next_state


def _apply_flip(state: GameState, pile_index: int) -> GameState:
    next_state = state.copy()
    pile = next_state.tableau[pile_index]
    pile[-1] = pile[-1].flipped(True)
    next_state.moves_count += 1
    _score(next_state, scoring.ScoringAction.TURN_OVER_TABLEAU_CARD)
    next_state.event_log.append(GameEvent(move_kind=MoveKind.FLIP.value, payload={"pile": pile_index}))
    return next_state


def apply_move(
    state: GameState, move: Move, ruleset: Ruleset | None = None, elapsed_seconds: Optional[int] = None
) -> GameState:
    ruleset = ruleset or Ruleset(variant=state.variant)
    legal, reason = is_legal_move(state, move, ruleset)
    if not legal:
        raise ValueError(f"illegal move: {reason}")

    if move.kind == MoveKind.DRAW:
        return _apply_draw(state, ruleset)
    if move.kind == MoveKind.RECYCLE:
        return _apply_recycle(state, ruleset)
    if move.kind == MoveKind.FLIP:
        return _apply_flip(state, move.pile)

    next_state = _apply_transfer(state, move, ruleset)
    _apply_time_bonus_if_won(next_state, ruleset, elapsed_seconds)
    return next_state


def _card_by_id(card_id: int) -> Card:
    return Card.make(SUITS[card_id // 13], card_id % 13 + 1)


def _move_from_event(event: GameEvent) -> Move:
    if event.move_kind == MoveKind.DRAW.value:
        return Move.draw()
    if event.move_kind == MoveKind.RECYCLE.value:
        return Move.recycle()
    if event.move_kind == MoveKind.FLIP.value:
        return Move.flip(event.payload["pile"])
    if event.move_kind == MoveKind.MOVE.value:
        kind, pile, index = event.payload["source"]
        source = Source(SourceKind(kind), pile=pile, index=index)
        cards = tuple(_card_by_id(card_id) for card_id in event.payload["cards"])
        dest_kind, dest_index = event.payload["destination"]
        return Move.transfer(Selection(source, cards), Destination(DestinationKind(dest_kind), dest_index))
    raise ValueError(f"Unknown event kind {event.move_kind}")


def replay_event_log(initial_state: GameState, events: List[GameEvent], ruleset: Ruleset | None = None) -> GameState:
    state = initial_state.copy()
    for event in events:
        state = apply_move(state, _move_from_event(event), ruleset)
    return state
