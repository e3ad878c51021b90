"""Scoring of hypothetical moves and the total order used to rank them.

Ranking criteria, first difference wins:

1. reveals a face-down card
2. larger foundation progress
3. larger mobility gain
4. more empty tableau columns gained
5. clears its source pile
6. higher destination priority
7. higher resulting mobility
8. destination order: foundation, tableau, free cell, then index
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .candidates import legal_destinations, mobility_score, simulated_state
from .move import Destination, DestinationKind, Selection, SourceKind
from .rules import GameVariant
from .state import GameState


@dataclass(frozen=True)
class MoveEvaluation:
    destination: Destination
    reveals_face_down_card: bool = False
    clears_source_pile: bool = False
    empty_tableau_delta: int = 0
    foundation_progress_delta: int = 0
    mobility_delta: int = 0
    resulting_mobility: int = 0
    destination_priority: int = 0

    @property
    def has_forward_gain(self) -> bool:
        return self.reveals_face_down_card or self.foundation_progress_delta > 0 or self.empty_tableau_delta > 0


@dataclass(frozen=True)
class Baseline:
    mobility: int
    foundation_count: int
    empty_tableau_count: int

    @classmethod
    def of(cls, state: GameState) -> "Baseline":
        return cls(
            mobility=mobility_score(state),
            foundation_count=state.foundation_card_count(),
            empty_tableau_count=state.empty_tableau_count(),
        )


def ranking_key(evaluation: MoveEvaluation) -> Tuple:
    """Smaller is better."""
    return (
        not evaluation.reveals_face_down_card,
        -evaluation.foundation_progress_delta,
        -evaluation.mobility_delta,
        -evaluation.empty_tableau_delta,
        not evaluation.clears_source_pile,
        -evaluation.destination_priority,
        -evaluation.resulting_mobility,
        evaluation.destination.sort_key(),
    )


def is_better(lhs: MoveEvaluation, rhs: MoveEvaluation) -> bool:
    return ranking_key(lhs) < ranking_key(rhs)


def best_of(evaluations: Iterable[MoveEvaluation]) -> Optional[MoveEvaluation]:
    return min(evaluations, key=ranking_key, default=None)


def reveals_face_down_card(selection: Selection, state: GameState) -> bool:
    if state.variant != GameVariant.KLONDIKE:
        return False
    source = selection.source
    if source.kind != SourceKind.TABLEAU or source.index <= 0:
        return False
    return not state.tableau[source.pile][source.index - 1].face_up


def clears_source_pile(selection: Selection, state: GameState) -> bool:
    source = selection.source
    if source.kind != SourceKind.TABLEAU:
        return False
    return source.index == 0 and bool(state.tableau[source.pile])


def destination_priority(destination: Destination, state: GameState) -> int:
    if destination.kind == DestinationKind.TABLEAU:
        return 3 if not state.tableau[destination.index] else 1
    if destination.kind == DestinationKind.FOUNDATION:
        return 2
    return 0


def evaluate_move(
    selection: Selection,
    destination: Destination,
    state: GameState,
    baseline: Baseline,
    draw_count: int = 3,
) -> Optional[MoveEvaluation]:
    next_state = simulated_state(selection, destination, state, draw_count)
    if next_state is None:
        return None
    next_mobility = mobility_score(next_state)
    return MoveEvaluation(
        destination=destination,
        reveals_face_down_card=reveals_face_down_card(selection, state),
        clears_source_pile=clears_source_pile(selection, state),
        empty_tableau_delta=next_state.empty_tableau_count() - baseline.empty_tableau_count,
        foundation_progress_delta=next_state.foundation_card_count() - baseline.foundation_count,
        mobility_delta=next_mobility - baseline.mobility,
        resulting_mobility=next_mobility,
        destination_priority=destination_priority(destination, state),
    )


def evaluate_moves(
    selection: Selection,
    state: GameState,
    draw_count: int = 3,
    baseline: Optional[Baseline] = None,
) -> List[MoveEvaluation]:
    destinations = legal_destinations(selection, state)
    if not destinations:
        return []
    baseline = baseline or Baseline.of(state)
    evaluations: List[MoveEvaluation] = []
    for destination in destinations:
        evaluation = evaluate_move(selection, destination, state, baseline, draw_count)
        if evaluation is not None:
            evaluations.append(evaluation)
    return evaluations
