from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .candidates import candidate_selections, legal_destinations, mobility_score, simulated_state
from .evaluation import (
    Baseline,
    MoveEvaluation,
    best_of,
    clears_source_pile,
    destination_priority,
    evaluate_moves,
    reveals_face_down_card,
)
from .move import Destination, DestinationKind, Selection, SourceKind
from .state import GameState


def best_move_evaluation(
    selection: Selection, state: GameState, draw_count: int = 3, baseline: Optional[Baseline] = None
) -> Optional[MoveEvaluation]:
    return best_of(evaluate_moves(selection, state, draw_count, baseline))


def best_destination(selection: Selection, state: GameState, draw_count: int = 3) -> Optional[Destination]:
    evaluation = best_move_evaluation(selection, state, draw_count)
    return evaluation.destination if evaluation else None


def best_advisable_move_evaluation(
    selection: Selection, state: GameState, draw_count: int = 3, baseline: Optional[Baseline] = None
) -> Optional[MoveEvaluation]:
    evaluations = evaluate_moves(selection, state, draw_count, baseline)
    return best_of(e for e in evaluations if is_advisable_move(selection, e, state, draw_count))


def best_advisable_destination(selection: Selection, state: GameState, draw_count: int = 3) -> Optional[Destination]:
    evaluation = best_advisable_move_evaluation(selection, state, draw_count)
    return evaluation.destination if evaluation else None


def is_advisable_move(selection: Selection, evaluation: MoveEvaluation, state: GameState, draw_count: int = 3) -> bool:
    source = selection.source
    destination = evaluation.destination

    if source.kind == SourceKind.FOUNDATION and destination.kind == DestinationKind.FOUNDATION:
        return False
    if evaluation.has_forward_gain:
        return True

    if source.kind == SourceKind.WASTE:
        return True
    if source.kind == SourceKind.FREE_CELL:
        return evaluation.mobility_delta >= 0
    if source.kind == SourceKind.FOUNDATION:
        if destination.kind != DestinationKind.TABLEAU:
            return False
        return is_foundation_rollback_advisable(selection, destination, state, draw_count)

    if destination.kind == DestinationKind.TABLEAU:
        return evaluation.mobility_delta > 1
    return evaluation.mobility_delta > 0


@dataclass(frozen=True)
class _RollbackContext:
    moved_card_id: int
    source_foundation: int
    destination_tableau: int


@dataclass(frozen=True)
class _Opportunity:
    selection: Selection
    destination: Destination
    reveals_face_down_card: bool
    clears_source_pile: bool
    foundation_progress: int
    mobility_delta: int
    empty_tableau_gain: int
    destination_priority: int
    resulting_mobility: int

    @property
    def is_forward_progress(self) -> bool:
        return self.reveals_face_down_card or self.foundation_progress > 0 or self.empty_tableau_gain > 0

    def ranking_key(self) -> Tuple:
        return (
            not self.reveals_face_down_card,
            -self.foundation_progress,
            -self.mobility_delta,
            -self.empty_tableau_gain,
            not self.clears_source_pile,
            -self.destination_priority,
            -self.resulting_mobility,
            self.selection.source.sort_key(),
            self.destination.sort_key(),
            self.selection.card_ids(),
        )


def _is_moved_card_refoundation(selection: Selection, destination: Destination, context: _RollbackContext) -> bool:
    source = selection.source
    return (
        source.kind == SourceKind.TABLEAU
        and source.pile == context.destination_tableau
        and selection.card_ids() == (context.moved_card_id,)
        and destination.kind == DestinationKind.FOUNDATION
    )


def _touches_rollback(selection: Selection, destination: Destination, context: _RollbackContext) -> bool:
    if selection.contains_card(context.moved_card_id):
        return True
    source = selection.source
    if source.kind == SourceKind.FOUNDATION and source.pile == context.source_foundation:
        return True
    if source.kind == SourceKind.TABLEAU and source.pile == context.destination_tableau:
        return True
    if destination.kind == DestinationKind.FOUNDATION:
        return destination.index == context.source_foundation
    if destination.kind == DestinationKind.TABLEAU:
        return destination.index == context.destination_tableau
    return False


def _best_forward_opportunity(
    state: GameState,
    baseline: Baseline,
    context: _RollbackContext,
    draw_count: int,
    skip: Callable[[Selection, Destination], bool],
) -> Optional[_Opportunity]:
    opportunities: List[_Opportunity] = []
    for selection in candidate_selections(state):
        for destination in legal_destinations(selection, state):
            if skip(selection, destination) or not _touches_rollback(selection, destination, context):
                continue
            next_state = simulated_state(selection, destination, state, draw_count)
            if next_state is None:
                continue
            resulting_mobility = mobility_score(next_state)
            opportunity = _Opportunity(
                selection=selection,
                destination=destination,
                reveals_face_down_card=reveals_face_down_card(selection, state),
                clears_source_pile=clears_source_pile(selection, state),
                foundation_progress=next_state.foundation_card_count() - baseline.foundation_count,
                mobility_delta=resulting_mobility - baseline.mobility,
                empty_tableau_gain=next_state.empty_tableau_count() - baseline.empty_tableau_count,
                destination_priority=destination_priority(destination, state),
                resulting_mobility=resulting_mobility,
            )
            if opportunity.is_forward_progress:
                opportunities.append(opportunity)
    return min(opportunities, key=_Opportunity.ranking_key, default=None)


def is_foundation_rollback_advisable(
    selection: Selection, destination: Destination, state: GameState, draw_count: int = 3
) -> bool:
    """A foundation card may come back down only when that opens a new forward move one ply later.

    Only follow-ups touching the rollback (the moved card, its old foundation or
    its new tableau pile) count, and replaying the moved card straight back up
    does not. The best such follow-up after the rollback must beat the best one
    already available beforehand.
    """
    if selection.source.kind != SourceKind.FOUNDATION or destination.kind != DestinationKind.TABLEAU:
        return False
    rollback_state = simulated_state(selection, destination, state, draw_count)
    if rollback_state is None:
        return False

    baseline = Baseline.of(state)
    context = _RollbackContext(
        moved_card_id=selection.cards[0].card_id,
        source_foundation=selection.source.pile,
        destination_tableau=destination.index,
    )

    best_after = _best_forward_opportunity(
        rollback_state,
        baseline,
        context,
        draw_count,
        skip=lambda s, d: _is_moved_card_refoundation(s, d, context),
    )
    if best_after is None:
        return False
    best_before = _best_forward_opportunity(state, baseline, context, draw_count, skip=lambda s, d: False)
    if best_before is None:
        return True
    return best_after.ranking_key() < best_before.ranking_key()
