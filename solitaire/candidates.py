from __future__ import annotations

from typing import List, Optional

from .cards import KING
from .move import Destination, DestinationKind, Selection, Source, SourceKind
from .rules import (
    GameVariant,
    can_move_to_foundation,
    can_move_to_free_cell,
    can_move_to_tableau,
    is_valid_descending_alternating_sequence,
    max_free_cell_transfer_count,
)
from .state import GameState, waste_draw_count_after_pick


def selection_matches_state(selection: Selection, state: GameState) -> bool:
    """True when the selection still describes the live top of its source."""
    if not selection.cards:
        return False
    source = selection.source
    ids = selection.card_ids()

    if source.kind == SourceKind.TABLEAU:
        if not 0 <= source.pile < len(state.tableau):
            return False
        pile = state.tableau[source.pile]
        if not 0 <= source.index < len(pile):
            return False
        return tuple(card.card_id for card in pile[source.index :]) == ids

    if len(ids) != 1:
        return False
    if source.kind == SourceKind.WASTE:
        top = state.waste[-1] if state.waste else None
    elif source.kind == SourceKind.FREE_CELL:
        top = state.free_cells[source.pile] if 0 <= source.pile < len(state.free_cells) else None
    elif source.kind == SourceKind.FOUNDATION:
        in_range = 0 <= source.pile < len(state.foundations)
        top = state.foundations[source.pile][-1] if in_range and state.foundations[source.pile] else None
    else:
        return False
    return top is not None and top.card_id == ids[0]


def candidate_selections(state: GameState) -> List[Selection]:
    selections: List[Selection] = []

    if state.waste:
        selections.append(Selection(Source.waste(), (state.waste[-1],)))

    for slot, card in enumerate(state.free_cells):
        if card is not None:
            selections.append(Selection(Source.free_cell(slot), (card,)))

    for pile, foundation in enumerate(state.foundations):
        if foundation:
            selections.append(Selection(Source.foundation(pile), (foundation[-1],)))

    for pile_index, pile in enumerate(state.tableau):
        for card_index, card in enumerate(pile):
            if not card.face_up:
                continue
            run = tuple(pile[card_index:])
            if not is_valid_descending_alternating_sequence(run):
                continue
            selections.append(Selection(Source.tableau(pile_index, card_index), run))

    return selections


def _allows_tableau_transfer(selection: Selection, destination_index: int, state: GameState) -> bool:
    if state.variant != GameVariant.FREECELL or len(selection.cards) <= 1:
        return True
    if not is_valid_descending_alternating_sequence(selection.cards):
        return False
    capacity = max_free_cell_transfer_count(state.free_cells, state.tableau, Destination.tableau(destination_index))
    return len(selection.cards) <= capacity


def is_redundant_empty_column_transfer(selection: Selection, destination_index: int, state: GameState) -> bool:
    """A whole King-led Klondike pile moving into another empty column changes nothing."""
    if state.variant != GameVariant.KLONDIKE:
        return False
    source = selection.source
    if source.kind != SourceKind.TABLEAU or source.pile == destination_index:
        return False
    if not (0 <= source.pile < len(state.tableau) and 0 <= destination_index < len(state.tableau)):
        return False
    if state.tableau[destination_index] or source.index != 0:
        return False
    if len(selection.cards) != len(state.tableau[source.pile]):
        return False
    return selection.cards[0].rank == KING


def legal_destinations(selection: Selection, state: GameState) -> List[Destination]:
    if not selection_matches_state(selection, state):
        return []
    moving = selection.cards[0]
    destinations: List[Destination] = []

    if len(selection.cards) == 1:
        for index, foundation in enumerate(state.foundations):
            if can_move_to_foundation(moving, foundation):
                destinations.append(Destination.foundation(index))

    for index, pile in enumerate(state.tableau):
        if selection.source.kind == SourceKind.TABLEAU and selection.source.pile == index:
            continue
        if not can_move_to_tableau(moving, pile, state.variant):
            continue
        if not _allows_tableau_transfer(selection, index, state):
            continue
        if is_redundant_empty_column_transfer(selection, index, state):
            continue
        destinations.append(Destination.tableau(index))

    if (
        state.variant == GameVariant.FREECELL
        and len(selection.cards) == 1
        and selection.source.kind != SourceKind.FREE_CELL
    ):
        for index, slot in enumerate(state.free_cells):
            if can_move_to_free_cell(slot):
                destinations.append(Destination.free_cell(index))

    return destinations


def simulated_state(
    selection: Selection, destination: Destination, state: GameState, draw_count: int = 3
) -> Optional[GameState]:
    """Copy of ``state`` with the move applied, or None when the move is stale or illegal."""
    if destination not in legal_destinations(selection, state):
        return None

    next_state = state.copy()
    source = selection.source

    if source.kind == SourceKind.WASTE:
        next_state.waste_draw_count = waste_draw_count_after_pick(state, draw_count)
        moving = [next_state.waste.pop()]
    elif source.kind == SourceKind.FREE_CELL:
        moving = [next_state.free_cells[source.pile]]
        next_state.free_cells[source.pile] = None
    elif source.kind == SourceKind.FOUNDATION:
        moving = [next_state.foundations[source.pile].pop()]
    else:
        pile = next_state.tableau[source.pile]
        moving = pile[source.index :]
        del pile[source.index :]
        if state.variant == GameVariant.KLONDIKE and pile and not pile[-1].face_up:
            pile[-1] = pile[-1].flipped(True)

    if destination.kind == DestinationKind.FOUNDATION:
        next_state.foundations[destination.index].append(moving[0])
    elif destination.kind == DestinationKind.TABLEAU:
        next_state.tableau[destination.index].extend(moving)
    else:
        next_state.free_cells[destination.index] = moving[0]

    return next_state


def mobility_score(state: GameState) -> int:
    return sum(len(legal_destinations(selection, state)) for selection in candidate_selections(state))
