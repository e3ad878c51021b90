from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from .cards import ACE, KING, Card
from .move import Destination, DestinationKind

FOUNDATION_COUNT = 4
FREE_CELL_COUNT = 4


class GameVariant(str, Enum):
    KLONDIKE = "klondike"
    FREECELL = "freecell"

    @property
    def tableau_piles(self) -> int:
        return 7 if self == GameVariant.KLONDIKE else 8

    @property
    def has_free_cells(self) -> bool:
        return self == GameVariant.FREECELL

    @property
    def has_stock(self) -> bool:
        return self == GameVariant.KLONDIKE


class DrawMode(int, Enum):
    ONE = 1
    THREE = 3


@dataclass(frozen=True)
class Ruleset:
    variant: GameVariant = GameVariant.KLONDIKE
    draw_count: int = DrawMode.THREE.value
    max_recycles: Optional[int] = None
    timed: bool = True

    def __post_init__(self) -> None:
        if self.draw_count not in (DrawMode.ONE.value, DrawMode.THREE.value):
            raise ValueError(f"draw_count must be 1 or 3, got {self.draw_count}")
        if self.max_recycles is not None and self.max_recycles < 0:
            raise ValueError("max_recycles must be non-negative")

    def tableau_piles(self) -> int:
        return self.variant.tableau_piles

    def has_free_cells(self) -> bool:
        return self.variant.has_free_cells

    def has_stock(self) -> bool:
        return self.variant.has_stock


def can_move_to_foundation(card: Card, foundation: Sequence[Card]) -> bool:
    if not foundation:
        return card.rank == ACE
    top = foundation[-1]
    return top.suit == card.suit and card.rank == top.rank + 1


def _stacks_on(card: Card, top: Card) -> bool:
    return top.face_up and top.is_red != card.is_red and card.rank == top.rank - 1


def can_move_to_tableau(card: Card, pile: Sequence[Card], variant: GameVariant = GameVariant.KLONDIKE) -> bool:
    if not pile:
        # The only tableau difference between variants: FreeCell takes anything on an empty column.
        return variant == GameVariant.FREECELL or card.rank == KING
    return _stacks_on(card, pile[-1])


def can_move_to_free_cell(slot: Optional[Card]) -> bool:
    return slot is None


def is_valid_descending_alternating_sequence(cards: Sequence[Card]) -> bool:
    for upper, lower in zip(cards, cards[1:]):
        if upper.is_red == lower.is_red:
            return False
        if upper.rank != lower.rank + 1:
            return False
    return True


def max_free_cell_transfer_count(
    free_cells: Sequence[Optional[Card]], tableau: Sequence[Sequence[Card]], destination: Destination
) -> int:
    empty_free_cells = sum(1 for slot in free_cells if slot is None)
    empty_tableau = sum(1 for pile in tableau if not pile)
    if (
        destination.kind == DestinationKind.TABLEAU
        and 0 <= destination.index < len(tableau)
        and not tableau[destination.index]
    ):
        empty_tableau = max(0, empty_tableau - 1)
    return (empty_free_cells + 1) * (1 << empty_tableau)
