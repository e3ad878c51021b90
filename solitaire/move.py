from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .cards import Card


class SourceKind(str, Enum):
    WASTE = "WASTE"
    FREE_CELL = "FREE_CELL"
    FOUNDATION = "FOUNDATION"
    TABLEAU = "TABLEAU"


@dataclass(frozen=True)
class Source:
    """Where a selection was picked up.

    ``pile`` is the free-cell slot, foundation pile or tableau pile; ``index``
    is only meaningful for tableau sources (first card of the picked-up run).
    """

    kind: SourceKind
    pile: int = 0
    index: int = 0

    @staticmethod
    def waste() -> "Source":
        return Source(SourceKind.WASTE)

    @staticmethod
    def free_cell(slot: int) -> "Source":
        return Source(SourceKind.FREE_CELL, pile=slot)

    @staticmethod
    def foundation(pile: int) -> "Source":
        return Source(SourceKind.FOUNDATION, pile=pile)

    @staticmethod
    def tableau(pile: int, index: int) -> "Source":
        return Source(SourceKind.TABLEAU, pile=pile, index=index)

    def sort_key(self) -> int:
        if self.kind == SourceKind.WASTE:
            return 0
        if self.kind == SourceKind.FREE_CELL:
            return 50 + self.pile
        if self.kind == SourceKind.FOUNDATION:
            return 100 + self.pile
        return 1000 + self.pile * 100 + self.index


@dataclass(frozen=True)
class Selection:
    source: Source
    cards: Tuple[Card, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.cards, tuple):
            object.__setattr__(self, "cards", tuple(self.cards))

    @property
    def lead(self) -> Optional[Card]:
        return self.cards[0] if self.cards else None

    def card_ids(self) -> Tuple[int, ...]:
        return tuple(card.card_id for card in self.cards)

    def contains_card(self, card_id: int) -> bool:
        return any(card.card_id == card_id for card in self.cards)


class DestinationKind(str, Enum):
    FOUNDATION = "FOUNDATION"
    TABLEAU = "TABLEAU"
    FREE_CELL = "FREE_CELL"


_DESTINATION_ORDER = {
    DestinationKind.FOUNDATION: 0,
    DestinationKind.TABLEAU: 1,
    DestinationKind.FREE_CELL: 2,
}


@dataclass(frozen=True)
class Destination:
    kind: DestinationKind
    index: int

    @staticmethod
    def foundation(index: int) -> "Destination":
        return Destination(DestinationKind.FOUNDATION, index)

    @staticmethod
    def tableau(index: int) -> "Destination":
        return Destination(DestinationKind.TABLEAU, index)

    @staticmethod
    def free_cell(index: int) -> "Destination":
        return Destination(DestinationKind.FREE_CELL, index)

    def sort_key(self) -> Tuple[int, int]:
        return _DESTINATION_ORDER[self.kind], self.index


class MoveKind(str, Enum):
    MOVE = "MOVE"
    DRAW = "DRAW"
    RECYCLE = "RECYCLE"
    FLIP = "FLIP"


@dataclass(frozen=True)
class Move:
    kind: MoveKind
    selection: Optional[Selection] = None
    destination: Optional[Destination] = None
    pile: Optional[int] = None

    @staticmethod
    def draw() -> "Move":
        return Move(MoveKind.DRAW)

    @staticmethod
    def recycle() -> "Move":
        return Move(MoveKind.RECYCLE)

    @staticmethod
    def flip(pile: int) -> "Move":
        return Move(MoveKind.FLIP, pile=pile)

    @staticmethod
    def transfer(selection: Selection, destination: Destination) -> "Move":
        return Move(MoveKind.MOVE, selection=selection, destination=destination)
