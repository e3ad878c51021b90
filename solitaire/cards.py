from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, List, Tuple

ACE = 1
JACK = 11
QUEEN = 12
KING = 13
RANKS = tuple(range(ACE, KING + 1))
DECK_SIZE = 52

_RANK_LABELS = {ACE: "A", JACK: "J", QUEEN: "Q", KING: "K"}


class Suit(str, Enum):
    SPADES = "spades"
    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"

    @property
    def is_red(self) -> bool:
        return self in (Suit.HEARTS, Suit.DIAMONDS)

    @property
    def index(self) -> int:
        return SUITS.index(self)

    @property
    def symbol(self) -> str:
        return _SUIT_SYMBOLS[self]


SUITS: Tuple[Suit, ...] = tuple(Suit)
_SUIT_SYMBOLS = {Suit.SPADES: "♠", Suit.HEARTS: "♥", Suit.DIAMONDS: "♦", Suit.CLUBS: "♣"}


def card_id_for(suit: Suit, rank: int) -> int:
    return suit.index * 13 + (rank - 1)


def rank_label(rank: int) -> str:
    return _RANK_LABELS.get(rank, str(rank))


@dataclass(frozen=True)
class Card:
    card_id: int
    suit: Suit
    rank: int
    face_up: bool = False

    def __post_init__(self) -> None:
        if not ACE <= self.rank <= KING:
            raise ValueError(f"rank must be in {ACE}..{KING}, got {self.rank}")
        if not isinstance(self.suit, Suit):
            raise ValueError(f"unknown suit {self.suit!r}")

    @property
    def is_red(self) -> bool:
        return self.suit.is_red

    def identity(self) -> Tuple[Suit, int]:
        return self.suit, self.rank

    def flipped(self, face_up: bool = True) -> "Card":
        if self.face_up == face_up:
            return self
        return replace(self, face_up=face_up)

    def label(self) -> str:
        return f"{rank_label(self.rank)}{self.suit.symbol}"

    @classmethod
    def make(cls, suit: Suit, rank: int, face_up: bool = True) -> "Card":
        return cls(card_id_for(suit, rank), suit, rank, face_up)


def is_red(card: Card) -> bool:
    return card.suit.is_red


def iter_full_deck(face_up: bool = False) -> Iterable[Card]:
    for suit in SUITS:
        for rank in RANKS:
            yield Card.make(suit, rank, face_up=face_up)


def full_deck(face_up: bool = False) -> List[Card]:
    return list(iter_full_deck(face_up=face_up))
