from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from .cards import DECK_SIZE, Card, card_id_for


def _validate_counts(counts: Sequence[int]) -> None:
    if len(counts) != DECK_SIZE:
        raise ValueError(f"multiset length must be {DECK_SIZE}")
    if any(c < 0 for c in counts):
        raise ValueError("multiset counts must be non-negative")


@dataclass
class CardMultiset:
    """Count of each (suit, rank) identity, indexed like ``card_id_for``."""

    counts: List[int]

    def __post_init__(self) -> None:
        _validate_counts(self.counts)

    @classmethod
    def empty(cls) -> "CardMultiset":
        return cls([0] * DECK_SIZE)

    @classmethod
    def full_deck(cls) -> "CardMultiset":
        return cls([1] * DECK_SIZE)

    @classmethod
    def from_cards(cls, cards: Iterable[Card]) -> "CardMultiset":
        counts = [0] * DECK_SIZE
        for card in cards:
            counts[card_id_for(card.suit, card.rank)] += 1
        return cls(counts)

    def to_compact(self) -> List[Tuple[int, int]]:
        return [(idx, c) for idx, c in enumerate(self.counts) if c]

    def add(self, other: "CardMultiset") -> "CardMultiset":
        return CardMultiset([a + b for a, b in zip(self.counts, other.counts)])

    def missing_from(self, other: "CardMultiset") -> List[int]:
        return [idx for idx, (a, b) in enumerate(zip(self.counts, other.counts)) if a < b]

    def duplicates(self) -> List[int]:
        return [idx for idx, c in enumerate(self.counts) if c > 1]

    def total(self) -> int:
        return sum(self.counts)

    def is_full_deck(self) -> bool:
        return all(c == 1 for c in self.counts)

    def copy(self) -> "CardMultiset":
        return CardMultiset(list(self.counts))

    def __eq__(self, other: object) -> bool:
        return isinstance(other, CardMultiset) and self.counts == other.counts
