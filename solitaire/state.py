from __future__ import annotations

import hashlib
import random
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from .cards import KING, Card, full_deck
from .multiset import CardMultiset
from .rules import FOUNDATION_COUNT, FREE_CELL_COUNT, DrawMode, GameVariant, Ruleset


@dataclass
class GameEvent:
    move_kind: str
    payload: dict


@dataclass
class GameState:
    variant: GameVariant
    stock: List[Card]
    waste: List[Card]
    foundations: List[List[Card]]
    tableau: List[List[Card]]
    free_cells: List[Optional[Card]] = field(default_factory=lambda: [None] * FREE_CELL_COUNT)
    waste_draw_count: int = 0
    score: int = 0
    moves_count: int = 0
    recycle_count: int = 0
    time_bonus_applied: bool = False
    rng_seed: Optional[int] = None
    event_log: List[GameEvent] = field(default_factory=list)

    def copy(self) -> "GameState":
        # Cards are immutable, so copying the containers is enough.
        return GameState(
            variant=self.variant,
            stock=list(self.stock),
            waste=list(self.waste),
            foundations=[list(f) for f in self.foundations],
            tableau=[list(p) for p in self.tableau],
            free_cells=list(self.free_cells),
            waste_draw_count=self.waste_draw_count,
            score=self.score,
            moves_count=self.moves_count,
            recycle_count=self.recycle_count,
            time_bonus_applied=self.time_bonus_applied,
            rng_seed=self.rng_seed,
            event_log=list(self.event_log),
        )

    def state_key(self) -> Tuple:
        def cards_key(cards: Iterable[Optional[Card]]) -> Tuple:
            return tuple(None if c is None else (c.card_id, c.face_up) for c in cards)

        return (
            self.variant.value,
            cards_key(self.stock),
            cards_key(self.waste),
            self.waste_draw_count,
            cards_key(self.free_cells),
            tuple(cards_key(f) for f in self.foundations),
            tuple(cards_key(p) for p in self.tableau),
            self.score,
            self.moves_count,
            self.recycle_count,
        )

    def stable_hash(self) -> str:
        return hashlib.sha256(repr(self.state_key()).encode("utf-8")).hexdigest()

    def all_cards(self) -> Iterable[Card]:
        yield from self.stock
        yield from self.waste
        for slot in self.free_cells:
            if slot is not None:
                yield slot
        for foundation in self.foundations:
            yield from foundation
        for pile in self.tableau:
            yield from pile

    def card_multiset(self) -> CardMultiset:
        return CardMultiset.from_cards(self.all_cards())

    def foundation_card_count(self) -> int:
        return sum(len(f) for f in self.foundations)

    def empty_tableau_count(self) -> int:
        return sum(1 for pile in self.tableau if not pile)

    def has_face_down_tableau_cards(self) -> bool:
        return any(not card.face_up for pile in self.tableau for card in pile)

    def is_won(self) -> bool:
        return all(len(f) == KING for f in self.foundations)


def empty_state(variant: GameVariant = GameVariant.KLONDIKE) -> GameState:
    return GameState(
        variant=variant,
        stock=[],
        waste=[],
        foundations=[[] for _ in range(FOUNDATION_COUNT)],
        tableau=[[] for _ in range(variant.tableau_piles)],
    )


def _deal_klondike(deck: List[Card]) -> Tuple[List[List[Card]], List[Card]]:
    tableau: List[List[Card]] = [[] for _ in range(GameVariant.KLONDIKE.tableau_piles)]
    for pile_index in range(len(tableau)):
        for card_index in range(pile_index + 1):
            card = deck.pop()
            tableau[pile_index].append(card.flipped(card_index == pile_index))
    stock = [card.flipped(False) for card in deck]
    return tableau, stock


def _deal_freecell(deck: List[Card]) -> List[List[Card]]:
    tableau: List[List[Card]] = [[] for _ in range(GameVariant.FREECELL.tableau_piles)]
    for card_index in range(len(deck)):
        tableau[card_index % len(tableau)].append(deck.pop().flipped(True))
    return tableau


def new_game(ruleset: Ruleset | None = None, rng_seed: Optional[int] = None) -> GameState:
    ruleset = ruleset or Ruleset()
    rng = random.Random(rng_seed)
    deck = full_deck()
    rng.shuffle(deck)
    state = empty_state(ruleset.variant)
    state.rng_seed = rng_seed
    if ruleset.variant == GameVariant.KLONDIKE:
        state.tableau, state.stock = _deal_klondike(deck)
    else:
        state.tableau = _deal_freecell(deck)
    return state


def drawn_from_stock(state: GameState, draw_count: int) -> Optional[GameState]:
    """Return the state after one stock tap that draws, or None if the stock is empty."""
    if not state.stock:
        return None
    next_state = state.copy()
    drawn = min(max(1, draw_count), len(next_state.stock))
    for _ in range(drawn):
        next_state.waste.append(next_state.stock.pop().flipped(True))
    next_state.waste_draw_count = drawn
    return next_state


def recycled_waste(state: GameState) -> Optional[GameState]:
    """Return the state after turning the waste back over into the stock."""
    if state.stock or not state.waste:
        return None
    next_state = state.copy()
    next_state.stock = [card.flipped(False) for card in reversed(next_state.waste)]
    next_state.waste = []
    next_state.waste_draw_count = 0
    return next_state


def stock_tap(state: GameState, draw_count: int) -> Optional[GameState]:
    if state.stock:
        return drawn_from_stock(state, draw_count)
    return recycled_waste(state)


def waste_draw_count_after_pick(state: GameState, draw_count: int) -> int:
    """``waste_draw_count`` once the waste top has been taken from ``state``."""
    remaining = max(0, len(state.waste) - 1)
    if draw_count == DrawMode.ONE.value:
        return min(1, remaining)
    return max(0, state.waste_draw_count - 1)
