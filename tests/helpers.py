import pathlib
import sys

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from solitaire.cards import KING, SUITS, Card, Suit
from solitaire.rules import GameVariant
from solitaire.state import GameState, empty_state


def card(suit: Suit, rank: int, face_up: bool = True) -> Card:
    return Card.make(suit, rank, face_up=face_up)


def board(variant=GameVariant.KLONDIKE, **zones) -> GameState:
    state = empty_state(variant)
    for name, value in zones.items():
        setattr(state, name, value)
    if len(state.tableau) < variant.tableau_piles:
        state.tableau = list(state.tableau) + [[] for _ in range(variant.tableau_piles - len(state.tableau))]
    if len(state.foundations) < 4:
        state.foundations = list(state.foundations) + [[] for _ in range(4 - len(state.foundations))]
    return state


def foundation_run(suit: Suit, top_rank: int):
    return [card(suit, rank) for rank in range(1, top_rank + 1)]


def almost_won() -> GameState:
    return board(
        foundations=[foundation_run(suit, KING - 1) for suit in SUITS],
        tableau=[[card(suit, KING)] for suit in SUITS],
    )
