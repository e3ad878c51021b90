import pathlib
import sys

import pytest
from hypothesis import given, strategies as st

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from solitaire.cards import ACE, KING, QUEEN, SUITS, Suit
from solitaire.move import Destination
from solitaire.rules import (
    GameVariant,
    Ruleset,
    can_move_to_foundation,
    can_move_to_free_cell,
    can_move_to_tableau,
    is_valid_descending_alternating_sequence,
    max_free_cell_transfer_count,
)

from helpers import card, foundation_run

ranks = st.integers(min_value=1, max_value=13)
suits = st.sampled_from(SUITS)


def test_foundation_accepts_ace_on_empty_and_next_rank_of_same_suit():
    assert can_move_to_foundation(card(Suit.SPADES, ACE), [])
    assert not can_move_to_foundation(card(Suit.SPADES, 2), [])
    pile = foundation_run(Suit.HEARTS, 4)
    assert can_move_to_foundation(card(Suit.HEARTS, 5), pile)
    assert not can_move_to_foundation(card(Suit.DIAMONDS, 5), pile)
    assert not can_move_to_foundation(card(Suit.HEARTS, 6), pile)


@given(suit=suits, rank=ranks, top_suit=suits, top_rank=ranks, empty=st.booleans())
def test_foundation_rule_soundness(suit, rank, top_suit, top_rank, empty):
    moving = card(suit, rank)
    pile = [] if empty else [card(top_suit, top_rank)]
    expected = rank == ACE if empty else (suit == top_suit and rank == top_rank + 1)
    assert can_move_to_foundation(moving, pile) == expected


@given(suit=suits, rank=st.integers(min_value=2, max_value=12))
def test_empty_tableau_diverges_by_variant(suit, rank):
    moving = card(suit, rank)
    assert not can_move_to_tableau(moving, [], GameVariant.KLONDIKE)
    assert can_move_to_tableau(moving, [], GameVariant.FREECELL)


@given(suit=suits, rank=ranks, top_suit=suits, top_rank=ranks, top_face_up=st.booleans())
def test_non_empty_tableau_rule_is_shared_by_variants(suit, rank, top_suit, top_rank, top_face_up):
    moving = card(suit, rank)
    pile = [card(top_suit, top_rank, face_up=top_face_up)]
    expected = top_face_up and suit.is_red != top_suit.is_red and rank == top_rank - 1
    assert can_move_to_tableau(moving, pile, GameVariant.KLONDIKE) == expected
    assert can_move_to_tableau(moving, pile, GameVariant.FREECELL) == expected


def test_klondike_empty_tableau_takes_only_king():
    assert can_move_to_tableau(card(Suit.CLUBS, KING), [], GameVariant.KLONDIKE)
    assert not can_move_to_tableau(card(Suit.HEARTS, QUEEN), [], GameVariant.KLONDIKE)


def test_free_cell_must_be_empty():
    assert can_move_to_free_cell(None)
    assert not can_move_to_free_cell(card(Suit.SPADES, ACE))


def test_descending_alternating_sequence():
    assert is_valid_descending_alternating_sequence([card(Suit.CLUBS, 7)])
    assert is_valid_descending_alternating_sequence(
        [card(Suit.CLUBS, 7), card(Suit.HEARTS, 6), card(Suit.SPADES, 5)]
    )
    assert not is_valid_descending_alternating_sequence([card(Suit.CLUBS, 7), card(Suit.SPADES, 6)])
    assert not is_valid_descending_alternating_sequence([card(Suit.CLUBS, 7), card(Suit.HEARTS, 5)])


def test_supermove_capacity_two_cells_one_column():
    free_cells = [None, None, card(Suit.SPADES, ACE), card(Suit.CLUBS, ACE)]
    tableau = [[card(Suit.HEARTS, KING)], []] + [[card(SUITS[i % 4], 2 + i)] for i in range(6)]
    assert max_free_cell_transfer_count(free_cells, tableau, Destination.tableau(0)) == 6


def test_supermove_capacity_ignores_empty_destination_column():
    free_cells = [None, None, card(Suit.SPADES, ACE), card(Suit.CLUBS, ACE)]
    tableau = [[card(Suit.CLUBS, KING)], [], []] + [[card(SUITS[i % 4], 2 + i)] for i in range(5)]
    assert max_free_cell_transfer_count(free_cells, tableau, Destination.tableau(0)) == 12
    assert max_free_cell_transfer_count(free_cells, tableau, Destination.tableau(1)) == 6


def test_ruleset_validates_draw_count():
    assert Ruleset(draw_count=1).draw_count == 1
    with pytest.raises(ValueError):
        Ruleset(draw_count=2)
    assert Ruleset(variant=GameVariant.FREECELL).tableau_piles() == 8
