import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from solitaire.autofinish import next_auto_finish_move
from solitaire.cards import ACE, KING, Suit
from solitaire.cli import main, run_game
from solitaire.engine import apply_move, is_legal_move, replay_event_log
from solitaire.move import Destination, Move, MoveKind, Selection, Source
from solitaire.rules import GameVariant, Ruleset
from solitaire.state import new_game

from helpers import almost_won, board, card


def test_new_klondike_deal_layout():
    state = new_game(ruleset=Ruleset(), rng_seed=42)

    assert [len(pile) for pile in state.tableau] == [1, 2, 3, 4, 5, 6, 7]
    for pile in state.tableau:
        assert pile[-1].face_up
        assert not any(c.face_up for c in pile[:-1])
    assert len(state.stock) == 24
    assert not any(c.face_up for c in state.stock)
    assert state.waste == []
    assert state.card_multiset().is_full_deck()


def test_new_freecell_deal_layout():
    state = new_game(ruleset=Ruleset(variant=GameVariant.FREECELL), rng_seed=42)

    assert [len(pile) for pile in state.tableau] == [7, 7, 7, 7, 6, 6, 6, 6]
    assert all(c.face_up for pile in state.tableau for c in pile)
    assert state.stock == [] and state.free_cells == [None] * 4
    assert state.card_multiset().is_full_deck()


def test_same_seed_deals_the_same_game():
    assert new_game(rng_seed=5).stable_hash() == new_game(rng_seed=5).stable_hash()


def test_draw_updates_stock_and_waste():
    rules = Ruleset(draw_count=3)
    state = new_game(ruleset=rules, rng_seed=7)

    move = Move.draw()
    legal, reason = is_legal_move(state, move, rules)
    assert legal, reason

    next_state = apply_move(state, move, rules)
    assert len(next_state.stock) == 21
    assert len(next_state.waste) == 3
    assert all(c.face_up for c in next_state.waste)
    assert next_state.waste_draw_count == 3
    assert next_state.moves_count == 1
    assert len(state.stock) == 24, "input state untouched"


def test_recycle_costs_points_in_draw_one_only():
    five, nine = card(Suit.HEARTS, 5), card(Suit.CLUBS, 9)

    state = board(waste=[five, nine], score=150)
    recycled = apply_move(state, Move.recycle(), Ruleset(draw_count=1))
    assert recycled.score == 50
    assert recycled.waste == []
    assert [c.card_id for c in recycled.stock] == [nine.card_id, five.card_id]
    assert not any(c.face_up for c in recycled.stock)
    assert recycled.recycle_count == 1

    recycled = apply_move(state, Move.recycle(), Ruleset(draw_count=3))
    assert recycled.score == 150


def test_recycle_limit():
    state = board(waste=[card(Suit.HEARTS, 5)])
    assert is_legal_move(state, Move.recycle(), Ruleset(max_recycles=0)) == (False, "no recycles left")
    assert is_legal_move(state, Move.recycle(), Ruleset(max_recycles=1)) == (True, "")


def test_waste_to_foundation_scores():
    ace = card(Suit.SPADES, ACE)
    state = board(waste=[ace])

    next_state = apply_move(state, Move.transfer(Selection(Source.waste(), (ace,)), Destination.foundation(0)))

    assert next_state.score == 10
    assert next_state.foundations[0][-1].card_id == ace.card_id
    assert next_state.event_log[-1].move_kind == MoveKind.MOVE.value


def test_tableau_to_foundation_scores_the_reveal_too():
    two = card(Suit.SPADES, 2)
    state = board(
        foundations=[[card(Suit.SPADES, ACE)], [], [], []],
        tableau=[[card(Suit.CLUBS, KING, face_up=False), two]],
    )

    next_state = apply_move(state, Move.transfer(Selection(Source.tableau(0, 1), (two,)), Destination.foundation(0)))

    assert next_state.score == 15
    assert next_state.tableau[0][-1].face_up


def test_freecell_keeps_no_score():
    ace = card(Suit.SPADES, ACE)
    state = board(GameVariant.FREECELL, tableau=[[ace]])

    next_state = apply_move(state, Move.transfer(Selection(Source.tableau(0, 0), (ace,)), Destination.foundation(0)))

    assert next_state.score == 0
    assert next_state.foundation_card_count() == 1


def test_flip_turns_the_top_card_over():
    state = board(tableau=[[card(Suit.CLUBS, KING, face_up=False)]])

    next_state = apply_move(state, Move.flip(0))

    assert next_state.tableau[0][0].face_up
    assert next_state.score == 5
    assert is_legal_move(next_state, Move.flip(0)) == (False, "top card already face up")


def test_illegal_moves_are_rejected():
    five = card(Suit.HEARTS, 5)
    state = board(waste=[five], tableau=[[card(Suit.HEARTS, 6)]])
    move = Move.transfer(Selection(Source.waste(), (five,)), Destination.tableau(0))

    assert is_legal_move(state, move) == (False, "destination does not accept the selection")
    with pytest.raises(ValueError):
        apply_move(state, move)

    assert is_legal_move(state, Move.draw()) == (False, "stock is empty")
    assert is_legal_move(board(GameVariant.FREECELL), Move.draw()) == (False, "variant has no stock")


def test_stale_selection_is_rejected():
    five = card(Suit.HEARTS, 5)
    state = board(waste=[five, card(Suit.CLUBS, 2)], tableau=[[card(Suit.CLUBS, 6)]])
    move = Move.transfer(Selection(Source.waste(), (five,)), Destination.tableau(0))

    assert is_legal_move(state, move) == (False, "selection does not match the board")


def test_time_bonus_on_win():
    rules = Ruleset(draw_count=3, timed=True)
    state = almost_won()
    while not state.is_won():
        state = apply_move(state, next_auto_finish_move(state).as_move(), rules, elapsed_seconds=100)

    assert state.score == 40 + 800
    assert state.time_bonus_applied


def test_untimed_game_gets_no_bonus():
    rules = Ruleset(draw_count=1, timed=False)
    state = almost_won()
    while not state.is_won():
        state = apply_move(state, next_auto_finish_move(state).as_move(), rules, elapsed_seconds=100)

    assert state.score == 40


def test_replay_is_deterministic():
    rules = Ruleset(draw_count=1, timed=False)
    final = run_game(rules, seed=11, max_moves=40)
    assert final.event_log

    replayed = replay_event_log(new_game(ruleset=rules, rng_seed=11), final.event_log, rules)

    assert replayed.state_key() == final.state_key()
    assert replayed.card_multiset().is_full_deck()


def test_autoplay_cli_reports_result(capsys):
    main(["--variant", "freecell", "--seed", "3", "--max-moves", "10"])
    out = capsys.readouterr().out
    assert "Game finished after" in out
    assert "Score: 0" in out
