"""Solitaire rules and move-advisory engine (Klondike, FreeCell)."""

from .cards import Card, Suit, full_deck
from .rules import (
    DrawMode,
    GameVariant,
    Ruleset,
    can_move_to_foundation,
    can_move_to_free_cell,
    can_move_to_tableau,
    is_valid_descending_alternating_sequence,
    max_free_cell_transfer_count,
)
from .move import Destination, Move, MoveKind, Selection, Source
from .state import GameEvent, GameState, empty_state, new_game
from .candidates import candidate_selections, legal_destinations, mobility_score, simulated_state
from .evaluation import MoveEvaluation, is_better
from .advisor import best_advisable_destination, best_destination
from .hints import Hint, HintKind, HintMove, best_hint, best_hint_move
from .autofinish import AutoFinishMove, can_auto_finish, next_auto_finish_move
from .engine import apply_move, is_legal_move, replay_event_log
from . import scoring

__all__ = [
    "Card",
    "Suit",
    "full_deck",
    "DrawMode",
    "GameVariant",
    "Ruleset",
    "can_move_to_foundation",
    "can_move_to_free_cell",
    "can_move_to_tableau",
    "is_valid_descending_alternating_sequence",
    "max_free_cell_transfer_count",
    "Destination",
    "Move",
    "MoveKind",
    "Selection",
    "Source",
    "GameEvent",
    "GameState",
    "empty_state",
    "new_game",
    "candidate_selections",
    "legal_destinations",
    "mobility_score",
    "simulated_state",
    "MoveEvaluation",
    "is_better",
    "best_advisable_destination",
    "best_destination",
    "Hint",
    "HintKind",
    "HintMove",
    "best_hint",
    "best_hint_move",
    "AutoFinishMove",
    "can_auto_finish",
    "next_auto_finish_move",
    "apply_move",
    "is_legal_move",
    "replay_event_log",
    "scoring",
]
