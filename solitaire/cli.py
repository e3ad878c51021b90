from __future__ import annotations

import argparse
import logging
from typing import Optional

from .autofinish import can_auto_finish, next_auto_finish_move
from .engine import apply_move
from .hints import HintKind, best_hint
from .move import Move
from .rules import DrawMode, GameVariant, Ruleset
from .state import GameState, new_game

logger = logging.getLogger(__name__)


def _stock_move(state: GameState) -> Move:
    return Move.draw() if state.stock else Move.recycle()


def _choose_move(state: GameState, rules: Ruleset) -> Optional[Move]:
    if can_auto_finish(state):
        planned = next_auto_finish_move(state)
        return planned.as_move() if planned else None

    hint = best_hint(state, rules.draw_count)
    if hint is None:
        return None
    if hint.kind == HintKind.STOCK_TAP:
        return _stock_move(state)
    return hint.move.as_move()


def run_game(rules: Ruleset, seed: Optional[int] = None, max_moves: int = 500) -> GameState:
    state = new_game(ruleset=rules, rng_seed=seed)
    for _ in range(max_moves):
        if state.is_won():
            break
        move = _choose_move(state, rules)
        if move is None:
            logger.info("no advisable move left after %d moves", state.moves_count)
            break
        logger.debug("move %d: %s", state.moves_count + 1, move.kind.value)
        state = apply_move(state, move, rules)
    return state


def main(argv: Optional[list] = None) -> None:
    parser = argparse.ArgumentParser(description="Let the hint advisor play a solitaire deal on its own.")
    parser.add_argument("--variant", choices=[v.value for v in GameVariant], default=GameVariant.KLONDIKE.value)
    parser.add_argument("--draw", type=int, choices=[m.value for m in DrawMode], default=DrawMode.THREE.value)
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible deals.")
    parser.add_argument("--max-moves", type=int, default=500, help="Stop after this many moves.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every move.")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    rules = Ruleset(variant=GameVariant(args.variant), draw_count=args.draw, timed=False)
    state = run_game(rules, seed=args.seed, max_moves=args.max_moves)
    print(f"Game finished after {state.moves_count} moves")
    print("Won" if state.is_won() else "Not won")
    print("Foundation cards:", state.foundation_card_count())
    print("Score:", state.score)


if __name__ == "__main__":
    main()
