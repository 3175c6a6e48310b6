from __future__ import annotations

import argparse
import logging
import random
from typing import Callable, List, Optional

from .board import BOARD_SIZE, Board, Orientation
from .config import GameConfig, GameMode
from .engine import confirm_placement
from .hints import HintLadder
from .notation import (
    COLUMN_LETTERS,
    cell_label,
    final_stats,
    format_move,
    parse_cell_label,
    recent_moves,
    result_headline,
)
from .state import GameState, new_game, reset_game, reveal_rules

logger = logging.getLogger(__name__)

ARROWS = {
    Orientation.NORTH: "↑",
    Orientation.EAST: "→",
    Orientation.SOUTH: "↓",
    Orientation.WEST: "←",
}

HELP = """Commands:
  place <cell> <N|E|S|W>   confirm a stone, e.g. `place E5 N`
  hint                     next hint (three per game)
  moves                    recent moves
  board                    show the board
  new                      new game with new hidden rules
  quit                     leave"""


def render_board(board: Board) -> str:
    lines = []
    for row in range(BOARD_SIZE):
        cells = []
        for col in range(BOARD_SIZE):
            stone = board.rows[row][col]
            cells.append("·" if stone is None else ARROWS[stone.orientation])
        lines.append(f"{BOARD_SIZE - row} " + " ".join(cells))
    lines.append("  " + " ".join(COLUMN_LETTERS))
    return "\n".join(lines)


def render_status(state: GameState) -> str:
    parts = []
    for player in state.players:
        marker = "*" if player.player_id == state.current_player and not state.is_over else " "
        parts.append(f"{marker}P{player.player_id}: {player.stones_remaining} stones, {player.moves_taken} moves")
    return "  ".join(parts)


def render_game_over(state: GameState) -> str:
    lines = [result_headline(state)]
    for stats in final_stats(state):
        lines.append(f"P{stats.player_id}: {stats.stones_placed} stones in {stats.moves_taken} moves")
    lines.append("The rules were:")
    for rule in reveal_rules(state):
        lines.append(f"  {rule['name']}: {rule['description']}")
    return "\n".join(lines)


def explore(
    mode: GameMode | str = GameMode.SOLO,
    seed: Optional[int] = None,
    config: Optional[GameConfig] = None,
    max_moves: int = 500,
) -> GameState:
    """Play random placements until the game ends or ``max_moves`` attempts were made."""
    rng = random.Random(seed)
    state = new_game(mode=mode, config=config, rng_seed=seed)
    for _ in range(max_moves):
        if state.is_over:
            break
        empty = [(r, c) for r in range(BOARD_SIZE) for c in range(BOARD_SIZE) if not state.board.is_occupied(r, c)]
        if not empty:
            break
        row, col = rng.choice(empty)
        result = confirm_placement(state, row, col, rng.choice(list(Orientation)))
        state = result.state
    logger.debug("exploration stopped after %d attempts, phase %s", len(state.move_log), state.phase.value)
    return state


def _handle_place(state: GameState, args: List[str], output: Callable[[str], None]) -> GameState:
    if len(args) != 2:
        output("usage: place <cell> <N|E|S|W>")
        return state
    try:
        row, col = parse_cell_label(args[0])
        orientation = Orientation.parse(args[1])
    except ValueError as exc:
        output(str(exc))
        return state
    result = confirm_placement(state, row, col, orientation)
    if not result.ok:
        output(f"cannot place at {cell_label(row, col)}: {result.error.value}")
        return state
    output(format_move(result.move, state.mode))
    return result.state


def play(
    state: GameState,
    read: Callable[[str], str] = input,
    output: Callable[[str], None] = print,
    seed: Optional[int] = None,
) -> GameState:
    ladder = HintLadder(state.rule_set, random.Random(seed))
    output(render_board(state.board))
    output(render_status(state))
    while True:
        try:
            line = read("> ")
        except EOFError:
            return state
        words = line.split()
        if not words:
            continue
        command, args = words[0].lower(), words[1:]
        if command in ("quit", "exit", "q"):
            return state
        if command == "help":
            output(HELP)
        elif command == "place":
            was_over = state.is_over
            state = _handle_place(state, args, output)
            output(render_board(state.board))
            output(render_status(state))
            if state.is_over and not was_over:
                output(render_game_over(state))
        elif command == "hint":
            if ladder.remaining == 0:
                output("No hints left.")
            else:
                output(ladder.request())
        elif command == "moves":
            for move in recent_moves(state):
                output(format_move(move, state.mode))
        elif command == "board":
            output(render_board(state.board))
            output(render_status(state))
        elif command == "new":
            state = reset_game(state)
            ladder = HintLadder(state.rule_set)
            output(render_board(state.board))
            output(render_status(state))
        else:
            output(f"unknown command {command!r}, try `help`")


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Wuweiqi: place your stones, discover the hidden rules.")
    parser.add_argument("--mode", choices=[m.value for m in GameMode], default=GameMode.SOLO.value)
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible rule selection.")
    parser.add_argument("--stones", type=int, default=None, help="Stones per player.")
    parser.add_argument("--explore", action="store_true", help="Play random placements instead of reading commands.")
    parser.add_argument("--max-moves", type=int, default=500, help="Attempt limit for --explore.")
    parser.add_argument("--gui", action="store_true", help="Open the pygame window.")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG shows the hidden rules).")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    config = GameConfig(initial_stones=args.stones)

    if args.gui:
        from .gui import launch_gui

        launch_gui(mode=args.mode, seed=args.seed, config=config)
        return

    if args.explore:
        state = explore(mode=args.mode, seed=args.seed, config=config, max_moves=args.max_moves)
        print(render_board(state.board))
        print(f"Attempts: {len(state.move_log)}, legal: {sum(1 for m in state.move_log if m.legal)}")
        if state.is_over:
            print(render_game_over(state))
        else:
            print("No winner (attempt limit reached)")
        return

    state = new_game(mode=args.mode, config=config, rng_seed=args.seed)
    print(HELP)
    play(state, seed=args.seed)


if __name__ == "__main__":
    main()
