"""
Main entry point for playing Word Zen in the terminal.

Usage:
    python -m src.main
    python -m src.main config.yaml --category nature --seed 42 --verbose
"""

import argparse
import re
import sys
import time
from pathlib import Path
from typing import Optional, Tuple

import yaml

from .puzzle import Cell, render_grid
from .session import GameConfig, SessionController, Feedback, format_elapsed


COMMAND_HELP = "Enter a selection as 'row,col row,col' (n: new puzzle, ?: solution, q: quit)"


def load_config(config_path: str) -> GameConfig:
    """Load game configuration from a YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return GameConfig(**data)


def parse_selection(text: str) -> Optional[Tuple[Cell, Cell]]:
    """Parse 'r1,c1 r2,c2' (any non-digit separators) into two cells."""
    numbers = [int(n) for n in re.findall(r'\d+', text)]
    if len(numbers) != 4:
        return None
    return Cell(numbers[0], numbers[1]), Cell(numbers[2], numbers[3])


def print_feedback(item: Feedback) -> None:
    """Print the feedback events worth showing in a terminal."""
    if item.kind == "word-found":
        print(f"✓ Found {item.word}!")
    elif item.kind == "word-incorrect":
        print("✗ Not a target word")
    elif item.kind == "puzzle-complete":
        print("\n*** Puzzle complete! ***")


def print_board(controller: SessionController, show_solution: bool = False) -> None:
    """Print the grid, remaining words, score and elapsed time."""
    session = controller.state.session
    puzzle = session.puzzle

    if show_solution:
        highlight = [c for p in puzzle.placed_words for c in p.cells()]
    else:
        highlight = [c for p in puzzle.placed_words if p.found for c in p.cells()]

    header = "   " + " ".join(str(c % 10) for c in range(puzzle.size))
    rows = render_grid(puzzle.grid, highlight).split("\n")

    print()
    print(f"Level {controller.state.level} | {controller.state.theme} | "
          f"Score {session.score} | {format_elapsed(session.elapsed_seconds)}")
    print(header)
    for i, row in enumerate(rows):
        print(f"{i:>2} {row}")
    print()
    print(f"Words: {', '.join(puzzle.remaining_words) or '(none left)'}")
    if puzzle.found_words:
        print(f"Found: {', '.join(puzzle.found_words)}")


def print_generation_notes(controller: SessionController) -> None:
    """Print lookup and placement diagnostics (verbose mode)."""
    lookup = controller.last_lookup
    if lookup:
        print(f"Word source: {lookup.source} ({len(lookup.words)} candidates)")
        if lookup.error:
            print(f"⚠ Lookup fell back to static words: {lookup.error}")

    puzzle = controller.state.session.puzzle
    for warning in puzzle.warnings:
        print(f"⚠ {warning.message}")


def choose_category(controller: SessionController) -> Optional[str]:
    """Ask the player for a category key."""
    keys = list(controller.tables.categories)
    print("\nCategories:")
    for i, key in enumerate(keys, start=1):
        print(f"  {i}. {controller.tables.categories[key].name} ({key})")

    answer = input("Pick a category: ").strip().lower()
    if answer.isdigit() and 1 <= int(answer) <= len(keys):
        return keys[int(answer) - 1]
    if answer in keys:
        return answer
    return None


def puzzle_finished(controller: SessionController) -> bool:
    """True once the puzzle is solved or was generated with nothing to find."""
    session = controller.state.session
    if not session.puzzle.placed_words:
        print("\nNo words could be placed in this puzzle.")
        return True
    return session.complete


def play(controller: SessionController, category: str, verbose: bool = False) -> int:
    """Interactive loop: returns the final score."""
    controller.new_puzzle(category)
    last_tick = time.monotonic()
    show_solution = False
    fresh = True

    while True:
        # Catch the timer up on wall-clock seconds spent waiting for input
        now = time.monotonic()
        while now - last_tick >= 1.0:
            last_tick += 1.0
            controller.tick(now)

        if verbose and fresh:
            print_generation_notes(controller)
        fresh = False
        print_board(controller, show_solution)
        show_solution = False

        if puzzle_finished(controller):
            answer = input("\nPlay another? [y/N] ").strip().lower()
            if answer != "y":
                break
            controller.new_puzzle()
            last_tick = time.monotonic()
            fresh = True
            continue

        command = input(f"\n{COMMAND_HELP}\n> ").strip().lower()

        if command in ("q", "quit", "exit"):
            break
        if command == "n":
            controller.new_puzzle()
            last_tick = time.monotonic()
            fresh = True
            continue
        if command == "?":
            show_solution = True
            continue

        selection = parse_selection(command)
        if selection is None:
            print("Could not read that selection.")
            continue

        start, end = selection
        controller.select(start, end)

    return controller.state.session.score


def main():
    parser = argparse.ArgumentParser(
        description="Play a Word Zen word search puzzle",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  grid_size: 8
  points_per_letter: 15
  seed: 42
  lexicon:
    provider: datamuse   # datamuse | llm | none
    timeout: 3.0
        """
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Path to YAML configuration file (defaults are used when omitted)"
    )
    parser.add_argument(
        "--category", "-c",
        help="Category key to play (e.g. nature, pop, general)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible puzzles"
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Skip the remote word lookup and use the bundled word lists"
    )
    parser.add_argument(
        "--solution",
        action="store_true",
        help="Print the first puzzle's solution and exit"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print word source and placement diagnostics"
    )

    args = parser.parse_args()

    try:
        config = load_config(args.config) if args.config else GameConfig()
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    updates = {}
    if args.seed is not None:
        updates["seed"] = args.seed
    if args.offline:
        updates["lexicon"] = config.lexicon.model_copy(update={"provider": "none"})
    if updates:
        config = config.model_copy(update=updates)

    controller = SessionController.create(config=config)
    controller.add_listener(print_feedback)
    controller.start_game()

    category = args.category or choose_category(controller)
    if category not in controller.tables.categories:
        print(f"Error: unknown category '{category}'", file=sys.stderr)
        sys.exit(1)

    if args.solution:
        controller.new_puzzle(category)
        if args.verbose:
            print_generation_notes(controller)
        print_board(controller, show_solution=True)
        return 0

    try:
        score = play(controller, category, verbose=args.verbose)
    except (KeyboardInterrupt, EOFError):
        print("\nGame interrupted")
        session = controller.state.session
        score = session.score if session else 0

    print()
    print("=== Session Summary ===")
    print(f"Puzzles played: {controller.state.level}")
    print(f"Final score: {score}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
