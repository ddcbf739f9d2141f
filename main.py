import argparse
import logging
import signal
import sqlite3
import sys
from pathlib import Path

from rich.console import Console

from content_loader import DEFAULT_EXERCISES_PATH, find_exercise, load_exercises
from exercises import EngineConfig
from ledger import ProgressLedger
from session import SessionController
from storage import (
    DEFAULT_DB_PATH,
    get_progress_repo,
    get_writing_answer_repo,
    init_schema,
)
from ui import DEFAULT_THEME, PracticeUI

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with subcommands."""
    parser = argparse.ArgumentParser(description="PTE Practice")
    parser.add_argument(
        "--db",
        type=Path,
        default=DEFAULT_DB_PATH,
        help=f"SQLite database for progress (default: {DEFAULT_DB_PATH})",
    )
    parser.add_argument(
        "--data",
        type=Path,
        default=DEFAULT_EXERCISES_PATH,
        help=f"Exercise definitions JSON file (default: {DEFAULT_EXERCISES_PATH})",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    practice_parser = subparsers.add_parser("practice", help="Practice exercises (default)")
    practice_parser.add_argument(
        "exercise_id",
        nargs="?",
        default=None,
        help="Exercise to start directly instead of showing the menu",
    )

    subparsers.add_parser("list", help="List available exercises")
    subparsers.add_parser("progress", help="Show attempts and best scores")

    reset_parser = subparsers.add_parser("reset", help="Clear all progress")
    reset_parser.add_argument(
        "--yes",
        "-y",
        action="store_true",
        help="Do not ask for confirmation",
    )

    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )


def load_ledger(db_path: Path) -> ProgressLedger:
    """Load the progress ledger, creating the database schema if needed."""
    try:
        init_schema(db_path)
    except (sqlite3.Error, OSError) as e:
        logger.warning("Could not initialize database %s: %s", db_path, e)
    return ProgressLedger.load(get_progress_repo(db_path))


def create_sigint_handler(ui: PracticeUI):
    """Create a SIGINT handler that exits cleanly. Progress is saved per submission."""

    def sigint_handler(signum, frame):
        ui.show_quit_message()
        sys.exit(0)

    return sigint_handler


def run_practice(args, ui: PracticeUI) -> int:
    """Run the interactive practice subcommand."""
    try:
        definitions = load_exercises(args.data)
    except ValueError as e:
        ui.show_error(str(e))
        return 1

    if not definitions:
        ui.show_error(f"No exercises found in {args.data}.")
        return 1

    ledger = load_ledger(args.db)
    writing_repo = get_writing_answer_repo(args.db)
    config = EngineConfig()

    exercise_id = getattr(args, "exercise_id", None)
    if exercise_id is not None:
        definition = find_exercise(definitions, exercise_id)
        if definition is None:
            ui.show_error(f"Unknown exercise: {exercise_id}")
            return 1
        queue = [definition]
    else:
        ui.clear_screen()
        ui.show_welcome(len(definitions), len(ledger))
        queue = None

    signal.signal(signal.SIGINT, create_sigint_handler(ui))

    while True:
        if queue is not None:
            if not queue:
                break
            definition = queue.pop(0)
        else:
            definition = ui.choose_exercise(definitions, ledger.records())
            if definition is None:
                break

        session = SessionController(
            definition,
            ledger,
            config=config,
            listener=ui,
            writing_repository=writing_repo,
        )
        if not ui.run_session(session):
            break
        if queue is None:
            ui.wait_for_continue()

    ui.show_quit_message()
    return 0


def run_list(args, ui: PracticeUI) -> int:
    try:
        definitions = load_exercises(args.data)
    except ValueError as e:
        ui.show_error(str(e))
        return 1
    ledger = load_ledger(args.db)
    ui.show_exercise_list(definitions, ledger.records())
    return 0


def run_progress(args, ui: PracticeUI) -> int:
    """Show the progress table. Exercises missing from the data file still appear."""
    try:
        definitions = load_exercises(args.data)
    except ValueError as e:
        logger.warning("%s", e)
        definitions = []
    ledger = load_ledger(args.db)
    ui.show_progress(ledger.records(), definitions)
    return 0


def run_reset(args, ui: PracticeUI) -> int:
    if not args.yes and not ui.confirm("Clear all progress?"):
        ui.show_info("Progress kept.")
        return 0
    ledger = load_ledger(args.db)
    ledger.reset()
    ui.show_success("Progress cleared.")
    return 0


# Registry of subcommand runners
COMMANDS = {
    "practice": run_practice,
    "list": run_list,
    "progress": run_progress,
    "reset": run_reset,
}


def main(argv: list[str] | None = None) -> int:
    """Main entry point with CLI routing."""
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    ui = PracticeUI(Console(theme=DEFAULT_THEME))
    # Default to interactive practice
    runner = COMMANDS.get(args.command or "practice", run_practice)
    return runner(args, ui)


if __name__ == "__main__":
    sys.exit(main())
