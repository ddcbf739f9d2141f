from typing import Callable, Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from exercises import AnswerStore, blank_list
from models import (
    ExerciseType,
    FailureReason,
    MoveEvent,
    ProgressRecord,
    Score,
    ValidationFailure,
)
from session import SessionController, SessionListener
from ui.components import (
    ExerciseMenu,
    ExercisePanel,
    ProgressTable,
    ResultPanel,
    StatusLine,
    WelcomeScreen,
    exercise_title,
    is_writing,
)
from ui.styles import (
    DEFAULT_THEME,
    create_success_header,
    create_time_up_header,
)

Edit = Callable[[AnswerStore], bool]


def match_id(candidates: list[str], raw: str) -> str:
    """Return the candidate equal to `raw` ignoring case, or `raw` itself."""
    for candidate in candidates:
        if candidate.lower() == raw.lower():
            return candidate
    return raw


def parse_single_choice(parts: list[str]) -> Optional[Edit]:
    """`pick A` or just `A`."""
    if len(parts) == 2 and parts[0] == "pick":
        raw = parts[1]
    elif len(parts) == 1:
        raw = parts[0]
    else:
        return None
    return lambda answer: answer.select(match_id(answer.option_ids, raw))


def parse_multi_choice(parts: list[str]) -> Optional[Edit]:
    """`pick A` toggles option A."""
    if len(parts) == 2 and parts[0] == "pick":
        raw = parts[1]
    elif len(parts) == 1:
        raw = parts[0]
    else:
        return None
    return lambda answer: answer.toggle(match_id(answer.option_ids, raw))


def parse_move(parts: list[str]) -> Optional[MoveEvent]:
    """`move <list> <index> <list> <index>`."""
    if len(parts) != 5 or parts[0] != "move":
        return None
    try:
        return MoveEvent(
            source_list=parts[1],
            source_index=int(parts[2]),
            dest_list=parts[3],
            dest_index=int(parts[4]),
        )
    except ValueError:
        return None


def parse_reorder(parts: list[str]) -> Optional[Edit]:
    event = parse_move(parts)
    if event is None:
        return None
    return lambda answer: answer.move(event)


def parse_drag_blank(parts: list[str]) -> Optional[Edit]:
    """`place A 1`, `remove 1`, or a raw `move` between choices and blanks."""
    if len(parts) == 3 and parts[0] == "place":
        raw_choice, blank_id = parts[1], parts[2]
        return lambda answer: answer.place(
            match_id(answer.unplaced + [c for c in answer.blanks.values() if c], raw_choice),
            blank_id,
        )
    if len(parts) == 2 and parts[0] == "remove":
        blank_id = parts[1]
        return lambda answer: answer.remove(blank_id)
    if len(parts) == 5 and parts[0] == "move":
        # Bare blank numbers name their drop list
        parts = [blank_list(p) if i in (1, 3) and p.isdigit() else p for i, p in enumerate(parts)]
    event = parse_move(parts)
    if event is None:
        return None
    return lambda answer: answer.move(event)


def parse_dropdown_blank(parts: list[str]) -> Optional[Edit]:
    """`pick 2 b` selects option b for blank 2."""
    if len(parts) != 3 or parts[0] != "pick" or not parts[1].isdigit():
        return None
    blank_index = int(parts[1]) - 1
    raw = parts[2]

    def edit(answer) -> bool:
        if not 0 <= blank_index < len(answer.options_per_blank):
            return False
        return answer.choose(
            blank_index, match_id(answer.options_per_blank[blank_index], raw)
        )

    return edit


def parse_writing(parts: list[str], line: str) -> Optional[Edit]:
    """`write <text>` replaces the response, `add <text>` appends to it."""
    if not parts or parts[0] not in ("write", "add"):
        return None
    text = line.strip()[len(parts[0]):].strip()
    if parts[0] == "write":
        return lambda answer: answer.write(text)
    return lambda answer: answer.write(f"{answer.text} {text}".strip())


class PracticeUI(SessionListener):
    """Main UI orchestrator for PTE practice sessions."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(theme=DEFAULT_THEME)
        # Command parsers by exercise type
        self._parsers: dict[ExerciseType, Callable[[list[str], str], Optional[Edit]]] = {
            ExerciseType.SINGLE_CHOICE: lambda parts, line: parse_single_choice(parts),
            ExerciseType.MULTI_CHOICE: lambda parts, line: parse_multi_choice(parts),
            ExerciseType.REORDER: lambda parts, line: parse_reorder(parts),
            ExerciseType.DRAG_BLANK: lambda parts, line: parse_drag_blank(parts),
            ExerciseType.DROPDOWN_BLANK: lambda parts, line: parse_dropdown_blank(parts),
            ExerciseType.SUMMARIZE: parse_writing,
            ExerciseType.ESSAY: parse_writing,
        }
        self._writing = False

    # Session listener callbacks

    def on_validation_failure(self, failure: ValidationFailure) -> None:
        self.show_error(failure.message)

    def on_expired(self) -> None:
        self.console.print()
        self.console.print(create_time_up_header())
        if self._writing:
            message = "Your time has expired. Please submit your answer now."
        else:
            message = "Your time has expired. Type 'submit' to see your score."
        self.console.print(Text(message, style="error"))

    def on_submitted(self, score: Score) -> None:
        self.console.print(create_success_header())

    # Screens

    def show_welcome(self, exercise_count: int, attempted_count: int) -> None:
        self.console.print(WelcomeScreen(exercise_count, attempted_count))
        self.console.print()

    def choose_exercise(self, definitions: list, records: dict[str, ProgressRecord]):
        """Show the exercise menu and return the chosen definition.

        Returns:
            The chosen definition, or None if the user quits.
        """
        self.console.print(ExerciseMenu(definitions, records))
        by_id = {definition.id: definition for definition in definitions}

        while True:
            user_input = self.console.input(
                Text("Exercise: ", style="prompt")
            ).strip()

            if user_input.lower() == "q":
                return None
            if user_input.isdigit() and 1 <= int(user_input) <= len(definitions):
                return definitions[int(user_input) - 1]
            if user_input in by_id:
                return by_id[user_input]

            self.console.print(
                Text(
                    f"Please enter 1-{len(definitions)} or an exercise id (or 'q' to quit)\n",
                    style="error",
                )
            )

    def run_session(self, session: SessionController) -> bool:
        """Drive one session from start to result.

        A submission closed by the time limit has already been reported
        through on_validation_failure; the session ends without a result.

        Returns:
            False if the user quit, True to carry on practicing.
        """
        self._writing = is_writing(session.definition.type)
        parser = self._parsers[ExerciseType(session.definition.type)]
        session.start()

        try:
            while not session.submitted:
                state = session.snapshot()
                self.console.print(ExercisePanel(state))
                self.console.print(StatusLine(state))

                line = self.console.input(
                    Text("> ", style="prompt")
                ).strip()
                command = line.lower()

                if command == "q":
                    return False
                if command == "submit":
                    session.submit()
                    failure = session.last_failure
                    if failure and failure.reason == FailureReason.SUBMISSION_CLOSED:
                        return True
                    continue
                if not line:
                    continue

                edit = parser(line.split(), line)
                if edit is None:
                    self.show_error(f"Unknown command: {line}")
                elif not session.accepts_edits:
                    self.show_info("Time is up. Your answer can no longer be changed.")
                elif not session.apply(edit):
                    self.show_info("Nothing changed.")
        finally:
            session.close()

        state = session.snapshot()
        self.console.print(ResultPanel(state, session.ledger.get(session.definition.id)))
        return True

    def show_progress(self, records: dict[str, ProgressRecord], definitions: list) -> None:
        if not records:
            self.show_info("No exercises attempted yet.")
            return
        titles = {d.id: exercise_title(d.type) for d in definitions}
        self.console.print(ProgressTable(records, titles))

    def show_exercise_list(self, definitions: list, records: dict[str, ProgressRecord]) -> None:
        self.console.print(ExerciseMenu(definitions, records))

    def show_error(self, message: str) -> None:
        """Display an error message."""
        self.console.print(
            Panel(
                Text(message, style="error"),
                title="Error",
                border_style="error",
            )
        )

    def show_info(self, message: str) -> None:
        """Display an informational message."""
        self.console.print(Text(message, style="info"))

    def show_success(self, message: str) -> None:
        """Display a success message."""
        self.console.print(Text(message, style="success"))

    def show_quit_message(self) -> None:
        self.console.print()
        self.console.print(
            Text("Goodbye! Your progress has been saved.", style="muted")
        )

    def confirm(self, question: str) -> bool:
        answer = self.console.input(
            Text(f"{question} [y/N] ", style="prompt")
        ).strip()
        return answer.lower() in ("y", "yes")

    def clear_screen(self) -> None:
        """Clear the terminal screen."""
        self.console.clear()

    def wait_for_continue(self) -> None:
        """Wait for user to press Enter to continue."""
        self.console.input(
            Text("Press Enter to continue...", style="prompt")
        )
