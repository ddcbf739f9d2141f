from rich.text import Text
from rich.panel import Panel
from rich.table import Table
from rich.style import Style
from rich.align import Align
from rich.columns import Columns
from rich import box

from countdown import format_clock
from exercises import CHOICES, SOURCE, TARGET
from exercises.base import PLACEHOLDER_PATTERN
from models import ExerciseType, ProgressRecord, SessionState, SessionStatus
from text_metrics import measure, within_limit
from ui.styles import (
    PTE_BLUE,
    WRITING_GOLD,
    SUCCESS_GREEN,
    ERROR_RED,
    MUTED_GRAY,
    TEXT_WHITE,
    get_score_style,
    get_timer_style,
    get_zone_color,
)

EXERCISE_TITLES: dict[ExerciseType, str] = {
    ExerciseType.SUMMARIZE: "Summarize Written Text",
    ExerciseType.ESSAY: "Write Essay",
    ExerciseType.SINGLE_CHOICE: "Multiple Choice, Single Answer",
    ExerciseType.MULTI_CHOICE: "Multiple Choice, Multiple Answers",
    ExerciseType.REORDER: "Reorder Paragraphs",
    ExerciseType.DRAG_BLANK: "Fill in the Blanks (Drag)",
    ExerciseType.DROPDOWN_BLANK: "Fill in the Blanks (Dropdown)",
}

WRITING_TYPES = {ExerciseType.SUMMARIZE, ExerciseType.ESSAY}

COMMAND_HINTS: dict[ExerciseType, str] = {
    ExerciseType.SINGLE_CHOICE: "pick A | submit | q",
    ExerciseType.MULTI_CHOICE: "pick A (toggles) | submit | q",
    ExerciseType.REORDER: f"move {SOURCE} 0 {TARGET} 0 | submit | q",
    ExerciseType.DRAG_BLANK: "place A 1 | remove 1 | submit | q",
    ExerciseType.DROPDOWN_BLANK: "pick 1 a | submit | q",
    ExerciseType.SUMMARIZE: "write <text> | add <text> | submit | q",
    ExerciseType.ESSAY: "write <text> | add <text> | submit | q",
}


def exercise_title(exercise_type: ExerciseType | str) -> str:
    return EXERCISE_TITLES[ExerciseType(exercise_type)]


def is_writing(exercise_type: ExerciseType | str) -> bool:
    return ExerciseType(exercise_type) in WRITING_TYPES


def fill_placeholders(text: str, labels: dict[str, str | None]) -> Text:
    """Render [n] placeholders with their current label, or an empty slot."""
    rendered = Text()
    position = 0
    for match in PLACEHOLDER_PATTERN.finditer(text):
        rendered.append(text[position:match.start()], Style(color=TEXT_WHITE))
        blank_id = match.group(1)
        label = labels.get(blank_id)
        if label:
            rendered.append(f"[{blank_id}: {label}]", Style(color=SUCCESS_GREEN, bold=True))
        else:
            rendered.append(f"[{blank_id}: ______]", Style(color=MUTED_GRAY))
        position = match.end()
    rendered.append(text[position:], Style(color=TEXT_WHITE))
    return rendered


def correct_answer_text(definition) -> str:
    """Describe the expected answer of an auto-graded exercise."""
    exercise_type = ExerciseType(definition.type)
    if exercise_type in (ExerciseType.SINGLE_CHOICE, ExerciseType.MULTI_CHOICE):
        return ", ".join(
            f"{opt.id}. {opt.text}" for opt in definition.options if opt.is_correct
        )
    if exercise_type == ExerciseType.REORDER:
        return " → ".join(definition.correct_order)
    if exercise_type == ExerciseType.DRAG_BLANK:
        texts = {choice.id: choice.text for choice in definition.choices}
        return ", ".join(
            f"[{i}] {texts.get(choice_id, choice_id)}"
            for i, choice_id in enumerate(definition.correct_order, start=1)
        )
    if exercise_type == ExerciseType.DROPDOWN_BLANK:
        parts = []
        for i, options in enumerate(definition.options_per_blank, start=1):
            correct = [opt.text for opt in options if opt.is_correct]
            parts.append(f"[{i}] {' / '.join(correct) or '-'}")
        return ", ".join(parts)
    return ""


class ExercisePanel:
    """A styled panel for displaying an exercise and the current answer."""

    def __init__(self, state: SessionState):
        self.state = state
        self.exercise_type = ExerciseType(state.definition.type)
        self._body_renderers = {
            ExerciseType.SINGLE_CHOICE: self._render_single_choice,
            ExerciseType.MULTI_CHOICE: self._render_multi_choice,
            ExerciseType.REORDER: self._render_reorder,
            ExerciseType.DRAG_BLANK: self._render_drag_blank,
            ExerciseType.DROPDOWN_BLANK: self._render_dropdown_blank,
            ExerciseType.SUMMARIZE: self._render_writing,
            ExerciseType.ESSAY: self._render_writing,
        }

    def render(self) -> Panel:
        definition = self.state.definition
        content = Text()
        content.append(definition.prompt, Style(color=MUTED_GRAY, italic=True))
        content.append("\n\n")
        self._body_renderers[self.exercise_type](content)

        return Panel(
            Align.left(content),
            title=exercise_title(self.exercise_type),
            subtitle=COMMAND_HINTS[self.exercise_type],
            border_style=get_zone_color(is_writing(self.exercise_type)),
            box=box.HEAVY,
            padding=(1, 2),
        )

    def _append_passage(self, content: Text) -> None:
        text = getattr(self.state.definition, "text", "")
        if text:
            content.append(text, Style(color=TEXT_WHITE))
            content.append("\n\n")

    def _render_single_choice(self, content: Text) -> None:
        self._append_passage(content)
        selected = self.state.answer.selected
        for opt in self.state.definition.options:
            marker = "●" if opt.id == selected else "○"
            content.append(f"{marker} {opt.id}. ", Style(color=WRITING_GOLD, bold=True))
            content.append(opt.text, Style(color=TEXT_WHITE))
            content.append("\n")

    def _render_multi_choice(self, content: Text) -> None:
        self._append_passage(content)
        selected = set(self.state.answer.selected)
        for opt in self.state.definition.options:
            marker = "[x]" if opt.id in selected else "[ ]"
            content.append(f"{marker} {opt.id}. ", Style(color=WRITING_GOLD, bold=True))
            content.append(opt.text, Style(color=TEXT_WHITE))
            content.append("\n")

    def _render_reorder(self, content: Text) -> None:
        texts = {s.id: s.text for s in self.state.definition.sentences}
        for location in (SOURCE, TARGET):
            content.append(f"{location.capitalize()}\n", Style(color=PTE_BLUE, bold=True))
            ids = self.state.answer.ids_in(location)
            if not ids:
                content.append("  (empty)\n", Style(color=MUTED_GRAY))
            for i, sentence_id in enumerate(ids):
                content.append(f"  {i}. ", Style(color=WRITING_GOLD, bold=True))
                content.append(f"{sentence_id}: {texts[sentence_id]}\n", Style(color=TEXT_WHITE))
            content.append("\n")

    def _render_drag_blank(self, content: Text) -> None:
        definition = self.state.definition
        texts = {choice.id: choice.text for choice in definition.choices}
        labels = {
            blank_id: texts.get(choice_id) if choice_id else None
            for blank_id, choice_id in self.state.answer.blanks.items()
        }
        content.append(fill_placeholders(definition.text, labels))
        content.append("\n\n")
        content.append(f"{CHOICES.capitalize()}: ", Style(color=PTE_BLUE, bold=True))
        for i, choice_id in enumerate(self.state.answer.unplaced):
            content.append(f"{i}:{choice_id} ", Style(color=WRITING_GOLD, bold=True))
            content.append(f"{texts[choice_id]}   ", Style(color=TEXT_WHITE))
        content.append("\n")

    def _render_dropdown_blank(self, content: Text) -> None:
        definition = self.state.definition
        selections = self.state.answer.selections
        labels = {}
        for i, (options, selection) in enumerate(
            zip(definition.options_per_blank, selections), start=1
        ):
            labels[str(i)] = next(
                (opt.text for opt in options if opt.id == selection), None
            )
        content.append(fill_placeholders(definition.text, labels))
        content.append("\n\n")
        for i, options in enumerate(definition.options_per_blank, start=1):
            content.append(f"[{i}] ", Style(color=PTE_BLUE, bold=True))
            content.append(
                "  ".join(f"{opt.id}) {opt.text}" for opt in options),
                Style(color=TEXT_WHITE),
            )
            content.append("\n")

    def _render_writing(self, content: Text) -> None:
        self._append_passage(content)
        content.append("Your response:\n", Style(color=PTE_BLUE, bold=True))
        text = self.state.answer.text
        if text:
            content.append(text, Style(color=TEXT_WHITE))
        else:
            content.append("(nothing written yet)", Style(color=MUTED_GRAY))
        content.append("\n")

    def __rich__(self) -> Panel:
        return self.render()


class StatusLine:
    """Timer and, for writing tasks, the live word counter."""

    def __init__(self, state: SessionState):
        self.state = state

    def render(self) -> Text:
        line = Text()
        definition = self.state.definition
        if self.state.status == SessionStatus.EXPIRED:
            line.append("Time: 00:00 (expired)", Style(color=ERROR_RED, bold=True))
        elif definition.time_limit_seconds:
            seconds_left = self.state.seconds_left
            line.append(f"Time left: {format_clock(seconds_left)}", get_timer_style(seconds_left))
        else:
            line.append("No time limit", Style(color=MUTED_GRAY))

        if is_writing(definition.type):
            metrics = measure(self.state.answer.text)
            limit = definition.word_limit
            in_range = within_limit(metrics.word_count, limit.min, limit.max)
            bounds = f"{limit.min}-{limit.max}" if limit.max is not None else f"{limit.min}+"
            line.append("   ")
            line.append(
                f"Words: {metrics.word_count} ({bounds})",
                Style(color=SUCCESS_GREEN if in_range else ERROR_RED),
            )
            line.append(f"   Characters: {metrics.char_count}", Style(color=MUTED_GRAY))
        return line

    def __rich__(self) -> Text:
        return self.render()


class ResultPanel:
    """Score and correct answers after submission."""

    def __init__(self, state: SessionState, record: ProgressRecord | None = None):
        self.state = state
        self.record = record

    def render(self) -> Panel:
        score = self.state.result
        definition = self.state.definition
        content = Text()

        if is_writing(definition.type):
            content.append(
                "Your response has been saved.\n", Style(color=SUCCESS_GREEN, bold=True)
            )
        else:
            content.append("Score: ", Style(color=MUTED_GRAY))
            content.append(f"{score.percentage:.0f}%\n", get_score_style(score.percentage))
            for key, value in score.breakdown.items():
                content.append(f"  {key.replace('_', ' ')}: {value:g}\n", Style(color=MUTED_GRAY))
            content.append("\nCorrect answer: ", Style(color=MUTED_GRAY))
            content.append(correct_answer_text(definition), Style(color=SUCCESS_GREEN, bold=True))
            content.append("\n")

        if self.record is not None:
            content.append(
                f"\nAttempts: {self.record.attempts}   Best: {self.record.best_score:.0f}%",
                Style(color=WRITING_GOLD),
            )

        return Panel(
            Align.left(content),
            title="Result",
            border_style=SUCCESS_GREEN if score.percentage >= 50 else ERROR_RED,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()


class ExerciseMenu:
    """Numbered list of exercises with their best scores."""

    def __init__(self, definitions: list, records: dict[str, ProgressRecord]):
        self.definitions = definitions
        self.records = records

    def render(self) -> Panel:
        table = Table(
            show_header=True,
            header_style=Style(color=PTE_BLUE, bold=True),
            border_style=MUTED_GRAY,
            row_styles=[Style(), Style(dim=True)],
            box=box.HEAVY,
        )
        table.add_column("#", justify="right", style=Style(color=WRITING_GOLD, bold=True))
        table.add_column("Zone")
        table.add_column("Exercise", style=Style(color=TEXT_WHITE))
        table.add_column("ID", style=Style(color=MUTED_GRAY))
        table.add_column("Best", justify="center")

        for i, definition in enumerate(self.definitions, start=1):
            writing = is_writing(definition.type)
            record = self.records.get(definition.id)
            best = (
                Text(f"{record.best_score:.0f}%", style=get_score_style(record.best_score))
                if record
                else Text("-", style=Style(color=MUTED_GRAY))
            )
            table.add_row(
                str(i),
                Text("Writing" if writing else "Reading", style=get_zone_color(writing)),
                exercise_title(definition.type),
                definition.id,
                best,
            )

        return Panel(
            Align.center(table),
            title="PTE Practice",
            subtitle="Enter a number or exercise id ('q' to quit)",
            border_style=PTE_BLUE,
            box=box.HEAVY,
            padding=(1, 1),
        )

    def __rich__(self) -> Panel:
        return self.render()


class ProgressTable:
    """Attempts and best score for every attempted exercise."""

    def __init__(self, records: dict[str, ProgressRecord], titles: dict[str, str] | None = None):
        self.records = records
        self.titles = titles or {}

    def render(self) -> Panel:
        table = Table(
            show_header=True,
            header_style=Style(color=PTE_BLUE, bold=True),
            border_style=MUTED_GRAY,
            box=box.HEAVY,
        )
        table.add_column("Exercise", style=Style(color=TEXT_WHITE))
        table.add_column("Type", style=Style(color=MUTED_GRAY))
        table.add_column("Attempts", justify="right")
        table.add_column("Best Score", justify="center")

        for exercise_id in sorted(self.records):
            record = self.records[exercise_id]
            table.add_row(
                exercise_id,
                self.titles.get(exercise_id, "unknown"),
                str(record.attempts),
                Text(f"{record.best_score:.0f}%", style=get_score_style(record.best_score)),
            )

        return Panel(
            Align.center(table),
            title="Your Progress",
            border_style=WRITING_GOLD,
            box=box.HEAVY,
            padding=(1, 1),
        )

    def __rich__(self) -> Panel:
        return self.render()


class WelcomeScreen:
    """Welcome screen with banner and practice stats."""

    def __init__(self, exercise_count: int, attempted_count: int):
        self.exercise_count = exercise_count
        self.attempted_count = attempted_count

    def render(self) -> Panel:
        banner = Text()
        banner.append("PTE Practice\n", Style(color=PTE_BLUE, bold=True))
        banner.append(
            "Practice PTE Academic exam with interactive exercises\n\n",
            Style(color=TEXT_WHITE),
        )
        banner.append(
            "Your responses are saved locally on this machine.\n", Style(color=MUTED_GRAY)
        )

        stats = Table(show_header=False, border_style=MUTED_GRAY, box=box.ROUNDED)
        stats.add_column("Label", justify="center")
        stats.add_column("Value", justify="center")
        stats.add_row(
            Text("Exercises", style=Style(color=MUTED_GRAY)),
            Text(str(self.exercise_count), style=Style(color=WRITING_GOLD, bold=True)),
        )
        stats.add_row(
            Text("Attempted", style=Style(color=MUTED_GRAY)),
            Text(str(self.attempted_count), style=Style(color=WRITING_GOLD, bold=True)),
        )

        return Panel(
            Columns(
                [Align.center(banner), Align.center(stats)],
                align="center",
                padding=(1, 3),
            ),
            border_style=PTE_BLUE,
            box=box.HEAVY,
            padding=(1, 3),
        )

    def __rich__(self) -> Panel:
        return self.render()
