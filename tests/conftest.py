"""Shared pytest fixtures for the PTE Practice test suite."""

import pytest

import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from countdown import TickScheduler
from ledger import ProgressLedger
from models import (
    Choice,
    DragBlankExercise,
    DropdownBlankExercise,
    EssayExercise,
    MultiChoiceExercise,
    Option,
    ReorderExercise,
    Sentence,
    SingleChoiceExercise,
    SummarizeExercise,
    WordLimit,
)
from storage import init_schema, get_progress_repo


class ManualTickHandle:
    def __init__(self, callback):
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualTickScheduler(TickScheduler):
    """Tick scheduler driven by the test instead of wall-clock time."""

    def __init__(self):
        self.pending: list[ManualTickHandle] = []

    def schedule(self, delay, callback) -> ManualTickHandle:
        handle = ManualTickHandle(callback)
        self.pending.append(handle)
        return handle

    def advance(self, seconds: int = 1) -> None:
        """Fire one pending tick per second, in scheduling order."""
        for _ in range(seconds):
            due = [h for h in self.pending if not h.cancelled]
            self.pending = []
            for handle in due:
                handle.callback()

    def fire_stale(self) -> None:
        """Run cancelled callbacks too, as a racing timer thread could."""
        handles, self.pending = self.pending, []
        for handle in handles:
            handle.callback()


@pytest.fixture
def scheduler() -> ManualTickScheduler:
    return ManualTickScheduler()


@pytest.fixture
def single_choice_exercise() -> SingleChoiceExercise:
    """Create a single-choice question whose correct option is B."""
    return SingleChoiceExercise(
        id="mcs-test",
        prompt="Choose the best answer.",
        text="What colour is the sky on a clear day?",
        time_limit_seconds=60,
        options=[
            Option(id="A", text="Green"),
            Option(id="B", text="Blue", is_correct=True),
            Option(id="C", text="Red"),
        ],
    )


@pytest.fixture
def multi_choice_exercise() -> MultiChoiceExercise:
    """Create a multi-choice question with correct options X and Y."""
    return MultiChoiceExercise(
        id="mcm-test",
        prompt="Select all correct answers.",
        time_limit_seconds=60,
        options=[
            Option(id="X", text="First", is_correct=True),
            Option(id="Y", text="Second", is_correct=True),
            Option(id="Z", text="Third"),
        ],
    )


@pytest.fixture
def reorder_exercise() -> ReorderExercise:
    """Create a three-sentence reorder exercise in order S1, S2, S3."""
    return ReorderExercise(
        id="ro-test",
        prompt="Restore the original order.",
        time_limit_seconds=120,
        sentences=[
            Sentence(id="S1", text="First sentence."),
            Sentence(id="S2", text="Second sentence."),
            Sentence(id="S3", text="Third sentence."),
        ],
        correct_order=["S1", "S2", "S3"],
    )


@pytest.fixture
def drag_blank_exercise() -> DragBlankExercise:
    """Create a two-blank drag exercise expecting A in [1] and B in [2]."""
    return DragBlankExercise(
        id="fib-drag-test",
        prompt="Drag words into the blanks.",
        text="The [1] sat on the [2].",
        time_limit_seconds=90,
        choices=[
            Choice(id="A", text="cat"),
            Choice(id="B", text="mat"),
            Choice(id="C", text="dog"),
        ],
        correct_order=["A", "B"],
    )


@pytest.fixture
def dropdown_blank_exercise() -> DropdownBlankExercise:
    """Create a two-blank dropdown exercise expecting a, then b."""
    return DropdownBlankExercise(
        id="fib-dropdown-test",
        prompt="Select the answer for each blank.",
        text="Rain [1] the streets and [2] the air.",
        time_limit_seconds=90,
        options_per_blank=[
            [Option(id="a", text="wets", is_correct=True), Option(id="b", text="dries")],
            [Option(id="a", text="heats"), Option(id="b", text="cools", is_correct=True)],
        ],
    )


@pytest.fixture
def summarize_exercise() -> SummarizeExercise:
    return SummarizeExercise(
        id="swt-test",
        prompt="Summarize the passage in one sentence.",
        text="A passage about something.",
        time_limit_seconds=600,
    )


@pytest.fixture
def essay_exercise() -> EssayExercise:
    return EssayExercise(
        id="essay-test",
        prompt="Write an essay.",
        text="Discuss a topic.",
        time_limit_seconds=1200,
        word_limit=WordLimit(min=3, max=10),
    )


@pytest.fixture
def test_db_path(tmp_path) -> Path:
    """Create a temporary database path for testing."""
    db_path = tmp_path / "test_practice.db"
    init_schema(db_path)
    return db_path


@pytest.fixture
def ledger(test_db_path) -> ProgressLedger:
    """Create an empty ledger backed by the temporary database."""
    return ProgressLedger.load(get_progress_repo(test_db_path))
