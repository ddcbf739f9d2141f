from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ExerciseType(str, Enum):
    SINGLE_CHOICE = "single_choice"
    MULTI_CHOICE = "multi_choice"
    REORDER = "reorder"
    DRAG_BLANK = "drag_blank"
    DROPDOWN_BLANK = "dropdown_blank"
    SUMMARIZE = "summarize"
    ESSAY = "essay"


# ============================================================================
# Exercise Definitions
# ============================================================================


class Option(BaseModel):
    """A selectable option with its ground-truth correctness."""

    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    is_correct: bool = False


class Sentence(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    text: str


class Choice(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    text: str


class WordLimit(BaseModel):
    """Inclusive word-count bounds. A missing max is unbounded."""

    model_config = ConfigDict(frozen=True)

    min: int = Field(default=0, ge=0)
    max: int | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def check_bounds(self) -> "WordLimit":
        if self.max is not None and self.max < self.min:
            raise ValueError(f"word limit max {self.max} is below min {self.min}")
        return self


class BaseExercise(BaseModel):
    """Fields shared by every exercise definition."""

    model_config = ConfigDict(frozen=True)

    id: str
    prompt: str
    time_limit_seconds: int | None = Field(default=None, ge=0)


class SingleChoiceExercise(BaseExercise):
    type: Literal["single_choice"] = "single_choice"
    text: str = ""
    options: list[Option]


class MultiChoiceExercise(BaseExercise):
    type: Literal["multi_choice"] = "multi_choice"
    text: str = ""
    options: list[Option]

    @property
    def correct_ids(self) -> list[str]:
        return [opt.id for opt in self.options if opt.is_correct]


class ReorderExercise(BaseExercise):
    """Paragraph reorder: restore `correct_order` from shuffled sentences."""

    type: Literal["reorder"] = "reorder"
    sentences: list[Sentence]
    correct_order: list[str]


class DragBlankExercise(BaseExercise):
    """Text with [n] placeholders filled by dragging choices.

    The choice expected in blank `n` is `correct_order[n - 1]`.
    """

    type: Literal["drag_blank"] = "drag_blank"
    text: str
    choices: list[Choice]
    correct_order: list[str]

    def expected_choice(self, blank_id: str) -> str | None:
        index = int(blank_id) - 1
        if 0 <= index < len(self.correct_order):
            return self.correct_order[index]
        return None


class DropdownBlankExercise(BaseExercise):
    """Text with [n] placeholders, each answered from its own option list."""

    type: Literal["dropdown_blank"] = "dropdown_blank"
    text: str
    options_per_blank: list[list[Option]]


class SummarizeExercise(BaseExercise):
    type: Literal["summarize"] = "summarize"
    text: str = ""
    word_limit: WordLimit = Field(default_factory=lambda: WordLimit(min=5, max=75))


class EssayExercise(BaseExercise):
    type: Literal["essay"] = "essay"
    text: str = ""
    word_limit: WordLimit


ExerciseDefinition = Annotated[
    Union[
        SingleChoiceExercise,
        MultiChoiceExercise,
        ReorderExercise,
        DragBlankExercise,
        DropdownBlankExercise,
        SummarizeExercise,
        EssayExercise,
    ],
    Field(discriminator="type"),
]


# ============================================================================
# Results and Progress
# ============================================================================


class Score(BaseModel):
    """A percentage plus the raw counts that produced it."""

    percentage: float = Field(ge=0.0, le=100.0)
    earned: float = 0.0
    possible: float = 0.0
    breakdown: dict[str, float] = Field(default_factory=dict)


class ProgressRecord(BaseModel):
    exercise_id: str
    attempts: int = Field(ge=1)
    best_score: float


class FailureReason(str, Enum):
    NOTHING_SELECTED = "nothing_selected"
    TOO_FEW_SELECTED = "too_few_selected"
    SENTENCES_UNPLACED = "sentences_unplaced"
    BLANKS_UNFILLED = "blanks_unfilled"
    TOO_FEW_WORDS = "too_few_words"
    TOO_MANY_WORDS = "too_many_words"
    MULTIPLE_SENTENCES = "multiple_sentences"
    SUBMISSION_CLOSED = "submission_closed"


class ValidationFailure(BaseModel):
    """A user-correctable reason why a submission was refused."""

    reason: FailureReason
    message: str


class SessionStatus(str, Enum):
    READY = "ready"
    RUNNING = "running"
    EXPIRED = "expired"
    SUBMITTED = "submitted"


class MoveEvent(BaseModel):
    """One drag gesture: take the element at (source_list, source_index)
    and drop it at (dest_list, dest_index)."""

    source_list: str
    source_index: int
    dest_list: str
    dest_index: int

    @property
    def is_noop(self) -> bool:
        return (
            self.source_list == self.dest_list
            and self.source_index == self.dest_index
        )


class SessionState(BaseModel):
    """Read-only snapshot of one session handed to the presentation layer."""

    definition: ExerciseDefinition
    answer: Any
    status: SessionStatus
    seconds_left: int
    submitted: bool = False
    result: Score | None = None
