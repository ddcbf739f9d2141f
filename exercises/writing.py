"""Answer stores for free-text writing tasks (summarize, essay)."""

import random
from typing import ClassVar

from exercises.base import AnswerStore, failure
from models import (
    EssayExercise,
    FailureReason,
    SummarizeExercise,
    ValidationFailure,
    WordLimit,
)
from text_metrics import TextMetrics, is_single_sentence, measure


WritingExercise = SummarizeExercise | EssayExercise


class FreeTextAnswer(AnswerStore):
    """A single free-text answer checked against a word limit."""

    noun: ClassVar[str] = "answer"
    single_sentence: ClassVar[bool] = False

    text: str = ""

    @classmethod
    def from_definition(cls, definition: WritingExercise, rng: random.Random | None = None):
        return cls()

    def write(self, text: str) -> bool:
        if text == self.text:
            return False
        self.text = text
        return True

    def metrics(self) -> TextMetrics:
        return measure(self.text)

    def incomplete_reason(self, definition: WritingExercise) -> ValidationFailure | None:
        limit: WordLimit = definition.word_limit
        word_count = self.metrics().word_count
        if word_count < limit.min:
            return failure(
                FailureReason.TOO_FEW_WORDS,
                f"Your {self.noun} must be at least {limit.min} words.",
            )
        if limit.max is not None and word_count > limit.max:
            return failure(
                FailureReason.TOO_MANY_WORDS,
                f"Your {self.noun} must be at most {limit.max} words.",
            )
        if self.single_sentence and not is_single_sentence(self.text):
            return failure(
                FailureReason.MULTIPLE_SENTENCES,
                f"Your {self.noun} must be a single sentence.",
            )
        return None

    def retained_text(self) -> str | None:
        return self.text


class SummaryAnswer(FreeTextAnswer):
    """Summarize written text: one sentence within the word limit."""

    noun: ClassVar[str] = "summary"
    single_sentence: ClassVar[bool] = True


class EssayAnswer(FreeTextAnswer):
    noun: ClassVar[str] = "essay"
