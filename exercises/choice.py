"""Answer stores for single- and multi-choice questions."""

import random

from pydantic import Field

from exercises.base import AnswerStore, failure
from models import (
    FailureReason,
    MultiChoiceExercise,
    SingleChoiceExercise,
    ValidationFailure,
)


class SingleChoiceAnswer(AnswerStore[SingleChoiceExercise]):
    """At most one selected option. Selecting again replaces the choice."""

    option_ids: list[str] = Field(default_factory=list)
    selected: str | None = None

    @classmethod
    def from_definition(
        cls, definition: SingleChoiceExercise, rng: random.Random | None = None
    ) -> "SingleChoiceAnswer":
        return cls(option_ids=[opt.id for opt in definition.options])

    def select(self, option_id: str) -> bool:
        if option_id not in self.option_ids:
            return False
        self.selected = option_id
        return True

    def incomplete_reason(
        self, definition: SingleChoiceExercise
    ) -> ValidationFailure | None:
        if self.selected is None:
            return failure(
                FailureReason.NOTHING_SELECTED,
                "Please select an option before submitting.",
            )
        return None


class MultiChoiceAnswer(AnswerStore[MultiChoiceExercise]):
    """A set of selected options, kept in the order they were picked."""

    option_ids: list[str] = Field(default_factory=list)
    selected: list[str] = Field(default_factory=list)

    @classmethod
    def from_definition(
        cls, definition: MultiChoiceExercise, rng: random.Random | None = None
    ) -> "MultiChoiceAnswer":
        return cls(option_ids=[opt.id for opt in definition.options])

    def toggle(self, option_id: str) -> bool:
        if option_id not in self.option_ids:
            return False
        if option_id in self.selected:
            self.selected.remove(option_id)
        else:
            self.selected.append(option_id)
        return True

    def select(self, option_id: str) -> bool:
        if option_id not in self.option_ids or option_id in self.selected:
            return False
        self.selected.append(option_id)
        return True

    def deselect(self, option_id: str) -> bool:
        if option_id not in self.selected:
            return False
        self.selected.remove(option_id)
        return True

    def incomplete_reason(
        self, definition: MultiChoiceExercise
    ) -> ValidationFailure | None:
        if not self.selected:
            return failure(
                FailureReason.TOO_FEW_SELECTED,
                "Please select at least one option before submitting.",
            )
        return None
