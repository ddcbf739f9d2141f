"""Answer stores for fill-in-the-blank exercises (drag and dropdown)."""

import logging
import random

from pydantic import Field

from exercises.base import AnswerStore, blank_ids, failure
from models import (
    DragBlankExercise,
    DropdownBlankExercise,
    FailureReason,
    MoveEvent,
    ValidationFailure,
)

logger = logging.getLogger(__name__)

CHOICES = "choices"
BLANK_PREFIX = "blank-"

BLANKS_UNFILLED_MESSAGE = "Please fill all the blanks before submitting."


def blank_list(blank_id: str) -> str:
    """Name of the single-slot drop list for a blank."""
    return f"{BLANK_PREFIX}{blank_id}"


class DragBlankAnswer(AnswerStore[DragBlankExercise]):
    """Choices are either unplaced or sitting in exactly one blank.

    Drag lists are named "choices" for the unplaced collection and
    "blank-<id>" for each blank.
    """

    blanks: dict[str, str | None] = Field(default_factory=dict)
    unplaced: list[str] = Field(default_factory=list)

    @classmethod
    def from_definition(
        cls, definition: DragBlankExercise, rng: random.Random | None = None
    ) -> "DragBlankAnswer":
        return cls(
            blanks={blank_id: None for blank_id in blank_ids(definition.text)},
            unplaced=[choice.id for choice in definition.choices],
        )

    def _blank_id(self, list_name: str) -> str | None:
        if not list_name.startswith(BLANK_PREFIX):
            return None
        blank_id = list_name[len(BLANK_PREFIX):]
        return blank_id if blank_id in self.blanks else None

    def move(self, event: MoveEvent) -> bool:
        """Apply one drag between the choices list and the blanks.

        Returns:
            True if the answer changed.
        """
        if event.is_noop:
            return False
        source_blank = self._blank_id(event.source_list)
        dest_blank = self._blank_id(event.dest_list)

        if event.source_list == CHOICES and dest_blank is not None:
            return self._fill(event.source_index, dest_blank)
        if source_blank is not None and event.dest_list == CHOICES:
            return self._clear(source_blank)
        if source_blank is not None and dest_blank is not None:
            return self._swap(source_blank, dest_blank)

        logger.debug("Ignoring drag-blank move: %s", event)
        return False

    def _fill(self, choice_index: int, blank_id: str) -> bool:
        if not 0 <= choice_index < len(self.unplaced):
            logger.debug("No unplaced choice at index %d", choice_index)
            return False
        choice_id = self.unplaced.pop(choice_index)
        displaced = self.blanks[blank_id]
        self.blanks[blank_id] = choice_id
        if displaced is not None:
            self.unplaced.append(displaced)
        return True

    def _clear(self, blank_id: str) -> bool:
        choice_id = self.blanks[blank_id]
        if choice_id is None:
            return False
        self.blanks[blank_id] = None
        self.unplaced.append(choice_id)
        return True

    def _swap(self, source_blank: str, dest_blank: str) -> bool:
        if source_blank == dest_blank or self.blanks[source_blank] is None:
            return False
        self.blanks[source_blank], self.blanks[dest_blank] = (
            self.blanks[dest_blank],
            self.blanks[source_blank],
        )
        return True

    def place(self, choice_id: str, blank_id: str) -> bool:
        """Drop a choice into a blank, wherever the choice currently is."""
        if choice_id in self.unplaced:
            return self.move(
                MoveEvent(
                    source_list=CHOICES,
                    source_index=self.unplaced.index(choice_id),
                    dest_list=blank_list(blank_id),
                    dest_index=0,
                )
            )
        for current_blank, value in self.blanks.items():
            if value == choice_id:
                return self.move(
                    MoveEvent(
                        source_list=blank_list(current_blank),
                        source_index=0,
                        dest_list=blank_list(blank_id),
                        dest_index=0,
                    )
                )
        return False

    def remove(self, blank_id: str) -> bool:
        """Return a blank's choice to the unplaced collection."""
        return self.move(
            MoveEvent(
                source_list=blank_list(blank_id),
                source_index=0,
                dest_list=CHOICES,
                dest_index=len(self.unplaced),
            )
        )

    def incomplete_reason(
        self, definition: DragBlankExercise
    ) -> ValidationFailure | None:
        if any(choice_id is None for choice_id in self.blanks.values()):
            return failure(FailureReason.BLANKS_UNFILLED, BLANKS_UNFILLED_MESSAGE)
        return None


class DropdownBlankAnswer(AnswerStore[DropdownBlankExercise]):
    """One selected option id per blank, empty until chosen."""

    options_per_blank: list[list[str]] = Field(default_factory=list)
    selections: list[str | None] = Field(default_factory=list)

    @classmethod
    def from_definition(
        cls, definition: DropdownBlankExercise, rng: random.Random | None = None
    ) -> "DropdownBlankAnswer":
        options = [[opt.id for opt in blank] for blank in definition.options_per_blank]
        return cls(options_per_blank=options, selections=[None] * len(options))

    def choose(self, blank_index: int, option_id: str) -> bool:
        if not 0 <= blank_index < len(self.selections):
            return False
        if option_id not in self.options_per_blank[blank_index]:
            return False
        self.selections[blank_index] = option_id
        return True

    def incomplete_reason(
        self, definition: DropdownBlankExercise
    ) -> ValidationFailure | None:
        if any(selection is None for selection in self.selections):
            return failure(FailureReason.BLANKS_UNFILLED, BLANKS_UNFILLED_MESSAGE)
        return None
