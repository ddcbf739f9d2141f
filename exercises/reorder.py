"""Answer store for paragraph reorder exercises.

Sentences live in two named lists, "source" (not yet used) and "target"
(the candidate's ordering). Every sentence carries a (location, position)
pair, and within each list the positions are always a dense 0..n-1
permutation.
"""

import logging
import random
from typing import Literal

from pydantic import BaseModel, Field

from exercises.base import AnswerStore, failure
from models import FailureReason, MoveEvent, ReorderExercise, ValidationFailure

logger = logging.getLogger(__name__)

SOURCE = "source"
TARGET = "target"
LIST_NAMES = (SOURCE, TARGET)

Location = Literal["source", "target"]


class Placement(BaseModel):
    sentence_id: str
    location: Location
    position: int


class ReorderAnswer(AnswerStore[ReorderExercise]):
    items: list[Placement] = Field(default_factory=list)

    @classmethod
    def from_definition(
        cls, definition: ReorderExercise, rng: random.Random | None = None
    ) -> "ReorderAnswer":
        """Place every sentence in the source list, shuffled when rng is given."""
        ids = [sentence.id for sentence in definition.sentences]
        if rng is not None:
            rng.shuffle(ids)
        return cls(
            items=[
                Placement(sentence_id=sentence_id, location=SOURCE, position=i)
                for i, sentence_id in enumerate(ids)
            ]
        )

    def ids_in(self, location: str) -> list[str]:
        """Return the sentence ids of one list in position order."""
        placed = [item for item in self.items if item.location == location]
        return [item.sentence_id for item in sorted(placed, key=lambda i: i.position)]

    def _find(self, location: str, position: int) -> Placement | None:
        for item in self.items:
            if item.location == location and item.position == position:
                return item
        return None

    def move(self, event: MoveEvent) -> bool:
        """Move one sentence and reindex both lists.

        Removal and insertion compose: the insertion shift is computed on
        positions after the gap left by the removal has been closed, so a
        move within one list never double-shifts. The destination index is
        clamped to the size of the destination list.

        Returns:
            True if the answer changed.
        """
        if event.is_noop:
            return False
        if event.source_list not in LIST_NAMES or event.dest_list not in LIST_NAMES:
            logger.debug("Ignoring move between unknown lists: %s", event)
            return False

        moved = self._find(event.source_list, event.source_index)
        if moved is None:
            logger.debug("Ignoring move of missing item: %s", event)
            return False

        others = [item for item in self.items if item is not moved]

        for item in others:
            if item.location == event.source_list and item.position > event.source_index:
                item.position -= 1

        dest_size = sum(1 for item in others if item.location == event.dest_list)
        dest_index = min(max(event.dest_index, 0), dest_size)

        for item in others:
            if item.location == event.dest_list and item.position >= dest_index:
                item.position += 1

        moved.location = event.dest_list
        moved.position = dest_index
        return True

    def incomplete_reason(self, definition: ReorderExercise) -> ValidationFailure | None:
        if len(self.ids_in(TARGET)) != len(definition.sentences):
            return failure(
                FailureReason.SENTENCES_UNPLACED,
                "Please use all sentences before submitting.",
            )
        return None
