"""Answer stores for the PTE practice exercise types.

Each exercise type has one answer store: a pydantic model holding the
candidate's in-progress answer together with the operations that mutate it.

Answer stores:
- SingleChoiceAnswer: One selected option
- MultiChoiceAnswer: A set of selected options
- ReorderAnswer: Sentences split across "source" and "target" lists
- DragBlankAnswer: Choices dragged into [n] blanks
- DropdownBlankAnswer: One dropdown selection per blank
- SummaryAnswer, EssayAnswer: Free text within a word limit

Configuration:
- EngineConfig: Per-type submission policies and layout options
"""

from exercises.base import AnswerStore, blank_ids
from exercises.blanks import (
    BLANK_PREFIX,
    CHOICES,
    DragBlankAnswer,
    DropdownBlankAnswer,
    blank_list,
)
from exercises.choice import MultiChoiceAnswer, SingleChoiceAnswer
from exercises.config import EngineConfig, SubmissionPolicy
from exercises.reorder import SOURCE, TARGET, Placement, ReorderAnswer
from exercises.writing import EssayAnswer, FreeTextAnswer, SummaryAnswer

__all__ = [
    # Utilities
    "blank_ids",
    "blank_list",
    # Base class
    "AnswerStore",
    # Answer stores
    "SingleChoiceAnswer",
    "MultiChoiceAnswer",
    "ReorderAnswer",
    "Placement",
    "DragBlankAnswer",
    "DropdownBlankAnswer",
    "FreeTextAnswer",
    "SummaryAnswer",
    "EssayAnswer",
    # List names for move events
    "SOURCE",
    "TARGET",
    "CHOICES",
    "BLANK_PREFIX",
    # Configuration
    "EngineConfig",
    "SubmissionPolicy",
]
