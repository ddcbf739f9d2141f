"""Abstract base class and shared utilities for answer stores."""

import random
import re
from abc import abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

from models import FailureReason, ValidationFailure

D = TypeVar("D", bound=BaseModel)

PLACEHOLDER_PATTERN = re.compile(r"\[(\d+)\]")


class AnswerStore(BaseModel, Generic[D]):
    """Mutable in-progress answer for one exercise variant.

    Each exercise type provides:
    - An initial empty answer built from its definition (from_definition)
    - Mutation operations specific to its answer shape
    - A completeness check run before scoring (incomplete_reason)

    Mutations never raise on bad input: an operation that does not apply to
    the current state leaves it unchanged and returns False.
    """

    @classmethod
    @abstractmethod
    def from_definition(cls, definition: D, rng: random.Random | None = None):
        """Create the empty answer for a definition.

        Args:
            definition: The exercise being answered.
            rng: Source of randomness for initial shuffles, or None for a
                deterministic layout.
        """
        ...

    @abstractmethod
    def incomplete_reason(self, definition: D) -> ValidationFailure | None:
        """Return why this answer cannot be submitted yet, or None if it can."""
        ...

    def retained_text(self) -> str | None:
        """Free text to archive on submission. Only writing answers have one."""
        return None


def failure(reason: FailureReason, message: str) -> ValidationFailure:
    return ValidationFailure(reason=reason, message=message)


def blank_ids(text: str) -> list[str]:
    """Extract [n] placeholder ids in order of first appearance.

    Example:
        blank_ids("The [1] sat on the [2].") -> ["1", "2"]
    """
    seen: list[str] = []
    for match in PLACEHOLDER_PATTERN.finditer(text):
        if match.group(1) not in seen:
            seen.append(match.group(1))
    return seen
