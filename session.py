"""Session controller: one timed attempt at one exercise.

States: READY -> RUNNING -> {SUBMITTED, EXPIRED}, and EXPIRED -> SUBMITTED
when the exercise type's policy allows late submission. SUBMITTED is
terminal: the answer is frozen, scored once and recorded once.
"""

import logging
import random
import sqlite3
import threading
from typing import Callable, NamedTuple

from countdown import CountdownTimer, TickScheduler
from exercises import (
    AnswerStore,
    DragBlankAnswer,
    DropdownBlankAnswer,
    EngineConfig,
    EssayAnswer,
    MultiChoiceAnswer,
    ReorderAnswer,
    SingleChoiceAnswer,
    SummaryAnswer,
)
from exercises.base import failure
from ledger import ProgressLedger
from models import (
    ExerciseType,
    FailureReason,
    Score,
    SessionState,
    SessionStatus,
    ValidationFailure,
)
from scoring import SCORERS
from storage import WritingAnswerRepository

logger = logging.getLogger(__name__)

SUBMISSION_CLOSED_MESSAGE = "Time is up. This exercise can no longer be submitted."


class ExerciseVariant(NamedTuple):
    """The matched answer store and scoring function for one exercise type."""

    answer_type: type[AnswerStore]
    scorer: Callable


# Answer store class per exercise type
ANSWER_STORES: dict[ExerciseType, type[AnswerStore]] = {
    ExerciseType.SINGLE_CHOICE: SingleChoiceAnswer,
    ExerciseType.MULTI_CHOICE: MultiChoiceAnswer,
    ExerciseType.REORDER: ReorderAnswer,
    ExerciseType.DRAG_BLANK: DragBlankAnswer,
    ExerciseType.DROPDOWN_BLANK: DropdownBlankAnswer,
    ExerciseType.SUMMARIZE: SummaryAnswer,
    ExerciseType.ESSAY: EssayAnswer,
}

# Registry of exercise variants
EXERCISE_VARIANTS: dict[ExerciseType, ExerciseVariant] = {
    exercise_type: ExerciseVariant(ANSWER_STORES[exercise_type], SCORERS[exercise_type])
    for exercise_type in ExerciseType
}


class SessionListener:
    """Receives session notifications. Subclasses override what they render."""

    def on_change(self, state: SessionState) -> None:
        pass

    def on_tick(self, seconds_left: int) -> None:
        pass

    def on_validation_failure(self, failure: ValidationFailure) -> None:
        pass

    def on_expired(self) -> None:
        pass

    def on_submitted(self, score: Score) -> None:
        pass


class SessionController:
    """Owns the answer, timer and result of one exercise attempt.

    All operations are serialized on one re-entrant lock, including the
    expiry notification arriving from the timer's thread.
    """

    def __init__(
        self,
        definition,
        ledger: ProgressLedger,
        config: EngineConfig | None = None,
        listener: SessionListener | None = None,
        scheduler: TickScheduler | None = None,
        writing_repository: WritingAnswerRepository | None = None,
        rng: random.Random | None = None,
    ):
        self.definition = definition
        self.ledger = ledger
        self.config = config or EngineConfig()
        self.listener = listener or SessionListener()
        self.writing_repository = writing_repository

        exercise_type = ExerciseType(definition.type)
        self.variant = EXERCISE_VARIANTS[exercise_type]
        self.policy = self.config.policy_for(exercise_type)

        if rng is None and self.config.shuffle_sentences:
            rng = random.Random()
        self.answer = self.variant.answer_type.from_definition(definition, rng)

        self.timer = CountdownTimer(definition.time_limit_seconds, scheduler)
        self.timer.add_tick_listener(self._on_timer_tick)
        self.timer.add_expiry_listener(self._on_timer_expired)

        self._lock = threading.RLock()
        self._status = SessionStatus.READY
        self.submitted = False
        self.result: Score | None = None
        self.last_failure: ValidationFailure | None = None

    @property
    def status(self) -> SessionStatus:
        with self._lock:
            return self._status

    @property
    def accepts_edits(self) -> bool:
        with self._lock:
            # The timer flags expiry before the expiry listener runs
            return (
                not self.submitted
                and self._status != SessionStatus.EXPIRED
                and not self.timer.expired
            )

    def start(self) -> bool:
        """Move from READY to RUNNING and start the countdown."""
        with self._lock:
            if self._status != SessionStatus.READY:
                return False
            self._status = SessionStatus.RUNNING
            self.timer.start()
            state = self.snapshot()
        self.listener.on_change(state)
        return True

    def apply(self, edit: Callable[[AnswerStore], object]) -> bool:
        """Run one answer mutation, e.g. apply(lambda a: a.toggle("B")).

        Rejected once the session is submitted or time has expired. The
        edit's own False return (an inapplicable mutation) is passed through.

        Returns:
            True if the answer changed.
        """
        with self._lock:
            if not self.accepts_edits:
                logger.debug("Edit rejected in %s state", self._status.value)
                return False
            changed = edit(self.answer) is not False
            state = self.snapshot() if changed else None
        if state is not None:
            self.listener.on_change(state)
        return changed

    def submit(self) -> Score | None:
        """Validate, score, and record the answer.

        Returns:
            The score on success; None when already submitted or when the
            answer was refused (see last_failure).
        """
        with self._lock:
            if self.submitted:
                return None

            if (
                self._status == SessionStatus.EXPIRED
                and not self.policy.allow_late_submission
            ):
                problem: ValidationFailure | None = failure(
                    FailureReason.SUBMISSION_CLOSED, SUBMISSION_CLOSED_MESSAGE
                )
            else:
                problem = self.answer.incomplete_reason(self.definition)

            if problem is not None:
                self.last_failure = problem
            else:
                score = self.variant.scorer(self.definition, self.answer)
                self.timer.pause()
                self.submitted = True
                self.result = score
                self.last_failure = None
                self._status = SessionStatus.SUBMITTED
                self.ledger.record(self.definition.id, score.percentage)
                self._archive_text()
                state = self.snapshot()

        if problem is not None:
            logger.debug("Submission refused: %s", problem.reason.value)
            self.listener.on_validation_failure(problem)
            return None

        logger.info(
            "Submitted %s with score %.1f%%", self.definition.id, score.percentage
        )
        self.listener.on_submitted(score)
        self.listener.on_change(state)
        return score

    def close(self) -> None:
        """Stop the countdown without changing the session state."""
        self.timer.pause()

    def snapshot(self) -> SessionState:
        with self._lock:
            return SessionState(
                definition=self.definition,
                answer=self.answer.model_copy(deep=True),
                status=self._status,
                seconds_left=self.timer.seconds_left,
                submitted=self.submitted,
                result=self.result,
            )

    def _archive_text(self) -> None:
        text = self.answer.retained_text()
        if text is None or self.writing_repository is None:
            return
        try:
            self.writing_repository.save(self.definition.id, text)
        except (sqlite3.Error, OSError) as e:
            logger.warning("Could not archive answer for %s: %s", self.definition.id, e)

    def _on_timer_tick(self, seconds_left: int) -> None:
        self.listener.on_tick(seconds_left)

    def _on_timer_expired(self) -> None:
        with self._lock:
            if self.submitted:
                return
            self._status = SessionStatus.EXPIRED
            state = self.snapshot()
        self.listener.on_expired()
        self.listener.on_change(state)
