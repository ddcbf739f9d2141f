"""Scoring functions, one per exercise type.

Every function maps (definition, complete answer) to a Score. They are pure
and must only be called on answers that passed the completeness check.
"""

from typing import Callable

from exercises.blanks import DragBlankAnswer, DropdownBlankAnswer
from exercises.choice import MultiChoiceAnswer, SingleChoiceAnswer
from exercises.reorder import TARGET, ReorderAnswer
from exercises.writing import FreeTextAnswer
from models import (
    DragBlankExercise,
    DropdownBlankExercise,
    ExerciseType,
    MultiChoiceExercise,
    ReorderExercise,
    Score,
    SingleChoiceExercise,
)

# Multi-choice: points per correct pick, penalty per wrong pick or missed answer
MULTI_CHOICE_REWARD = 1.0
MULTI_CHOICE_PENALTY = 0.5

COMPLETION_SCORE = 100.0


def _percentage(earned: float, possible: float) -> float:
    if possible <= 0:
        return 0.0
    return 100.0 * earned / possible


def score_single_choice(
    definition: SingleChoiceExercise, answer: SingleChoiceAnswer
) -> Score:
    correct = any(
        opt.id == answer.selected and opt.is_correct for opt in definition.options
    )
    earned = 1.0 if correct else 0.0
    return Score(percentage=100.0 * earned, earned=earned, possible=1.0)


def score_multi_choice(
    definition: MultiChoiceExercise, answer: MultiChoiceAnswer
) -> Score:
    """+1 per correct pick, -0.5 per wrong pick and per missed correct option.

    Only the final sum is clamped at zero, so a wrong pick can cancel a
    correct one.
    """
    correct_ids = set(definition.correct_ids)
    selected = set(answer.selected)

    hits = len(selected & correct_ids)
    wrong = len(selected - correct_ids)
    missed = len(correct_ids - selected)

    points = (
        MULTI_CHOICE_REWARD * hits
        - MULTI_CHOICE_PENALTY * wrong
        - MULTI_CHOICE_PENALTY * missed
    )
    points = max(0.0, points)
    possible = float(len(correct_ids))

    return Score(
        percentage=_percentage(points, possible),
        earned=points,
        possible=possible,
        breakdown={"hits": hits, "wrong": wrong, "missed": missed},
    )


def score_reorder(definition: ReorderExercise, answer: ReorderAnswer) -> Score:
    """Half for sentences in their exact position, half for correct adjacent pairs.

    A pair counts when the next sentence directly follows the current one in
    the correct order. With one sentence or fewer there are no pairs and the
    pair half is awarded in full.
    """
    placed = answer.ids_in(TARGET)
    n = len(placed)
    gt_position = {sentence_id: i for i, sentence_id in enumerate(definition.correct_order)}

    exact = sum(
        1
        for i, sentence_id in enumerate(placed)
        if i < len(definition.correct_order) and definition.correct_order[i] == sentence_id
    )
    pairs = sum(
        1
        for current, following in zip(placed, placed[1:])
        if gt_position.get(following) is not None
        and gt_position.get(current) is not None
        and gt_position[following] == gt_position[current] + 1
    )

    exact_fraction = exact / n if n else 0.0
    pair_fraction = pairs / (n - 1) if n > 1 else 1.0
    fraction = 0.5 * exact_fraction + 0.5 * pair_fraction

    return Score(
        percentage=100.0 * fraction,
        earned=fraction,
        possible=1.0,
        breakdown={
            "exact_matches": exact,
            "positions": n,
            "correct_pairs": pairs,
            "pairs": max(0, n - 1),
        },
    )


def score_drag_blank(definition: DragBlankExercise, answer: DragBlankAnswer) -> Score:
    total = len(answer.blanks)
    correct = sum(
        1
        for blank_id, choice_id in answer.blanks.items()
        if choice_id is not None and choice_id == definition.expected_choice(blank_id)
    )
    return Score(
        percentage=_percentage(correct, total),
        earned=correct,
        possible=total,
    )


def score_dropdown_blank(
    definition: DropdownBlankExercise, answer: DropdownBlankAnswer
) -> Score:
    total = len(definition.options_per_blank)
    correct = 0
    for options, selection in zip(definition.options_per_blank, answer.selections):
        if any(opt.id == selection and opt.is_correct for opt in options):
            correct += 1
    return Score(
        percentage=_percentage(correct, total),
        earned=correct,
        possible=total,
    )


def score_completion(definition, answer: FreeTextAnswer) -> Score:
    """Writing tasks are not auto-graded; submission marks them attempted."""
    return Score(percentage=COMPLETION_SCORE, earned=1.0, possible=1.0)


# Registry of scoring functions
SCORERS: dict[ExerciseType, Callable] = {
    ExerciseType.SINGLE_CHOICE: score_single_choice,
    ExerciseType.MULTI_CHOICE: score_multi_choice,
    ExerciseType.REORDER: score_reorder,
    ExerciseType.DRAG_BLANK: score_drag_blank,
    ExerciseType.DROPDOWN_BLANK: score_dropdown_blank,
    ExerciseType.SUMMARIZE: score_completion,
    ExerciseType.ESSAY: score_completion,
}
