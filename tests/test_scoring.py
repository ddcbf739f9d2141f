"""Unit tests for the scoring functions."""

from itertools import combinations, permutations

import pytest

from exercises import (
    SOURCE,
    TARGET,
    DragBlankAnswer,
    DropdownBlankAnswer,
    EssayAnswer,
    MultiChoiceAnswer,
    ReorderAnswer,
    SingleChoiceAnswer,
)
from models import ExerciseType, MoveEvent, Option, ReorderExercise, Sentence
from scoring import (
    SCORERS,
    score_completion,
    score_drag_blank,
    score_dropdown_blank,
    score_multi_choice,
    score_reorder,
    score_single_choice,
)


def arrange(definition, order: list[str]) -> ReorderAnswer:
    """Build a reorder answer with the target list in the given order."""
    answer = ReorderAnswer.from_definition(definition)
    for i, sentence_id in enumerate(order):
        source_index = answer.ids_in(SOURCE).index(sentence_id)
        answer.move(
            MoveEvent(source_list=SOURCE, source_index=source_index, dest_list=TARGET, dest_index=i)
        )
    return answer


class TestSingleChoice:
    """Tests for all-or-nothing single choice."""

    def test_correct_option_scores_100(self, single_choice_exercise):
        answer = SingleChoiceAnswer.from_definition(single_choice_exercise)
        answer.select("B")
        assert score_single_choice(single_choice_exercise, answer).percentage == 100.0

    def test_wrong_option_scores_0(self, single_choice_exercise):
        answer = SingleChoiceAnswer.from_definition(single_choice_exercise)
        answer.select("A")
        assert score_single_choice(single_choice_exercise, answer).percentage == 0.0


class TestMultiChoice:
    """Tests for +1 / -0.5 multi-choice scoring."""

    def select(self, definition, ids) -> MultiChoiceAnswer:
        answer = MultiChoiceAnswer.from_definition(definition)
        for option_id in ids:
            answer.select(option_id)
        return answer

    def test_all_correct(self, multi_choice_exercise):
        score = score_multi_choice(
            multi_choice_exercise, self.select(multi_choice_exercise, ["X", "Y"])
        )
        assert score.percentage == 100.0
        assert score.breakdown == {"hits": 2, "wrong": 0, "missed": 0}

    def test_wrong_pick_cancels_correct_pick(self, multi_choice_exercise):
        """{X, Z} earns 1 - 0.5 (wrong Z) - 0.5 (missed Y) = 0."""
        score = score_multi_choice(
            multi_choice_exercise, self.select(multi_choice_exercise, ["X", "Z"])
        )
        assert score.percentage == 0.0
        assert score.earned == 0.0

    def test_partial_credit(self, multi_choice_exercise):
        """{X} earns 1 - 0.5 (missed Y) = 0.5 of 2."""
        score = score_multi_choice(
            multi_choice_exercise, self.select(multi_choice_exercise, ["X"])
        )
        assert score.percentage == pytest.approx(25.0)

    def test_only_final_sum_is_clamped(self, multi_choice_exercise):
        """Only wrong picks would go negative; the result floors at zero."""
        score = score_multi_choice(
            multi_choice_exercise, self.select(multi_choice_exercise, ["Z"])
        )
        assert score.percentage == 0.0
        assert score.breakdown["missed"] == 2

    def test_option_order_does_not_change_score(self, multi_choice_exercise):
        """Every selection scores the same under every option ordering, within [0, 100]."""
        options = multi_choice_exercise.options + [Option(id="W", text="Fourth")]
        ids = [opt.id for opt in options]
        selections = [
            list(combo) for size in range(len(ids) + 1) for combo in combinations(ids, size)
        ]

        expected = {}
        for ordering in permutations(options):
            definition = multi_choice_exercise.model_copy(update={"options": list(ordering)})
            for selection in selections:
                pct = score_multi_choice(definition, self.select(definition, selection)).percentage
                assert 0.0 <= pct <= 100.0
                assert expected.setdefault(frozenset(selection), pct) == pct

        assert len(expected) == 2 ** len(ids)
        assert expected[frozenset({"X", "Y"})] == 100.0


class TestReorder:
    """Tests for exact-position plus adjacent-pair scoring."""

    def test_correct_order_scores_100(self, reorder_exercise):
        answer = arrange(reorder_exercise, ["S1", "S2", "S3"])
        assert score_reorder(reorder_exercise, answer).percentage == pytest.approx(100.0)

    def test_partially_correct_order(self, reorder_exercise):
        """[S1, S3, S2]: 1 of 3 exact, 0 of 2 pairs -> 16.67%."""
        answer = arrange(reorder_exercise, ["S1", "S3", "S2"])
        score = score_reorder(reorder_exercise, answer)

        assert score.percentage == pytest.approx(100 * (0.5 * 1 / 3), abs=0.01)
        assert score.breakdown["exact_matches"] == 1
        assert score.breakdown["correct_pairs"] == 0

    def test_pairs_credit_shifted_run(self, reorder_exercise):
        """[S3, S1, S2]: no exact matches but S1 -> S2 is a correct pair."""
        answer = arrange(reorder_exercise, ["S3", "S1", "S2"])
        score = score_reorder(reorder_exercise, answer)

        assert score.percentage == pytest.approx(25.0)

    def test_reversed_pair_scores_0(self):
        definition = ReorderExercise(
            id="ro-two",
            prompt="Order these.",
            sentences=[Sentence(id="S1", text="a"), Sentence(id="S2", text="b")],
            correct_order=["S1", "S2"],
        )
        answer = arrange(definition, ["S2", "S1"])
        assert score_reorder(definition, answer).percentage == 0.0

    def test_single_sentence_gets_full_pair_credit(self):
        definition = ReorderExercise(
            id="ro-one",
            prompt="Order this.",
            sentences=[Sentence(id="S1", text="a")],
            correct_order=["S1"],
        )
        answer = arrange(definition, ["S1"])
        assert score_reorder(definition, answer).percentage == pytest.approx(100.0)


class TestBlanks:
    """Tests for per-blank scoring."""

    def test_drag_blank_all_correct(self, drag_blank_exercise):
        answer = DragBlankAnswer.from_definition(drag_blank_exercise)
        answer.place("A", "1")
        answer.place("B", "2")
        assert score_drag_blank(drag_blank_exercise, answer).percentage == 100.0

    def test_drag_blank_swapped_scores_0(self, drag_blank_exercise):
        answer = DragBlankAnswer.from_definition(drag_blank_exercise)
        answer.place("B", "1")
        answer.place("A", "2")
        assert score_drag_blank(drag_blank_exercise, answer).percentage == 0.0

    def test_drag_blank_half(self, drag_blank_exercise):
        answer = DragBlankAnswer.from_definition(drag_blank_exercise)
        answer.place("A", "1")
        answer.place("C", "2")
        score = score_drag_blank(drag_blank_exercise, answer)
        assert score.percentage == 50.0
        assert (score.earned, score.possible) == (1, 2)

    def test_dropdown_blank(self, dropdown_blank_exercise):
        answer = DropdownBlankAnswer.from_definition(dropdown_blank_exercise)
        answer.choose(0, "a")
        answer.choose(1, "a")
        assert score_dropdown_blank(dropdown_blank_exercise, answer).percentage == 50.0

        answer.choose(1, "b")
        assert score_dropdown_blank(dropdown_blank_exercise, answer).percentage == 100.0


class TestCompletion:
    """Tests for writing tasks."""

    def test_writing_scores_completion(self, essay_exercise):
        answer = EssayAnswer.from_definition(essay_exercise)
        answer.write("one two three")
        assert score_completion(essay_exercise, answer).percentage == 100.0


class TestRegistry:
    def test_every_type_has_a_scorer(self):
        assert set(SCORERS) == set(ExerciseType)
