"""Tests for the paragraph reorder answer store."""

import random

from exercises import SOURCE, TARGET, ReorderAnswer
from models import FailureReason, MoveEvent


def move(answer, source_list, source_index, dest_list, dest_index) -> bool:
    return answer.move(
        MoveEvent(
            source_list=source_list,
            source_index=source_index,
            dest_list=dest_list,
            dest_index=dest_index,
        )
    )


def fill_target(answer, count: int) -> None:
    """Move the first `count` source sentences to the end of the target."""
    for i in range(count):
        move(answer, SOURCE, 0, TARGET, i)


def assert_dense(answer, sentence_ids) -> None:
    """Every sentence appears once and each list's positions are 0..n-1."""
    assert sorted(item.sentence_id for item in answer.items) == sorted(sentence_ids)
    for location in (SOURCE, TARGET):
        positions = sorted(item.position for item in answer.items if item.location == location)
        assert positions == list(range(len(positions)))


class TestInitialLayout:
    """Tests for from_definition."""

    def test_all_sentences_start_in_source(self, reorder_exercise):
        answer = ReorderAnswer.from_definition(reorder_exercise)
        assert answer.ids_in(SOURCE) == ["S1", "S2", "S3"]
        assert answer.ids_in(TARGET) == []

    def test_rng_shuffles_source(self, reorder_exercise):
        """A seeded rng should produce a permutation of the sentences."""
        answer = ReorderAnswer.from_definition(reorder_exercise, random.Random(7))
        assert sorted(answer.ids_in(SOURCE)) == ["S1", "S2", "S3"]
        assert_dense(answer, ["S1", "S2", "S3"])


class TestMove:
    """Tests for moves between and within lists."""

    def test_move_source_to_target(self, reorder_exercise):
        answer = ReorderAnswer.from_definition(reorder_exercise)
        assert move(answer, SOURCE, 0, TARGET, 0)

        assert answer.ids_in(SOURCE) == ["S2", "S3"]
        assert answer.ids_in(TARGET) == ["S1"]

    def test_insert_shifts_following_items(self, reorder_exercise):
        """Dropping at index 0 of a non-empty list pushes the others down."""
        answer = ReorderAnswer.from_definition(reorder_exercise)
        move(answer, SOURCE, 0, TARGET, 0)
        move(answer, SOURCE, 0, TARGET, 0)

        assert answer.ids_in(TARGET) == ["S2", "S1"]

    def test_move_down_within_list(self, reorder_exercise):
        """Moving within a list must not double-shift."""
        answer = ReorderAnswer.from_definition(reorder_exercise)
        fill_target(answer, 3)

        assert move(answer, TARGET, 0, TARGET, 2)
        assert answer.ids_in(TARGET) == ["S2", "S3", "S1"]

    def test_move_up_within_list(self, reorder_exercise):
        answer = ReorderAnswer.from_definition(reorder_exercise)
        fill_target(answer, 3)

        assert move(answer, TARGET, 2, TARGET, 0)
        assert answer.ids_in(TARGET) == ["S3", "S1", "S2"]

    def test_destination_index_is_clamped(self, reorder_exercise):
        """An index past the end appends instead of leaving a gap."""
        answer = ReorderAnswer.from_definition(reorder_exercise)
        move(answer, SOURCE, 0, TARGET, 0)
        assert move(answer, SOURCE, 0, TARGET, 99)

        assert answer.ids_in(TARGET) == ["S1", "S2"]
        assert_dense(answer, ["S1", "S2", "S3"])

    def test_move_back_to_source(self, reorder_exercise):
        answer = ReorderAnswer.from_definition(reorder_exercise)
        fill_target(answer, 2)

        assert move(answer, TARGET, 0, SOURCE, 0)
        assert answer.ids_in(SOURCE) == ["S1", "S3"]
        assert answer.ids_in(TARGET) == ["S2"]


class TestIgnoredMoves:
    """Moves that do not apply leave the answer unchanged."""

    def test_same_place_is_noop(self, reorder_exercise):
        answer = ReorderAnswer.from_definition(reorder_exercise)
        before = answer.model_copy(deep=True)

        assert not move(answer, SOURCE, 1, SOURCE, 1)
        assert answer == before

    def test_unknown_list_is_ignored(self, reorder_exercise):
        answer = ReorderAnswer.from_definition(reorder_exercise)
        before = answer.model_copy(deep=True)

        assert not move(answer, SOURCE, 0, "elsewhere", 0)
        assert answer == before

    def test_missing_source_index_is_ignored(self, reorder_exercise):
        answer = ReorderAnswer.from_definition(reorder_exercise)
        before = answer.model_copy(deep=True)

        assert not move(answer, TARGET, 0, SOURCE, 0)
        assert not move(answer, SOURCE, 5, TARGET, 0)
        assert answer == before


class TestInvariants:
    """Property-style checks over long random move sequences."""

    def test_random_moves_keep_positions_dense(self, reorder_exercise):
        """No sequence of moves, valid or not, may lose or duplicate a sentence."""
        rng = random.Random(1234)
        ids = ["S1", "S2", "S3"]
        answer = ReorderAnswer.from_definition(reorder_exercise, rng)
        lists = [SOURCE, TARGET, "bogus"]

        for _ in range(500):
            move(
                answer,
                rng.choice(lists),
                rng.randint(-1, 4),
                rng.choice(lists),
                rng.randint(-1, 4),
            )
            assert_dense(answer, ids)


class TestCompleteness:
    """Tests for the submit precondition."""

    def test_incomplete_until_all_placed(self, reorder_exercise):
        answer = ReorderAnswer.from_definition(reorder_exercise)
        fill_target(answer, 2)

        failure = answer.incomplete_reason(reorder_exercise)
        assert failure is not None
        assert failure.reason == FailureReason.SENTENCES_UNPLACED
        assert failure.message == "Please use all sentences before submitting."

        move(answer, SOURCE, 0, TARGET, 2)
        assert answer.incomplete_reason(reorder_exercise) is None
