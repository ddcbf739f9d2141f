"""Tests for loading exercise definitions from JSON."""

import json

import pytest

from content_loader import DEFAULT_EXERCISES_PATH, find_exercise, load_exercises
from exercises import blank_ids
from models import (
    DragBlankExercise,
    ExerciseType,
    SummarizeExercise,
    WordLimit,
)


def write_json(path, data) -> None:
    path.write_text(json.dumps(data), encoding="utf-8")


class TestLoadExercises:
    """Tests for load_exercises()."""

    def test_type_field_selects_variant(self, tmp_path):
        path = tmp_path / "exercises.json"
        write_json(
            path,
            [
                {
                    "id": "d1",
                    "type": "drag_blank",
                    "prompt": "Drag.",
                    "text": "A [1].",
                    "choices": [{"id": "A", "text": "cat"}],
                    "correct_order": ["A"],
                },
                {"id": "s1", "type": "summarize", "prompt": "Summarize."},
            ],
        )

        definitions = load_exercises(path)

        assert isinstance(definitions[0], DragBlankExercise)
        assert isinstance(definitions[1], SummarizeExercise)
        assert definitions[1].word_limit == WordLimit(min=5, max=75)
        assert definitions[1].time_limit_seconds is None

    def test_duplicate_ids_rejected(self, tmp_path):
        path = tmp_path / "exercises.json"
        entry = {"id": "dup", "type": "summarize", "prompt": "Summarize."}
        write_json(path, [entry, entry])

        with pytest.raises(ValueError, match="Duplicate exercise id 'dup'"):
            load_exercises(path)

    def test_unknown_type_names_file(self, tmp_path):
        path = tmp_path / "bad.json"
        write_json(path, [{"id": "x", "type": "speaking", "prompt": "Speak."}])

        with pytest.raises(ValueError, match="bad.json"):
            load_exercises(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("[{", encoding="utf-8")

        with pytest.raises(ValueError, match="not valid JSON"):
            load_exercises(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ValueError, match="Cannot read exercises"):
            load_exercises(tmp_path / "missing.json")

    def test_negative_time_limit_rejected(self, tmp_path):
        path = tmp_path / "exercises.json"
        write_json(
            path,
            [{"id": "s", "type": "summarize", "prompt": "Write.", "time_limit_seconds": -1}],
        )

        with pytest.raises(ValueError):
            load_exercises(path)

    def test_non_utf8_file_names_file(self, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes('[{"id": "caf\xe9"}]'.encode("latin-1"))

        with pytest.raises(ValueError, match="latin1.json is not valid JSON"):
            load_exercises(path)

    def test_essay_requires_word_limit(self, tmp_path):
        path = tmp_path / "essays.json"
        write_json(path, [{"id": "e", "type": "essay", "prompt": "Write.", "text": "Topic"}])

        with pytest.raises(ValueError, match="word_limit"):
            load_exercises(path)

    def test_word_limit_max_below_min_rejected(self, tmp_path):
        path = tmp_path / "essays.json"
        write_json(
            path,
            [
                {
                    "id": "e",
                    "type": "essay",
                    "prompt": "Write.",
                    "word_limit": {"min": 300, "max": 200},
                }
            ],
        )

        with pytest.raises(ValueError, match="max 200 is below min 300"):
            load_exercises(path)


class TestBundledData:
    """The shipped data file stays loadable."""

    def test_one_exercise_per_type(self):
        definitions = load_exercises(DEFAULT_EXERCISES_PATH)
        assert {ExerciseType(d.type) for d in definitions} == set(ExerciseType)

    def test_drag_blank_answers_cover_every_blank(self):
        for definition in load_exercises(DEFAULT_EXERCISES_PATH):
            if isinstance(definition, DragBlankExercise):
                ids = blank_ids(definition.text)
                assert all(definition.expected_choice(i) is not None for i in ids)

    def test_find_exercise(self):
        definitions = load_exercises(DEFAULT_EXERCISES_PATH)
        assert find_exercise(definitions, "ro-001").id == "ro-001"
        assert find_exercise(definitions, "nope") is None
