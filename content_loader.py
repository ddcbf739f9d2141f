"""Load exercise definitions from JSON data files."""

import json
import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from models import ExerciseDefinition

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"
DEFAULT_EXERCISES_PATH = DATA_DIR / "exercises.json"

_definitions_adapter = TypeAdapter(list[ExerciseDefinition])


def load_exercises(path: Path = DEFAULT_EXERCISES_PATH) -> list[ExerciseDefinition]:
    """Load and validate a JSON array of exercise definitions.

    Each entry's "type" field selects the exercise variant.

    Args:
        path: Path to the JSON data file.

    Returns:
        The definitions in file order.

    Raises:
        ValueError: If the file is missing, not valid JSON, fails validation,
            or repeats an exercise id.
    """
    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except OSError as e:
        raise ValueError(f"Cannot read exercises from {path}: {e}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValueError(f"{path} is not valid JSON: {e}") from e

    try:
        definitions = _definitions_adapter.validate_python(raw)
    except ValidationError as e:
        raise ValueError(f"Invalid exercise data in {path}:\n{e}") from e

    seen: set[str] = set()
    for definition in definitions:
        if definition.id in seen:
            raise ValueError(f"Duplicate exercise id {definition.id!r} in {path}")
        seen.add(definition.id)

    logger.debug("Loaded %d exercises from %s", len(definitions), path)
    return definitions


def find_exercise(
    definitions: list[ExerciseDefinition], exercise_id: str
) -> ExerciseDefinition | None:
    """Find a definition by id."""
    for definition in definitions:
        if definition.id == exercise_id:
            return definition
    return None
