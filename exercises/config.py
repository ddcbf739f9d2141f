"""Configuration for practice sessions.

These configuration models let the app tune session behaviour per exercise
type, such as whether an answer may still be submitted once time is up.
"""

from pydantic import BaseModel, Field

from models import ExerciseType


class SubmissionPolicy(BaseModel):
    """Submission rules for one exercise type."""

    allow_late_submission: bool = True


class EngineConfig(BaseModel):
    """Master configuration for all exercise types."""

    policies: dict[ExerciseType, SubmissionPolicy] = Field(default_factory=dict)
    shuffle_sentences: bool = True

    def policy_for(self, exercise_type: ExerciseType | str) -> SubmissionPolicy:
        """Return the policy for a type, defaulting to SubmissionPolicy()."""
        return self.policies.get(ExerciseType(exercise_type), SubmissionPolicy())
