"""Progress record and interaction payload contracts."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class Progress(_CamelModel):
    """Durable progress record owned by the store of record."""

    content_id: str = Field(alias="contentId")
    learner_id: str | None = Field(default=None, alias="userId")
    completion_percentage: int = Field(alias="completionPercentage", ge=0, le=100)
    completed_at: datetime | None = Field(default=None, alias="completedAt")

    @field_validator("completion_percentage", mode="before")
    @classmethod
    def _round_stored_real(cls, value: Any) -> Any:
        # The store keeps a real column; readers only ever see whole percentages.
        if isinstance(value, float) and math.isfinite(value):
            return math.floor(value + 0.5)
        return value

    @property
    def is_complete(self) -> bool:
        return self.completion_percentage >= 100 or self.completed_at is not None


class InteractionEvent(_CamelModel):
    """Discrete learner interaction delivered to a content session."""

    name: str = Field(alias="eventType", min_length=1)
    payload: dict[str, Any] = Field(default_factory=dict, alias="eventData")


class QuizAnswer(_CamelModel):
    question_id: str = Field(alias="questionId")
    answer: str | int | float | bool
    is_correct: bool = Field(alias="isCorrect")


class QuizAttempt(_CamelModel):
    score: int = Field(ge=0)
    total_questions: int = Field(alias="totalQuestions", ge=1)
    answers: list[QuizAnswer] = Field(default_factory=list)
