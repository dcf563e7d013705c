from __future__ import annotations

import pytest
from pydantic import ValidationError

from progresssync.contracts.progress import InteractionEvent, Progress, QuizAnswer, QuizAttempt


def test_progress_parses_store_payload() -> None:
    record = Progress.model_validate(
        {
            "contentId": "deck-1",
            "userId": "learner-7",
            "completionPercentage": 40,
            "completedAt": None,
        }
    )

    assert record.content_id == "deck-1"
    assert record.learner_id == "learner-7"
    assert record.completion_percentage == 40
    assert record.is_complete is False


@pytest.mark.parametrize(("stored", "expected"), [(33.3, 33), (66.5, 67), (99.9, 100), (12.0, 12)])
def test_progress_rounds_real_percentages(stored: float, expected: int) -> None:
    record = Progress.model_validate({"contentId": "c", "completionPercentage": stored})

    assert record.completion_percentage == expected


@pytest.mark.parametrize("stored", [-1, 101, "lots"])
def test_progress_rejects_out_of_range(stored: object) -> None:
    with pytest.raises(ValidationError):
        Progress.model_validate({"contentId": "c", "completionPercentage": stored})


def test_progress_completion_flag() -> None:
    assert Progress(content_id="c", completion_percentage=100).is_complete is True


def test_progress_is_immutable() -> None:
    record = Progress(content_id="c", completion_percentage=10)

    with pytest.raises(ValidationError):
        record.completion_percentage = 20  # type: ignore[misc]


def test_interaction_event_requires_name() -> None:
    with pytest.raises(ValidationError):
        InteractionEvent(name="")

    assert InteractionEvent(name="tick").payload == {}


def test_quiz_attempt_serializes_with_store_field_names() -> None:
    attempt = QuizAttempt(
        score=1,
        total_questions=2,
        answers=[QuizAnswer(question_id="q1", answer="b", is_correct=True)],
    )

    assert attempt.model_dump(mode="json", by_alias=True) == {
        "score": 1,
        "totalQuestions": 2,
        "answers": [{"questionId": "q1", "answer": "b", "isCorrect": True}],
    }


def test_quiz_attempt_needs_a_question() -> None:
    with pytest.raises(ValidationError):
        QuizAttempt(score=0, total_questions=0)
