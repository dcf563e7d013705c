"""Quiz metric: answered questions, held below 100 until the attempt is submitted.

An answered share that rounds to 100 is never reported; the candidate stays at
the share of all but one question. Submission itself is not a ratio.
``ContentSession.submit_quiz`` forces a candidate of exactly 100 into the engine
instead.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import ClassVar

from progresssync.adapters.utils import payload_int
from progresssync.contracts.adapter import MetricAdapter, ratio_percentage
from progresssync.contracts.progress import InteractionEvent

UNSUBMITTED_CEILING = 99


@dataclass(frozen=True)
class QuizState:
    total_questions: int
    answered: frozenset[int] = frozenset()


class QuizAdapter(MetricAdapter[QuizState]):
    content_type: ClassVar[str] = "quiz"

    def __init__(self, *, total_questions: int) -> None:
        self._total_questions = max(0, total_questions)

    def initial_state(self) -> QuizState:
        return QuizState(total_questions=self._total_questions)

    def reduce(self, state: QuizState, event: InteractionEvent) -> QuizState:
        if event.name == "answered":
            index = payload_int(event.payload, "question_index")
            if index is None or not 0 <= index < state.total_questions:
                return state
            return replace(state, answered=state.answered | {index})
        if event.name == "quiz_restarted":
            return replace(state, answered=frozenset())
        return state

    def compute(self, state: QuizState) -> int:
        answered = ratio_percentage(len(state.answered), state.total_questions)
        if answered < 100:
            return answered
        return min(UNSUBMITTED_CEILING, ratio_percentage(state.total_questions - 1, state.total_questions))
