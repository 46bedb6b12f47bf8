"""Service driving a single quiz run: question draw, countdown, scoring, cues."""

from __future__ import annotations

import logging
import random
from typing import Callable

from chem_quest.audio.cues import CueName
from chem_quest.audio.tone_synthesizer import ToneSynthesizer
from chem_quest.constants.quiz_constants import COUNTDOWN_TICK_SECONDS, DEFAULT_FEEDBACK_SECONDS
from chem_quest.core.exceptions import InvalidAnswerIndex, InvalidSessionState
from chem_quest.core.models import (
    AnsweredState,
    Difficulty,
    QuizSession,
    SessionReport,
    SessionSnapshot,
    SessionState,
    ShuffledQuestion,
)
from chem_quest.core.services.question_bank import QuestionBank
from chem_quest.core.services.scoring import CountBased, ScoringVariant, finalize, score_answer, variant_name
from chem_quest.core.services.shuffler import shuffle_questions
from chem_quest.core.services.task_scheduler import ScheduledTask, TaskScheduler
from chem_quest.core.settings import GameSettings

logger = logging.getLogger(__name__)


class QuizSessionController:
    """State machine for one quiz session.

    READY -> AWAITING_ANSWER -> SHOWING_FEEDBACK -> AWAITING_ANSWER ... -> COMPLETE

    ``dispose()`` moves any state to DISPOSED, after which the controller
    rejects every further command.

    A user answer and a countdown timeout are resolved by the same code path.
    Each phase owns at most one scheduled task, cancelled synchronously on
    every transition so a stale timer can never reach the next question.
    """

    def __init__(
        self,
        question_bank: QuestionBank,
        scheduler: TaskScheduler,
        synthesizer: ToneSynthesizer,
        *,
        scoring_variant: ScoringVariant | None = None,
        feedback_seconds: float = DEFAULT_FEEDBACK_SECONDS,
        per_question_seconds: int | None = None,
        rng: random.Random | None = None,
        on_complete: Callable[[SessionReport], None] | None = None,
    ) -> None:
        self._bank = question_bank
        self._scheduler = scheduler
        self._synthesizer = synthesizer
        self._variant: ScoringVariant = scoring_variant or CountBased()
        self._feedback_seconds = feedback_seconds
        self._per_question_seconds = per_question_seconds
        self._rng = rng or random.Random()
        self._on_complete = on_complete

        self._state = SessionState.READY
        self._session: QuizSession | None = None
        self._report: SessionReport | None = None
        self._countdown_task: ScheduledTask | None = None
        self._feedback_task: ScheduledTask | None = None

    @classmethod
    def from_settings(
        cls,
        question_bank: QuestionBank,
        scheduler: TaskScheduler,
        synthesizer: ToneSynthesizer,
        settings: GameSettings,
        on_complete: Callable[[SessionReport], None] | None = None,
    ) -> QuizSessionController:
        return cls(
            question_bank,
            scheduler,
            synthesizer,
            scoring_variant=settings.scoring_variant,
            feedback_seconds=settings.feedback_seconds,
            per_question_seconds=settings.per_question_seconds,
            rng=random.Random(settings.shuffle_seed),
            on_complete=on_complete,
        )

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_active(self) -> bool:
        """True while a run is in progress (answering or showing feedback)."""
        return self._state in (SessionState.AWAITING_ANSWER, SessionState.SHOWING_FEEDBACK)

    @property
    def scoring_variant(self) -> ScoringVariant:
        return self._variant

    @property
    def report(self) -> SessionReport | None:
        """Final report once the session is complete."""
        return self._report

    def start(self, question_count: int, difficulty_filter: Difficulty | None = None) -> None:
        """Draw and shuffle a fresh question set, replacing any prior run."""
        if self._state is SessionState.DISPOSED:
            raise InvalidSessionState("Cannot start a disposed session.")
        # Drawing first means a failed start leaves the previous run untouched.
        questions = self._bank.draw_random(question_count, difficulty_filter, self._rng)
        shuffled = shuffle_questions(questions, self._rng)

        self._cancel_timers()
        self._report = None
        self._session = QuizSession(
            questions=shuffled,
            started_at_epoch_millis=self._scheduler.now_millis(),
        )
        logger.info(
            "Session started: %d question(s), difficulty=%s, scoring=%s",
            len(shuffled),
            difficulty_filter.value if difficulty_filter else "any",
            variant_name(self._variant),
        )
        self._begin_question()

    def submit_answer(self, option_index: int) -> None:
        """Lock in the player's choice for the current question.

        Repeated calls while feedback is showing are ignored.
        """
        if self._state is SessionState.SHOWING_FEEDBACK:
            return
        if self._state is not SessionState.AWAITING_ANSWER:
            raise InvalidSessionState(f"Cannot submit an answer while {self._state.value}.")

        question = self._require_current_question()
        if not 0 <= option_index < len(question.options):
            raise InvalidAnswerIndex(option_index, len(question.options))
        self._resolve(option_index)

    def on_timeout(self) -> None:
        """Countdown reached zero: resolve as an answer with no selection."""
        if self._state is not SessionState.AWAITING_ANSWER:
            return
        logger.debug("Question timed out")
        self._resolve(None)

    def advance(self) -> None:
        """Leave the feedback phase for the next question or for completion."""
        if self._state is not SessionState.SHOWING_FEEDBACK:
            raise InvalidSessionState(f"Cannot advance while {self._state.value}.")

        session = self._require_session()
        self._cancel_feedback()
        self._synthesizer.play(CueName.TRANSITION)

        if session.current_index + 1 < session.total:
            session.current_index += 1
            self._begin_question()
            return

        session.current_index = session.total
        elapsed_seconds = (self._scheduler.now_millis() - session.started_at_epoch_millis) / 1000
        self._report = finalize(session, self._variant, elapsed_seconds, self._per_question_seconds)
        self._state = SessionState.COMPLETE
        logger.info(
            "Session complete: %d/%d correct, bonus %d (%.1fs elapsed)",
            self._report.correct_count,
            self._report.total_questions,
            self._report.bonus,
            elapsed_seconds,
        )
        if self._on_complete is not None:
            self._on_complete(self._report)

    def dispose(self) -> None:
        """Cancel all pending timers, e.g. when the player navigates away."""
        self._cancel_timers()
        if self._state is not SessionState.DISPOSED:
            logger.debug("Session controller disposed while %s", self._state.value)
            self._state = SessionState.DISPOSED

    def snapshot(self) -> SessionSnapshot:
        session = self._session
        if session is None:
            return SessionSnapshot(
                state=self._state,
                current_question=None,
                current_index=0,
                total=0,
                score=0,
                time_remaining=0,
                answered_state=AnsweredState.UNANSWERED,
            )
        return SessionSnapshot(
            state=self._state,
            current_question=session.current_question(),
            current_index=session.current_index,
            total=session.total,
            score=session.score,
            time_remaining=session.time_remaining,
            answered_state=session.answered_state,
            points=session.points,
            selected_option_index=session.selected_option_index,
        )

    def _begin_question(self) -> None:
        session = self._require_session()
        question = self._require_current_question()
        session.answered_state = AnsweredState.UNANSWERED
        session.selected_option_index = None
        session.time_remaining = self._time_limit_for(question)
        self._state = SessionState.AWAITING_ANSWER
        self._countdown_task = self._scheduler.call_every(COUNTDOWN_TICK_SECONDS, self._tick)

    def _tick(self) -> None:
        session = self._require_session()
        session.time_remaining = max(0, session.time_remaining - 1)
        if session.time_remaining == 0:
            self.on_timeout()

    def _resolve(self, selection: int | None) -> None:
        """Shared scoring path for answers and timeouts."""
        self._cancel_countdown()
        session = self._require_session()
        question = self._require_current_question()

        is_correct = selection is not None and selection == question.correct_option_index
        awarded = score_answer(self._variant, is_correct, session.time_remaining)
        session.score += awarded.correct_delta
        session.points += awarded.points_delta
        session.time_bonus_accumulator += awarded.time_bonus_delta
        session.selected_option_index = selection

        if selection is None:
            session.answered_state = AnsweredState.TIMED_OUT
        elif is_correct:
            session.answered_state = AnsweredState.ANSWERED_CORRECT
        else:
            session.answered_state = AnsweredState.ANSWERED_INCORRECT

        logger.debug(
            "Question %s resolved as %s (+%d pts)",
            question.id,
            session.answered_state.value,
            awarded.points_delta,
        )
        self._synthesizer.play(CueName.CORRECT if is_correct else CueName.INCORRECT)
        self._state = SessionState.SHOWING_FEEDBACK
        self._feedback_task = self._scheduler.call_later(self._feedback_seconds, self.advance)

    def _time_limit_for(self, question: ShuffledQuestion) -> int:
        if self._per_question_seconds is not None:
            return self._per_question_seconds
        return question.time_limit_seconds

    def _cancel_countdown(self) -> None:
        if self._countdown_task is not None:
            self._countdown_task.cancel()
            self._countdown_task = None

    def _cancel_feedback(self) -> None:
        if self._feedback_task is not None:
            self._feedback_task.cancel()
            self._feedback_task = None

    def _cancel_timers(self) -> None:
        self._cancel_countdown()
        self._cancel_feedback()

    def _require_session(self) -> QuizSession:
        if self._session is None:
            raise InvalidSessionState("No session has been started.")
        return self._session

    def _require_current_question(self) -> ShuffledQuestion:
        question = self._require_session().current_question()
        if question is None:
            raise InvalidSessionState("Session has no current question.")
        return question
