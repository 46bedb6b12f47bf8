from __future__ import annotations

import random

import pytest

from chem_quest.audio.cues import CueName
from chem_quest.core.exceptions import InsufficientQuestions, InvalidAnswerIndex, InvalidSessionState
from chem_quest.core.models import AnsweredState, Difficulty, SessionReport, SessionState
from chem_quest.core.services.question_bank import QuestionBank
from chem_quest.core.services.scoring import CountBased, PointsWithBonus
from chem_quest.core.services.session_controller import QuizSessionController
from chem_quest.core.services.task_scheduler import ManualTaskScheduler
from chem_quest.core.settings import GameSettings, preset

from conftest import RecordingSynthesizer

FEEDBACK_SECONDS = 2.5


@pytest.fixture
def reports() -> list[SessionReport]:
    return []


@pytest.fixture
def controller(
    bank: QuestionBank,
    scheduler: ManualTaskScheduler,
    synthesizer: RecordingSynthesizer,
    rng: random.Random,
    reports: list[SessionReport],
) -> QuizSessionController:
    return QuizSessionController(
        bank,
        scheduler,
        synthesizer,
        scoring_variant=CountBased(per_question_budget_seconds=30, normalization_factor=10),
        feedback_seconds=FEEDBACK_SECONDS,
        rng=rng,
        on_complete=reports.append,
    )


def _correct_index(controller: QuizSessionController) -> int:
    question = controller.snapshot().current_question
    assert question is not None
    return question.correct_option_index


def _wrong_index(controller: QuizSessionController) -> int:
    question = controller.snapshot().current_question
    assert question is not None
    return (question.correct_option_index + 1) % len(question.options)


def test_initial_snapshot_is_ready(controller: QuizSessionController) -> None:
    snapshot = controller.snapshot()
    assert snapshot.state is SessionState.READY
    assert snapshot.current_question is None
    assert snapshot.total == 0
    assert controller.report is None


def test_start_presents_first_question(controller: QuizSessionController) -> None:
    controller.start(4)
    snapshot = controller.snapshot()
    assert snapshot.state is SessionState.AWAITING_ANSWER
    assert snapshot.current_index == 0
    assert snapshot.total == 4
    assert snapshot.score == 0
    assert snapshot.time_remaining == 30
    assert snapshot.answered_state is AnsweredState.UNANSWERED


def test_countdown_ticks_once_per_second(
    controller: QuizSessionController, scheduler: ManualTaskScheduler
) -> None:
    controller.start(2)
    scheduler.advance(7)
    assert controller.snapshot().time_remaining == 23


def test_full_count_based_run_with_time_bonus(
    controller: QuizSessionController,
    scheduler: ManualTaskScheduler,
    reports: list[SessionReport],
) -> None:
    controller.start(4)
    for idx in range(4):
        scheduler.advance(20)
        choice = _correct_index(controller) if idx < 3 else _wrong_index(controller)
        controller.submit_answer(choice)
        scheduler.advance(FEEDBACK_SECONDS)

    assert controller.state is SessionState.COMPLETE
    assert reports == [SessionReport(correct_count=3, total_questions=4, bonus=3)]
    assert controller.report == reports[0]
    snapshot = controller.snapshot()
    assert snapshot.current_question is None
    assert snapshot.current_index == 4
    assert scheduler.pending_count() == 0


def test_correct_answer_scores_and_shows_feedback(
    controller: QuizSessionController, synthesizer: RecordingSynthesizer
) -> None:
    controller.start(2)
    choice = _correct_index(controller)
    controller.submit_answer(choice)

    snapshot = controller.snapshot()
    assert snapshot.state is SessionState.SHOWING_FEEDBACK
    assert snapshot.answered_state is AnsweredState.ANSWERED_CORRECT
    assert snapshot.selected_option_index == choice
    assert snapshot.score == 1
    assert synthesizer.cues == [CueName.CORRECT]


def test_double_submit_is_ignored(
    controller: QuizSessionController, synthesizer: RecordingSynthesizer
) -> None:
    controller.start(2)
    controller.submit_answer(_correct_index(controller))
    controller.submit_answer(_correct_index(controller))
    controller.submit_answer(_wrong_index(controller))

    snapshot = controller.snapshot()
    assert snapshot.score == 1
    assert snapshot.answered_state is AnsweredState.ANSWERED_CORRECT
    assert synthesizer.cues == [CueName.CORRECT]


def test_timeout_resolves_like_a_wrong_answer(
    controller: QuizSessionController,
    scheduler: ManualTaskScheduler,
    synthesizer: RecordingSynthesizer,
) -> None:
    controller.start(1)
    scheduler.advance(30)

    snapshot = controller.snapshot()
    assert snapshot.state is SessionState.SHOWING_FEEDBACK
    assert snapshot.answered_state is AnsweredState.TIMED_OUT
    assert snapshot.selected_option_index is None
    assert snapshot.time_remaining == 0
    assert snapshot.score == 0
    assert synthesizer.cues == [CueName.INCORRECT]
    # Only the feedback timer is left; the countdown is gone.
    assert scheduler.pending_count() == 1


def test_timeout_and_wrong_answer_award_the_same(
    bank: QuestionBank, scheduler: ManualTaskScheduler
) -> None:
    results = []
    for answer in (False, True):
        synthesizer = RecordingSynthesizer()
        controller = QuizSessionController(
            bank, scheduler, synthesizer, scoring_variant=PointsWithBonus(), rng=random.Random(3)
        )
        controller.start(1)
        if answer:
            controller.submit_answer(_wrong_index(controller))
        else:
            scheduler.advance(30)
        snapshot = controller.snapshot()
        results.append((snapshot.score, snapshot.points, synthesizer.cues))
        controller.dispose()

    assert results[0] == results[1] == (0, 0, [CueName.INCORRECT])


@pytest.mark.parametrize("option_index", [-1, 4, 99])
def test_out_of_range_answer_is_rejected_without_mutation(
    controller: QuizSessionController,
    scheduler: ManualTaskScheduler,
    synthesizer: RecordingSynthesizer,
    option_index: int,
) -> None:
    controller.start(2)
    before = controller.snapshot()
    with pytest.raises(InvalidAnswerIndex):
        controller.submit_answer(option_index)

    assert controller.snapshot() == before
    assert synthesizer.cues == []
    scheduler.advance(1)
    assert controller.snapshot().time_remaining == 29


def test_submit_before_start_or_after_completion_fails(
    controller: QuizSessionController, scheduler: ManualTaskScheduler
) -> None:
    with pytest.raises(InvalidSessionState):
        controller.submit_answer(0)

    controller.start(1)
    controller.submit_answer(0)
    scheduler.advance(FEEDBACK_SECONDS)
    assert controller.state is SessionState.COMPLETE
    with pytest.raises(InvalidSessionState):
        controller.submit_answer(0)


def test_advance_outside_feedback_fails(controller: QuizSessionController) -> None:
    with pytest.raises(InvalidSessionState):
        controller.advance()
    controller.start(1)
    with pytest.raises(InvalidSessionState):
        controller.advance()


def test_manual_advance_cancels_the_feedback_timer(
    controller: QuizSessionController, scheduler: ManualTaskScheduler
) -> None:
    controller.start(2)
    controller.submit_answer(0)
    controller.advance()

    assert controller.snapshot().current_index == 1
    assert scheduler.pending_count() == 1
    scheduler.advance(FEEDBACK_SECONDS)
    snapshot = controller.snapshot()
    assert snapshot.current_index == 1
    assert snapshot.state is SessionState.AWAITING_ANSWER


def test_on_timeout_outside_answer_phase_is_ignored(
    controller: QuizSessionController, synthesizer: RecordingSynthesizer
) -> None:
    controller.on_timeout()
    assert controller.state is SessionState.READY

    controller.start(2)
    controller.submit_answer(_correct_index(controller))
    controller.on_timeout()
    snapshot = controller.snapshot()
    assert snapshot.answered_state is AnsweredState.ANSWERED_CORRECT
    assert synthesizer.cues == [CueName.CORRECT]


def test_countdown_stops_while_feedback_is_shown(
    controller: QuizSessionController, scheduler: ManualTaskScheduler
) -> None:
    controller.start(2)
    scheduler.advance(4)
    controller.submit_answer(0)
    scheduler.advance(FEEDBACK_SECONDS - 0.5)
    assert controller.snapshot().time_remaining == 26


def test_next_question_gets_a_fresh_countdown(
    controller: QuizSessionController, scheduler: ManualTaskScheduler
) -> None:
    controller.start(2)
    scheduler.advance(10)
    controller.submit_answer(0)
    scheduler.advance(FEEDBACK_SECONDS)

    snapshot = controller.snapshot()
    assert snapshot.current_index == 1
    assert snapshot.time_remaining == 30
    assert snapshot.answered_state is AnsweredState.UNANSWERED
    assert snapshot.selected_option_index is None


def test_cue_sequence_over_a_run(
    controller: QuizSessionController,
    scheduler: ManualTaskScheduler,
    synthesizer: RecordingSynthesizer,
) -> None:
    controller.start(2)
    controller.submit_answer(_correct_index(controller))
    scheduler.advance(FEEDBACK_SECONDS)
    controller.submit_answer(_wrong_index(controller))
    scheduler.advance(FEEDBACK_SECONDS)

    assert synthesizer.cues == [
        CueName.CORRECT,
        CueName.TRANSITION,
        CueName.INCORRECT,
        CueName.TRANSITION,
    ]


def test_on_complete_fires_exactly_once(
    controller: QuizSessionController,
    scheduler: ManualTaskScheduler,
    reports: list[SessionReport],
) -> None:
    controller.start(1)
    controller.submit_answer(0)
    scheduler.advance(FEEDBACK_SECONDS)
    scheduler.advance(120)
    controller.on_timeout()

    assert len(reports) == 1
    assert reports[0].total_questions == 1


def test_restart_cancels_prior_timers(
    controller: QuizSessionController, scheduler: ManualTaskScheduler
) -> None:
    controller.start(2)
    scheduler.advance(5)
    controller.start(3)

    assert scheduler.pending_count() == 1
    snapshot = controller.snapshot()
    assert snapshot.total == 3
    assert snapshot.time_remaining == 30
    scheduler.advance(1)
    assert controller.snapshot().time_remaining == 29


def test_restart_during_feedback_drops_the_pending_advance(
    controller: QuizSessionController, scheduler: ManualTaskScheduler
) -> None:
    controller.start(2)
    controller.submit_answer(0)
    controller.start(2)
    scheduler.advance(FEEDBACK_SECONDS)

    snapshot = controller.snapshot()
    assert snapshot.current_index == 0
    assert snapshot.state is SessionState.AWAITING_ANSWER


def test_failed_start_keeps_the_current_run(
    controller: QuizSessionController, scheduler: ManualTaskScheduler
) -> None:
    with pytest.raises(InsufficientQuestions):
        controller.start(7)
    assert controller.state is SessionState.READY

    controller.start(2)
    before = controller.snapshot()
    with pytest.raises(InsufficientQuestions):
        controller.start(3, Difficulty.EASY)
    assert controller.snapshot() == before
    scheduler.advance(1)
    assert controller.snapshot().time_remaining == 29


def test_dispose_cancels_all_timers(
    controller: QuizSessionController, scheduler: ManualTaskScheduler
) -> None:
    controller.start(2)
    controller.dispose()
    assert scheduler.pending_count() == 0
    scheduler.advance(100)
    snapshot = controller.snapshot()
    assert snapshot.time_remaining == 30
    assert snapshot.state is SessionState.DISPOSED


def test_disposed_controller_rejects_further_commands(
    controller: QuizSessionController,
    scheduler: ManualTaskScheduler,
    reports: list[SessionReport],
) -> None:
    controller.start(1)
    controller.dispose()

    with pytest.raises(InvalidSessionState):
        controller.submit_answer(0)
    with pytest.raises(InvalidSessionState):
        controller.advance()
    with pytest.raises(InvalidSessionState):
        controller.start(1)
    controller.on_timeout()
    controller.dispose()
    scheduler.advance(10)

    assert controller.state is SessionState.DISPOSED
    assert scheduler.pending_count() == 0
    assert reports == []


def test_dispose_during_feedback_drops_the_pending_advance(
    controller: QuizSessionController,
    scheduler: ManualTaskScheduler,
    reports: list[SessionReport],
) -> None:
    controller.start(1)
    controller.submit_answer(_correct_index(controller))
    controller.dispose()
    scheduler.advance(100)

    assert controller.state is SessionState.DISPOSED
    assert reports == []


def test_is_active_only_while_a_run_is_in_progress(
    controller: QuizSessionController, scheduler: ManualTaskScheduler
) -> None:
    assert not controller.is_active
    controller.start(1)
    assert controller.is_active
    controller.submit_answer(_wrong_index(controller))
    assert controller.is_active
    scheduler.advance(FEEDBACK_SECONDS)
    assert controller.state is SessionState.COMPLETE
    assert not controller.is_active
    controller.dispose()
    assert not controller.is_active


def test_points_variant_accumulates_time_bonus(
    bank: QuestionBank,
    scheduler: ManualTaskScheduler,
    synthesizer: RecordingSynthesizer,
    reports: list[SessionReport],
) -> None:
    controller = QuizSessionController(
        bank,
        scheduler,
        synthesizer,
        scoring_variant=PointsWithBonus(base_points=100, per_second_weight=10),
        feedback_seconds=1.0,
        rng=random.Random(8),
        on_complete=reports.append,
    )
    controller.start(2)
    scheduler.advance(10)
    controller.submit_answer(_correct_index(controller))
    assert controller.snapshot().points == 300
    scheduler.advance(1.0)
    controller.submit_answer(_wrong_index(controller))
    scheduler.advance(1.0)

    assert reports == [SessionReport(correct_count=1, total_questions=2, bonus=200)]


def test_per_question_time_override(
    bank: QuestionBank, scheduler: ManualTaskScheduler, synthesizer: RecordingSynthesizer
) -> None:
    controller = QuizSessionController(bank, scheduler, synthesizer, per_question_seconds=5)
    controller.start(1)
    assert controller.snapshot().time_remaining == 5
    scheduler.advance(5)
    assert controller.snapshot().answered_state is AnsweredState.TIMED_OUT


def _classic_controller_with_fixed_time(
    bank: QuestionBank,
    scheduler: ManualTaskScheduler,
    synthesizer: RecordingSynthesizer,
    reports: list[SessionReport],
) -> QuizSessionController:
    settings = preset("classic").with_updates(per_question_seconds=15, shuffle_seed=5)
    assert settings.scoring_variant.per_question_budget_seconds == 30
    return QuizSessionController.from_settings(
        bank, scheduler, synthesizer, settings, on_complete=reports.append
    )


def test_fixed_time_sets_the_count_based_budget_when_all_time_out(
    bank: QuestionBank,
    scheduler: ManualTaskScheduler,
    synthesizer: RecordingSynthesizer,
    reports: list[SessionReport],
) -> None:
    controller = _classic_controller_with_fixed_time(bank, scheduler, synthesizer, reports)
    controller.start(4)
    # 4 x (15 s countdown + 2 s feedback) = 68 s, past the 60 s budget
    scheduler.advance(68)

    assert reports == [SessionReport(correct_count=0, total_questions=4, bonus=0)]


def test_fixed_time_sets_the_count_based_budget_for_quick_answers(
    bank: QuestionBank,
    scheduler: ManualTaskScheduler,
    synthesizer: RecordingSynthesizer,
    reports: list[SessionReport],
) -> None:
    controller = _classic_controller_with_fixed_time(bank, scheduler, synthesizer, reports)
    controller.start(4)
    for _ in range(4):
        scheduler.advance(5)
        controller.submit_answer(_correct_index(controller))
        scheduler.advance(2.0)

    # floor((4 * 15 - 28) / 10)
    assert reports == [SessionReport(correct_count=4, total_questions=4, bonus=3)]


def test_difficulty_filter_limits_the_draw(controller: QuizSessionController) -> None:
    controller.start(2, Difficulty.HARD)
    question = controller.snapshot().current_question
    assert question is not None
    assert question.difficulty is Difficulty.HARD


def test_from_settings_is_reproducible_with_a_seed(
    bank: QuestionBank, scheduler: ManualTaskScheduler, synthesizer: RecordingSynthesizer
) -> None:
    settings = GameSettings(question_count=4, shuffle_seed=42, feedback_seconds=1.0)
    orders = []
    for _ in range(2):
        controller = QuizSessionController.from_settings(bank, scheduler, synthesizer, settings)
        controller.start(settings.question_count)
        question = controller.snapshot().current_question
        assert question is not None
        orders.append((question.id, question.options))
        controller.dispose()

    assert orders[0] == orders[1]
    assert isinstance(controller.scoring_variant, PointsWithBonus)
