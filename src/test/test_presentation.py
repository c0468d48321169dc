"""
Tests del presenter: historial, resaltado transitorio y alerta.
"""

import io

from src.domain.Models.pipeline_result import MatchedEvent, ObservedEvent, PipelineResult
from src.infrastructure.Presentation.haptic_notifiers import BellNotifier


def processed(payload, matched_bounds=None):
    matched = None
    if matched_bounds is not None:
        matched = MatchedEvent(payload=payload, bounds=matched_bounds, timestamp=1.0)
    return PipelineResult.processed(ObservedEvent(payload=payload), matched)


class TestHighlightController:

    def test_show_sets_current_and_schedules_clear(self, highlighter, fake_timers):
        h = highlighter.show("SN1", (1, 2, 3, 4))

        assert highlighter.current() == h
        assert len(fake_timers) == 1
        assert fake_timers[0].interval == 1.0
        assert fake_timers[0].started

        fake_timers[0].fire()
        assert highlighter.current() is None

    def test_newer_highlight_cancels_previous_clear(self, highlighter, fake_timers):
        highlighter.show("SN1", (1, 2, 3, 4))
        second = highlighter.show("SN2", (5, 6, 7, 8))

        assert fake_timers[0].cancelled
        # aunque el timer viejo dispare, no borra el nuevo
        fake_timers[0].function(*fake_timers[0].args)
        assert highlighter.current() == second

        fake_timers[1].fire()
        assert highlighter.current() is None

    def test_on_change_callback(self, highlighter, fake_timers):
        changes = []
        highlighter.on_change = changes.append

        highlighter.show("A", None)
        fake_timers[0].fire()
        assert [c.payload if c else None for c in changes] == ["A", None]

    def test_clear_goes_through_dispatcher(self, highlighter, fake_timers):
        pending = []
        highlighter.dispatcher = lambda func, *args: pending.append((func, args))

        highlighter.show("A", None)
        fake_timers[0].fire()
        assert highlighter.current() is not None

        func, args = pending.pop()
        func(*args)
        assert highlighter.current() is None

    def test_cancel_without_highlight_is_noop(self, highlighter):
        highlighter.cancel()
        assert highlighter.current() is None


class TestFeedbackPresenter:

    def test_every_observed_goes_to_history_once(self, presenter, state):
        presenter.present(processed("A"))
        presenter.present(processed("B"))
        presenter.present(processed("A"))

        assert state.history.items() == ["A", "B"]
        assert presenter.last_result.observed.duplicate is True

    def test_first_observation_is_not_duplicate(self, presenter):
        presenter.present(processed("A"))
        assert presenter.last_result.observed.duplicate is False

    def test_match_highlights_and_notifies_once(self, presenter, highlighter, notifier):
        presenter.present(processed("SN1", matched_bounds=(10, 10, 50, 20)))

        assert highlighter.current().bounds == (10, 10, 50, 20)
        assert len(notifier.events) == 1
        assert notifier.events[0].payload == "SN1"

    def test_non_match_has_no_side_effects(self, presenter, highlighter, notifier):
        presenter.present(processed("other"))
        assert highlighter.current() is None
        assert notifier.events == []

    def test_suppressed_is_ignored(self, presenter, state):
        presenter.present(PipelineResult.suppressed())
        assert state.history.items() == []
        assert presenter.last_result is None

    def test_notifier_failure_does_not_break_presentation(self, presenter, state, notifier):
        def boom(event):
            raise RuntimeError("sin vibrador")
        notifier.notify = boom

        presenter.present(processed("SN1", matched_bounds=(0, 0, 1, 1)))
        assert state.history.items() == ["SN1"]


class TestBellNotifier:

    def test_writes_bell(self):
        out = io.StringIO()
        BellNotifier(stream=out).notify(MatchedEvent(payload="X", bounds=None, timestamp=0.0))
        assert out.getvalue() == "\a"
