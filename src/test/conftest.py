"""
Fixtures compartidas: estado de la app, pipeline y presenter sin cámara ni librerías de decodificación.
"""

import numpy as np
import pytest

from src.domain.Models.app_state import AppState
from src.domain.Models.frame import Frame
from src.domain.Models.scan_history import ScanHistory
from src.domain.Models.target_set import TargetSet
from src.domain.Services.match_pipeline import MatchPipeline
from src.infrastructure.Normalizer.serial_normalizer import SerialNormalizer
from src.infrastructure.Presentation.feedback_presenter import FeedbackPresenter
from src.infrastructure.Presentation.haptic_notifiers import NullNotifier
from src.infrastructure.Presentation.highlight_controller import HighlightController


class FakeTimer:
    """Reemplazo de threading.Timer que no dispara hasta que el test lo pide."""

    instances = []

    def __init__(self, interval, function, args=None, kwargs=None):
        self.interval = interval
        self.function = function
        self.args = args or ()
        self.kwargs = kwargs or {}
        self.daemon = False
        self.started = False
        self.cancelled = False
        FakeTimer.instances.append(self)

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        if not self.cancelled:
            self.function(*self.args, **self.kwargs)


class RecordingNotifier(NullNotifier):
    def __init__(self):
        self.events = []

    def notify(self, event):
        self.events.append(event)


@pytest.fixture
def normalizer() -> SerialNormalizer:
    return SerialNormalizer()


@pytest.fixture
def target_set(normalizer) -> TargetSet:
    return TargetSet(normalizer)


@pytest.fixture
def pipeline(target_set, normalizer) -> MatchPipeline:
    return MatchPipeline(target_set=target_set, normalizer=normalizer, cooldown_period=0.5)


@pytest.fixture
def state(target_set) -> AppState:
    return AppState(target_set=target_set, history=ScanHistory())


@pytest.fixture
def fake_timers():
    FakeTimer.instances = []
    yield FakeTimer.instances


@pytest.fixture
def highlighter(fake_timers) -> HighlightController:
    return HighlightController(duration=1.0, timer_factory=FakeTimer)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def presenter(state, highlighter, notifier) -> FeedbackPresenter:
    return FeedbackPresenter(history=state.history, highlighter=highlighter, notifier=notifier)


@pytest.fixture
def make_frame():
    def _make(timestamp: float, index: int = 1) -> Frame:
        return Frame(data=np.zeros((120, 160, 3), dtype=np.uint8), timestamp=timestamp, source="test", index=index)
    return _make
