# src/infrastructure/Presentation/feedback_presenter.py
import dataclasses
import logging
from typing import Optional

from src.domain.Interfaces.haptic_notifier import IHapticNotifier
from src.domain.Interfaces.presentation_sink import IPresentationSink
from src.domain.Models.pipeline_result import PipelineResult
from src.domain.Models.scan_history import ScanHistory
from src.infrastructure.Presentation.highlight_controller import HighlightController

logger = logging.getLogger(__name__)


class FeedbackPresenter(IPresentationSink):
    """
    Aplica los efectos de cada resultado del pipeline:
    - ObservedEvent -> historial (sin repetidos, comparación exacta) y flag duplicate
    - MatchedEvent  -> resaltado transitorio en bounds + UNA alerta
    Debe ejecutarse siempre desde el mismo hilo de presentación.
    """

    def __init__(self, history: ScanHistory, highlighter: HighlightController, notifier: IHapticNotifier):
        self.history = history
        self.highlighter = highlighter
        self.notifier = notifier
        self.last_result: Optional[PipelineResult] = None

    def present(self, result: PipelineResult) -> None:
        if result.is_suppressed or result.observed is None:
            return

        added = self.history.record(result.observed.payload)
        if added:
            logger.info(f"📥 Escaneado: {result.observed.payload}")
        else:
            logger.debug(f"Duplicado ignorado en historial: {result.observed.payload}")

        observed = dataclasses.replace(result.observed, duplicate=not added)
        result = dataclasses.replace(result, observed=observed)

        if result.matched is not None:
            self.highlighter.show(result.matched.payload, result.matched.bounds)
            try:
                self.notifier.notify(result.matched)
            except Exception:
                logger.exception("Error emitiendo alerta de coincidencia")

        self.last_result = result
