import sys
import logging

from src.domain.Interfaces.haptic_notifier import IHapticNotifier
from src.domain.Models.pipeline_result import MatchedEvent

logger = logging.getLogger(__name__)


class BellNotifier(IHapticNotifier):
    """
    Equivalente de escritorio a la vibración: campana de terminal + log.
    """

    def __init__(self, stream=None):
        self.stream = stream or sys.stdout

    def notify(self, event: MatchedEvent) -> None:
        self.stream.write("\a")
        self.stream.flush()
        logger.info(f"🔔 Coincidencia: {event.payload}")


class NullNotifier(IHapticNotifier):
    """No hace nada (alertas deshabilitadas)."""

    def notify(self, event: MatchedEvent) -> None:
        pass
