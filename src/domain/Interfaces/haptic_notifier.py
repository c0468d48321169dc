from abc import ABC, abstractmethod
from src.domain.Models.pipeline_result import MatchedEvent


class IHapticNotifier(ABC):
    """
    Alerta física/sonora al encontrar un serial (equivalente a la vibración del móvil).
    """
    @abstractmethod
    def notify(self, event: MatchedEvent) -> None:
        """Emite UNA notificación por coincidencia."""
        pass
