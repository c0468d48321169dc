from abc import ABC, abstractmethod
from src.domain.Models.frame import Frame


class ICameraStream(ABC):
    """
    Abstracción de un stream de cámara.
    """
    camera_id: str | None = None
    url: str | None = None

    @abstractmethod
    def connect(self) -> None:
        """Conecta al stream de video. Lanza CameraUnavailableError si no abre."""
        pass

    @abstractmethod
    def read_frame(self, timeout: float = 1.0) -> Frame | None:
        """Devuelve el último frame disponible o None si vence el timeout."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Cierra la conexión al stream."""
        pass
