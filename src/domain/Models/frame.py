from dataclasses import dataclass
import numpy as np


@dataclass
class Frame:
    """
    Frame capturado desde la cámara, listo para el decoder de códigos.
    """
    data: np.ndarray   # imagen BGR en formato numpy array
    timestamp: float   # time.monotonic() al momento de la captura
    source: str        # camera_id o URL de origen
    index: int = 0     # contador de frames del stream

    @property
    def image(self) -> np.ndarray:
        """Alias para decoders que esperan 'image'."""
        return self.data

    @property
    def size(self) -> tuple[int, int] | None:
        """(height, width) o None si no hay imagen."""
        if isinstance(self.data, np.ndarray) and self.data.ndim >= 2:
            h, w = self.data.shape[:2]
            return (h, w)
        return None
