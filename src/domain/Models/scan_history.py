# src/domain/Models/scan_history.py
import threading
from typing import List


class ScanHistory:
    """
    Historial de todo lo escaneado, en orden de llegada y sin repetidos.
    La comparación es por igualdad exacta del texto crudo (sin normalizar).
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._items: List[str] = []

    def record(self, payload: str) -> bool:
        """True si el payload se agregó, False si ya estaba."""
        with self._lock:
            if payload in self._items:
                return False
            self._items.append(payload)
            return True

    def items(self) -> List[str]:
        with self._lock:
            return list(self._items)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
