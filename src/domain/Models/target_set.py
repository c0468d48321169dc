# src/domain/Models/target_set.py
import threading
from typing import Iterable, Iterator, List, Tuple

from src.domain.Interfaces.text_normalizer import ITextNormalizer


class TargetSet:
    """
    Lista ordenada de números de serie buscados.

    - Se guardan tal cual los ingresó el usuario (para mostrarlos).
    - add/remove comparan en forma normalizada: "SN001" y " sn001 " son el mismo serial.
    - snapshot() devuelve una tupla inmutable; el pipeline la lee en cada ingest,
      así que cualquier cambio se ve en el siguiente evento.
    """

    def __init__(self, normalizer: ITextNormalizer, serials: Iterable[str] = ()):
        self.normalizer = normalizer
        self._lock = threading.Lock()
        self._serials: List[str] = []
        self.add_many(serials)

    def add(self, serial: str) -> bool:
        """Agrega un serial. False si está vacío o ya existía (normalizado)."""
        value = serial.strip()
        if not value:
            return False
        norm = self.normalizer.normalize(value)
        with self._lock:
            if any(self.normalizer.normalize(s) == norm for s in self._serials):
                return False
            self._serials.append(value)
        return True

    def add_many(self, serials: Iterable[str] | str) -> List[str]:
        """
        Agrega varios seriales. Acepta un iterable o un texto separado por comas
        ("SN001, SN002"). Devuelve los que realmente se agregaron.
        """
        if isinstance(serials, str):
            serials = serials.split(",")
        added = []
        for s in serials:
            if self.add(s):
                added.append(s.strip())
        return added

    def remove(self, serial: str) -> bool:
        norm = self.normalizer.normalize(serial)
        with self._lock:
            before = len(self._serials)
            self._serials = [s for s in self._serials if self.normalizer.normalize(s) != norm]
            return len(self._serials) != before

    def clear(self) -> None:
        with self._lock:
            self._serials.clear()

    def snapshot(self) -> Tuple[str, ...]:
        with self._lock:
            return tuple(self._serials)

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        with self._lock:
            return len(self._serials)

    def __contains__(self, serial: object) -> bool:
        if not isinstance(serial, str):
            return False
        norm = self.normalizer.normalize(serial)
        return any(self.normalizer.normalize(s) == norm for s in self.snapshot())
