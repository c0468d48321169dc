from itertools import cycle
from typing import Iterable, List, Optional

from src.domain.Interfaces.barcode_decoder import IBarcodeDecoder
from src.domain.Models.decode_event import DecodeEvent
from src.domain.Models.frame import Frame


class DummyBarcodeDecoder(IBarcodeDecoder):
    """
    Implementación dummy: devuelve payloads fijos en rotación, uno por frame.
    Útil para demos sin librería de decodificación y para tests.
    """
    name = "dummy"

    def __init__(self, payloads: Iterable[str] = (), bounds=(50, 50, 200, 100)):
        self.payloads = [p for p in payloads if p]
        self.bounds = bounds
        self._it: Optional[cycle] = cycle(self.payloads) if self.payloads else None

    def decode(self, frame: Frame) -> List[DecodeEvent]:
        if self._it is None:
            return []
        return [DecodeEvent(payload=next(self._it), bounds=self.bounds, timestamp=frame.timestamp)]
