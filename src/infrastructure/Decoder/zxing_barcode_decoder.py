# src/infrastructure/Decoder/zxing_barcode_decoder.py
import logging
from typing import List

from src.core.exceptions import DecoderUnavailableError
from src.domain.Interfaces.barcode_decoder import IBarcodeDecoder
from src.domain.Models.decode_event import DecodeEvent
from src.domain.Models.frame import Frame
from src.infrastructure.Decoder.geometry import bounds_from_points

logger = logging.getLogger(__name__)


class ZXingBarcodeDecoder(IBarcodeDecoder):
    """
    Decoder basado en ZXing-C++ (zxing-cpp).
    Lee todos los formatos que soporta la librería: EAN, Code128, QR, PDF417, DataMatrix...
    """
    name = "zxing"

    def __init__(self, try_rotate: bool = True):
        try:
            import zxingcpp
        except ImportError as e:
            raise DecoderUnavailableError(
                "zxing-cpp no está instalado. Instala con `pip install zxing-cpp`."
            ) from e

        self._zxing = zxingcpp
        self.try_rotate = try_rotate

    def decode(self, frame: Frame) -> List[DecodeEvent]:
        results = self._zxing.read_barcodes(frame.data, try_rotate=self.try_rotate)

        events = []
        for r in results:
            text = getattr(r, "text", None)
            if text is None:
                continue
            if getattr(r, "valid", True) is False:
                continue
            events.append(DecodeEvent(
                payload=text,
                bounds=self._bounds(r),
                timestamp=frame.timestamp,
                symbology=self._format_name(r),
            ))
        return events

    @staticmethod
    def _bounds(result):
        pos = getattr(result, "position", None)
        if pos is None:
            return None
        corners = (pos.top_left, pos.top_right, pos.bottom_right, pos.bottom_left)
        return bounds_from_points((c.x, c.y) for c in corners)

    @staticmethod
    def _format_name(result) -> str:
        fmt = getattr(result, "format", None)
        if hasattr(fmt, "name"):
            return fmt.name
        return str(fmt) if fmt is not None else "UNKNOWN"
