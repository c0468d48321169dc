# src/infrastructure/Decoder/opencv_barcode_decoder.py
import logging
from typing import List

import cv2

from src.domain.Interfaces.barcode_decoder import IBarcodeDecoder
from src.domain.Models.decode_event import DecodeEvent
from src.domain.Models.frame import Frame
from src.infrastructure.Decoder.geometry import bounds_from_points

logger = logging.getLogger(__name__)


class OpenCVBarcodeDecoder(IBarcodeDecoder):
    """
    Decoder que usa solo OpenCV:
    - cv2.QRCodeDetector para QR (varios por frame)
    - cv2.barcode.BarcodeDetector para 1D (EAN/UPC/Code128), si el build lo trae
    """
    name = "opencv"

    def __init__(self):
        self.qr = cv2.QRCodeDetector()
        self.linear = None
        if hasattr(cv2, "barcode") and hasattr(cv2.barcode, "BarcodeDetector"):
            self.linear = cv2.barcode.BarcodeDetector()
        else:
            logger.warning("cv2.barcode no disponible en este build; solo se leerán QR.")

    def decode(self, frame: Frame) -> List[DecodeEvent]:
        events = []
        events.extend(self._decode_qr(frame))
        if self.linear is not None:
            events.extend(self._decode_linear(frame))
        return events

    def _decode_qr(self, frame: Frame) -> List[DecodeEvent]:
        ok, texts, points, _ = self.qr.detectAndDecodeMulti(frame.data)
        if not ok or points is None:
            return []

        events = []
        for text, corners in zip(texts, points):
            if not text:
                # detectado pero no decodificable
                continue
            events.append(DecodeEvent(
                payload=text,
                bounds=bounds_from_points(corners),
                timestamp=frame.timestamp,
                symbology="QR_CODE",
            ))
        return events

    def _decode_linear(self, frame: Frame) -> List[DecodeEvent]:
        ok, texts, types, points = self.linear.detectAndDecodeWithType(frame.data)
        if not ok or points is None:
            return []

        events = []
        for text, kind, corners in zip(texts, types, points):
            if not text:
                continue
            events.append(DecodeEvent(
                payload=text,
                bounds=bounds_from_points(corners),
                timestamp=frame.timestamp,
                symbology=str(kind),
            ))
        return events
