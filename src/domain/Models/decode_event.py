# src/domain/Models/decode_event.py
from dataclasses import dataclass
from typing import Any, Optional

# (x, y, w, h) en coordenadas de la imagen. El pipeline no la interpreta.
Bounds = Any


@dataclass(frozen=True)
class DecodeEvent:
    """
    Resultado crudo de un decoder: un payload tal cual lo leyó la librería,
    la región donde estaba el código y el instante (monótono) del frame.
    Si timestamp es None el pipeline usa su propio reloj.
    """
    payload: str
    bounds: Bounds = None
    timestamp: Optional[float] = None
    symbology: Optional[str] = None   # EAN13, QR_CODE... solo informativo
