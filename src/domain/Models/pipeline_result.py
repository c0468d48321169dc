# src/domain/Models/pipeline_result.py
from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Optional

from src.domain.Models.decode_event import Bounds


@dataclass(frozen=True)
class ObservedEvent:
    """
    Payload aceptado por el pipeline, exactamente como se decodificó.
    `duplicate` lo completa quien mantiene el historial de escaneos.
    """
    payload: str
    duplicate: bool = False


@dataclass(frozen=True)
class MatchedEvent:
    """
    Coincidencia con un número de serie buscado.
    Se consume de inmediato (resaltado + alerta), no se guarda.
    """
    payload: str        # original, sin normalizar
    bounds: Bounds
    timestamp: float


class PipelineStatus(str, Enum):
    SUPPRESSED = "suppressed"
    PROCESSED = "processed"


@dataclass(frozen=True)
class PipelineResult:
    status: PipelineStatus
    observed: Optional[ObservedEvent] = None
    matched: Optional[MatchedEvent] = None

    @classmethod
    def suppressed(cls) -> "PipelineResult":
        return cls(status=PipelineStatus.SUPPRESSED)

    @classmethod
    def processed(cls, observed: ObservedEvent, matched: Optional[MatchedEvent] = None) -> "PipelineResult":
        return cls(status=PipelineStatus.PROCESSED, observed=observed, matched=matched)

    @property
    def is_suppressed(self) -> bool:
        return self.status is PipelineStatus.SUPPRESSED

    @property
    def is_match(self) -> bool:
        return self.matched is not None

    def to_dict(self) -> dict:
        """Convierte a dict serializable (logs / API)."""
        return {
            "status": self.status.value,
            "observed": asdict(self.observed) if self.observed else None,
            "matched": asdict(self.matched) if self.matched else None,
        }
