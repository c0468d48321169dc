# src/domain/Services/match_pipeline.py
from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from src.domain.Interfaces.text_normalizer import ITextNormalizer
from src.domain.Models.decode_event import DecodeEvent
from src.domain.Models.pipeline_result import ObservedEvent, MatchedEvent, PipelineResult
from src.domain.Models.target_set import TargetSet
from src.core.config import settings

logger = logging.getLogger(__name__)


class CooldownGate:
    """
    Compuerta de dos estados (aceptando / suprimiendo).
    Solo guarda el instante del último evento aceptado; se reabre por tiempo.
    """

    def __init__(self, period: float):
        self.period = period
        self.last_accepted_at: Optional[float] = None   # None = nunca

    def try_accept(self, now: float) -> bool:
        if self.last_accepted_at is not None and (now - self.last_accepted_at) < self.period:
            return False
        self.last_accepted_at = now
        return True

    def reset(self) -> None:
        self.last_accepted_at = None


class MatchPipeline:
    """
    Filtro/dispatcher de eventos de decodificación.

    Por cada DecodeEvent:
    1) cooldown: si no pasó `cooldown_period` desde el último aceptado -> Suppressed.
    2) normaliza el payload y la lista de seriales (en ese momento, sin caché).
    3) membresía exacta sobre las formas normalizadas.
    4) emite ObservedEvent siempre y MatchedEvent solo si hubo coincidencia.

    No valida nada: payloads vacíos o bounds degenerados se procesan igual.
    No es thread-safe: ingest() debe llamarse desde un único hilo a la vez.
    """

    def __init__(
        self,
        target_set: TargetSet,
        normalizer: ITextNormalizer,
        cooldown_period: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.target_set = target_set
        self.normalizer = normalizer
        self.clock = clock
        period = cooldown_period if cooldown_period is not None else float(getattr(settings, "cooldown_period", 0.5))
        self.gate = CooldownGate(period)

    @property
    def cooldown_period(self) -> float:
        return self.gate.period

    # ---------------------------------------------------------
    #  API PRINCIPAL
    # ---------------------------------------------------------
    def ingest(self, event: DecodeEvent) -> PipelineResult:
        now = event.timestamp if event.timestamp is not None else self.clock()

        # 1) Cooldown
        if not self.gate.try_accept(now):
            logger.debug("Suprimido por cooldown: %r (t=%.3f)", event.payload, now)
            return PipelineResult.suppressed()

        # 2) + 3) Normalizar y buscar
        is_match = self.is_target(event.payload)

        # 4) Emitir
        observed = ObservedEvent(payload=event.payload)
        if not is_match:
            logger.debug("Escaneado %r sin coincidencia", event.payload)
            return PipelineResult.processed(observed)

        logger.info("🎯 Serial encontrado: %s", event.payload)
        matched = MatchedEvent(payload=event.payload, bounds=event.bounds, timestamp=now)
        return PipelineResult.processed(observed, matched)

    def is_target(self, payload: str) -> bool:
        norm = self.normalizer.normalize(payload)
        # TargetSet puede haber cambiado desde el último evento
        return any(self.normalizer.normalize(s) == norm for s in self.target_set.snapshot())

    # utilidad para tests / operativa
    def reset(self) -> None:
        self.gate.reset()
