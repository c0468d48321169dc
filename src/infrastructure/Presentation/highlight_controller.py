# src/infrastructure/Presentation/highlight_controller.py
import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from src.domain.Models.decode_event import Bounds

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Highlight:
    payload: str
    bounds: Bounds
    shown_at: float


class HighlightController:
    """
    Resaltado transitorio sobre el código encontrado.

    show() reemplaza el resaltado actual y programa su borrado tras `duration`
    segundos. Un show() nuevo cancela el borrado pendiente del anterior.
    `timer_factory` permite inyectar un timer falso en tests (misma firma que threading.Timer).
    Con `dispatcher` el borrado no corre en el hilo del timer sino donde lo
    reenvíe el dispatcher (ScannerService.call_in_present).
    """

    def __init__(
        self,
        duration: float = 1.0,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
        on_change: Optional[Callable[[Optional[Highlight]], None]] = None,
        dispatcher: Optional[Callable[..., None]] = None,
    ):
        self.duration = duration
        self.timer_factory = timer_factory
        self.on_change = on_change
        # dispatcher(func, *args): ejecuta func en el hilo de presentación
        self.dispatcher = dispatcher

        self._lock = threading.Lock()
        self._current: Optional[Highlight] = None
        self._timer = None

    def show(self, payload: str, bounds: Bounds) -> Highlight:
        highlight = Highlight(payload=payload, bounds=bounds, shown_at=time.monotonic())

        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._current = highlight
            self._timer = self.timer_factory(self.duration, self._on_timer, args=(highlight,))
            self._timer.daemon = True
            self._timer.start()

        logger.debug("Resaltado %s en %s por %.2fs", payload, bounds, self.duration)
        self._notify(highlight)
        return highlight

    def current(self) -> Optional[Highlight]:
        with self._lock:
            return self._current

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            cleared = self._current is not None
            self._current = None
        if cleared:
            self._notify(None)

    def _on_timer(self, highlight: Highlight) -> None:
        # el timer solo avisa; el borrado lo aplica el contexto de presentación
        if self.dispatcher is None:
            self._expire(highlight)
        else:
            self.dispatcher(self._expire, highlight)

    def _expire(self, highlight: Highlight) -> None:
        with self._lock:
            # si ya hay otro resaltado más nuevo, no se toca
            if self._current is not highlight:
                return
            self._current = None
            self._timer = None
        self._notify(None)

    def _notify(self, highlight: Optional[Highlight]) -> None:
        if self.on_change is None:
            return
        try:
            self.on_change(highlight)
        except Exception:
            logger.exception("Error en callback on_change del resaltado")
