import logging
import time
import threading
import queue
from dataclasses import dataclass, field
from typing import Callable, List

from src.monitoring.metrics import (
    camera_fps, decode_events_total, decode_events_suppressed_total,
    barcode_matches_total, decoder_latency, pipeline_latency,
)

from src.core.exceptions import CameraUnavailableError
from src.domain.Interfaces.camera_stream import ICameraStream
from src.domain.Interfaces.barcode_decoder import IBarcodeDecoder
from src.domain.Interfaces.presentation_sink import IPresentationSink
from src.domain.Models.app_state import AppState
from src.domain.Models.frame import Frame
from src.domain.Models.pipeline_result import PipelineResult
from src.domain.Services.match_pipeline import MatchPipeline

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PresentCommand:
    """Trabajo que debe correr en el hilo de presentación (p.ej. borrar el resaltado)."""
    func: Callable
    args: tuple = field(default_factory=tuple)


class ScannerService:
    """
    Orquesta cámara -> decoder -> MatchPipeline -> presentación.

    Hilos:
    - capture:  lee frames y los encola (cola acotada, modo last-wins)
    - process:  UN solo worker; decodifica y llama a pipeline.ingest en orden
    - present:  único contexto de presentación (historial, resaltado, alerta)
    """

    def __init__(
        self,
        camera_stream: ICameraStream,
        decoder: IBarcodeDecoder,
        pipeline: MatchPipeline,
        sink: IPresentationSink,
        state: AppState,
        max_fps: float = 15.0,
        frame_sample_interval: int = 1,
        warmup_frames: int = 0,
    ):
        self.camera_stream = camera_stream
        self.decoder = decoder
        self.pipeline = pipeline
        self.sink = sink
        self.state = state

        self.max_fps = max_fps
        self.frame_interval = 1.0 / max_fps if max_fps > 0 else 0.0
        self.frame_sample_interval = max(1, frame_sample_interval)
        self.warmup_frames = max(0, warmup_frames)

        self.camera_id = getattr(camera_stream, "camera_id", None) or "default"

        self.stop_event = threading.Event()
        self.ready = threading.Event()

        # queues
        self.capture_queue = queue.Queue(maxsize=3)
        # sin límite: un resultado aceptado ya consumió su ventana de cooldown
        self.present_queue = queue.Queue()

        # threads
        self.capture_thread: threading.Thread | None = None
        self.process_thread: threading.Thread | None = None
        self.present_thread: threading.Thread | None = None

    # ---------------------------------------------------------
    # START / STOP
    # ---------------------------------------------------------
    def start(self):
        logger.info(f"Iniciando escáner {self.camera_id} (decoder={self.decoder.name})")

        self.stop_event.clear()
        self.ready.clear()

        try:
            self.camera_stream.connect()
        except CameraUnavailableError as e:
            self.state.camera_available = False
            self.state.report_error(str(e))
            logger.error(f"❌ Cámara {self.camera_id} no disponible: {e}")
            raise

        self.state.camera_available = True
        self.state.scanning = True
        if self.warmup_frames == 0:
            self.ready.set()

        self.present_thread = threading.Thread(
            target=self._present_loop,
            name=f"present-{self.camera_id}",
            daemon=True,
        )
        self.present_thread.start()

        self.process_thread = threading.Thread(
            target=self._process_loop,
            name=f"process-{self.camera_id}",
            daemon=True,
        )
        self.process_thread.start()

        self.capture_thread = threading.Thread(
            target=self._capture_loop,
            name=f"capture-{self.camera_id}",
            daemon=True,
        )
        self.capture_thread.start()

    def stop(self):
        logger.info(f"Deteniendo escáner {self.camera_id}")

        self.stop_event.set()
        self.state.scanning = False

        self._enqueue_last_wins(self.capture_queue, None)
        for t in (self.capture_thread, self.process_thread):
            if t:
                t.join(timeout=2)

        # presentación al final: vacía los resultados ya aceptados antes de salir
        self.present_queue.put(None)
        if self.present_thread:
            self.present_thread.join(timeout=2)

        try:
            self.camera_stream.disconnect()
        except Exception:
            logger.exception("Error desconectando cámara")

    # ---------------------------------------------------------
    # CAPTURE LOOP
    # ---------------------------------------------------------
    def _capture_loop(self):
        last_frame_time = 0.0
        captured = 0
        fps_counter = 0
        fps_timer = time.monotonic()

        while not self.stop_event.is_set():
            now = time.monotonic()

            if now - last_frame_time < self.frame_interval:
                time.sleep(0.001)
                continue

            frame = self.camera_stream.read_frame(timeout=1.0)
            last_frame_time = now

            if frame is None:
                time.sleep(0.05)
                continue

            captured += 1
            fps_counter += 1
            if time.monotonic() - fps_timer >= 1:
                camera_fps.labels(camera_id=self.camera_id).set(fps_counter)
                logger.debug(f"[{self.camera_id}] FPS actual: {fps_counter}")
                fps_counter = 0
                fps_timer = time.monotonic()

            # readiness gate: descartar los primeros frames (exposición / foco)
            if not self.ready.is_set():
                if captured <= self.warmup_frames:
                    continue
                logger.info(f"[{self.camera_id}] Cámara lista tras {self.warmup_frames} frames de calentamiento")
                self.ready.set()

            # muestreo: decodificar solo cada N frames
            if captured % self.frame_sample_interval != 0:
                continue

            self._enqueue_last_wins(self.capture_queue, frame)

        logger.info(f"[{self.camera_id}] Capture loop terminado")

    @staticmethod
    def _enqueue_last_wins(q: queue.Queue, item) -> None:
        try:
            q.put_nowait(item)
        except queue.Full:
            try:
                q.get_nowait()
                q.put_nowait(item)
            except (queue.Empty, queue.Full):
                # si no se puede, simplemente se descarta este frame
                pass

    # ---------------------------------------------------------
    # PROCESS LOOP (un solo worker => ingest serializado)
    # ---------------------------------------------------------
    def _process_loop(self):
        while not self.stop_event.is_set():
            try:
                frame = self.capture_queue.get(timeout=1.0)
            except queue.Empty:
                continue

            if frame is None:
                break

            try:
                self.process_frame(frame)
            except Exception:
                logger.exception(f"[{self.camera_id}] Error procesando frame")

        logger.info(f"[{self.camera_id}] Process loop terminado")

    def process_frame(self, frame: Frame) -> List[PipelineResult]:
        """
        Decodifica un frame y pasa cada código por el pipeline, en el orden
        que los entregó el decoder. Los resultados no suprimidos se envían
        al hilo de presentación. Devuelve todos los resultados.
        """
        t0 = time.perf_counter()

        try:
            events = self.decoder.decode(frame) or []
        except Exception:
            logger.exception(f"[{self.camera_id}] Decoder falló; saltando frame")
            return []
        decoder_latency.labels(camera_id=self.camera_id).set(time.perf_counter() - t0)

        if not events:
            return []

        results = []
        for event in events:
            decode_events_total.labels(camera_id=self.camera_id).inc()
            result = self.pipeline.ingest(event)
            results.append(result)

            if result.is_suppressed:
                decode_events_suppressed_total.labels(camera_id=self.camera_id).inc()
                continue
            if result.is_match:
                barcode_matches_total.labels(camera_id=self.camera_id).inc()

            self._dispatch(result)

        pipeline_latency.labels(camera_id=self.camera_id).set(time.perf_counter() - t0)
        logger.debug(
            f"[{self.camera_id}] frame={frame.index} events={len(events)} "
            f"accepted={sum(not r.is_suppressed for r in results)}"
        )
        return results

    def _dispatch(self, result: PipelineResult) -> None:
        self.present_queue.put(result)

    def call_in_present(self, func: Callable, *args) -> None:
        """Encola `func(*args)` para el hilo de presentación."""
        self.present_queue.put(PresentCommand(func=func, args=args))

    # ---------------------------------------------------------
    # PRESENT LOOP (contexto "UI")
    # ---------------------------------------------------------
    def _present_loop(self):
        # solo el centinela de stop() termina el loop, así no se pierde nada encolado
        while True:
            try:
                item = self.present_queue.get(timeout=1)
            except queue.Empty:
                continue

            if item is None:
                self.present_queue.task_done()
                break

            try:
                if isinstance(item, PresentCommand):
                    item.func(*item.args)
                else:
                    self.sink.present(item)
            except Exception:
                logger.exception(f"[{self.camera_id}] Error presentando resultado")
            finally:
                self.present_queue.task_done()

        logger.info(f"[{self.camera_id}] Present loop terminado")
