import cv2
import time
import logging
import threading
from typing import Optional

from src.core.exceptions import CameraUnavailableError
from src.domain.Models.frame import Frame
from src.domain.Interfaces.camera_stream import ICameraStream

logger = logging.getLogger(__name__)


class OpenCVCameraStream(ICameraStream):
    """
    ICameraStream sobre cv2.VideoCapture con lectura en hilo separado.
    - Acepta un índice de dispositivo local (0, 1...) o una URL RTSP/HTTP/archivo.
    - El hilo interno mantiene SOLO el último frame; read_frame nunca bloquea por FFMPEG.
    """

    def __init__(self, source: str | int, camera_id: str = "default", reconnect_attempts: int = 3):
        self.source = source
        self.camera_id = camera_id
        self.url = source if isinstance(source, str) else f"device://{source}"
        self.reconnect_attempts = reconnect_attempts

        self.cap = None
        self._frame_lock = threading.Lock()
        self._latest_frame: Optional[Frame] = None
        self._last_returned_index = -1
        self._frame_index = 0
        self._running = False
        self._thread: Optional[threading.Thread] = None

    # ==========================================================
    # CONNECT
    # ==========================================================
    def connect(self) -> None:
        self.cap = self._open()
        if not self.cap or not self.cap.isOpened():
            raise CameraUnavailableError(f"No se pudo abrir la cámara: {self.url}")

        logger.info(f"🎥 Conectado a {self.camera_id} ({self.url})")

        self._running = True
        self._thread = threading.Thread(target=self._update_frames, name=f"reader-{self.camera_id}", daemon=True)
        self._thread.start()

    def _open(self):
        if isinstance(self.source, int):
            return cv2.VideoCapture(self.source)

        cap = cv2.VideoCapture(self.source, cv2.CAP_FFMPEG)
        # Si es RTSP, reducir el buffer
        if self.source.startswith("rtsp://") and cap is not None:
            try:
                cap.set(cv2.CAP_PROP_BUFFERSIZE, 1)
            except cv2.error:
                pass
        return cap

    # ==========================================================
    # THREAD QUE LEE FRAMES CONTINUAMENTE
    # ==========================================================
    def _update_frames(self):
        while self._running:
            if self.cap is None or not self.cap.isOpened():
                if not self._try_reconnect():
                    time.sleep(1)
                continue

            ret, image = self.cap.read()
            if not ret:
                logger.warning(f"[{self.camera_id}] Error al leer frame, intentando reconectar...")
                if not self._try_reconnect():
                    time.sleep(1)
                continue

            with self._frame_lock:
                self._frame_index += 1
                self._latest_frame = Frame(
                    data=image,
                    timestamp=time.monotonic(),
                    source=self.camera_id,
                    index=self._frame_index,
                )

    # ==========================================================
    # READ FRAME
    # ==========================================================
    def read_frame(self, timeout: float = 1.0) -> Frame | None:
        """
        Devuelve el último frame que todavía no se entregó.
        None si no llega ninguno nuevo antes del timeout.
        """
        deadline = time.monotonic() + timeout

        while time.monotonic() < deadline and self._running:
            with self._frame_lock:
                frame = self._latest_frame

            if frame is not None and frame.index != self._last_returned_index:
                self._last_returned_index = frame.index
                return frame

            time.sleep(0.005)

        return None

    # ==========================================================
    # RECONNECT
    # ==========================================================
    def _try_reconnect(self) -> bool:
        for attempt in range(1, self.reconnect_attempts + 1):
            if not self._running:
                return False
            logger.warning(f"[{self.camera_id}] Reintentando conexión {attempt}/{self.reconnect_attempts}...")

            cap = self._open()
            if cap and cap.isOpened():
                self.cap = cap
                logger.info(f"[{self.camera_id}] Reconexión exitosa.")
                return True

            time.sleep(1)

        logger.error(f"[{self.camera_id}] No se pudo reconectar al stream.")
        return False

    # ==========================================================
    # DISCONNECT
    # ==========================================================
    def disconnect(self) -> None:
        self._running = False

        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=2.0)

        if self.cap:
            self.cap.release()
            self.cap = None

        logger.info(f"🔌 Stream cerrado ({self.camera_id}).")

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.disconnect()
