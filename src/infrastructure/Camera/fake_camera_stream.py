import cv2
import time
from src.core.exceptions import CameraUnavailableError
from src.domain.Models.frame import Frame
from src.domain.Interfaces.camera_stream import ICameraStream


class FakeCameraStream(ICameraStream):
    """
    Simula una cámara usando un archivo de video (o una imagen) en loop.
    """

    def __init__(self, video_path: str, camera_id: str = "fake"):
        self.video_path = video_path
        self.camera_id = camera_id
        self.url = f"fake://{video_path}"
        self.cap = None
        self._index = 0

    def connect(self):
        self.cap = cv2.VideoCapture(self.video_path)

        if not self.cap.isOpened():
            raise CameraUnavailableError(f"No se pudo abrir video {self.video_path}")

    def read_frame(self, timeout: float = 1.0) -> Frame | None:
        """
        Devuelve un Frame o None si pasa el timeout.
        Al llegar al final del video vuelve a empezar.
        """
        start = time.monotonic()

        while time.monotonic() - start < timeout:
            ok, image = self.cap.read()

            if ok:
                self._index += 1
                return Frame(
                    data=image,
                    timestamp=time.monotonic(),
                    source=self.camera_id,
                    index=self._index,
                )

            self._restart_video()

        return None

    def _restart_video(self):
        if self.cap:
            self.cap.release()
        self.cap = cv2.VideoCapture(self.video_path)

    def disconnect(self):
        if self.cap:
            self.cap.release()
            self.cap = None
