# src/infrastructure/Camera/camera_factory.py
from src.core.config import settings
from src.domain.Interfaces.camera_stream import ICameraStream


def create_camera_stream(url: str | None = None, camera_id: str | None = None) -> ICameraStream:
    """
    Factory del stream correcto según configuración:
    - fake://video.mp4 -> FakeCameraStream (pruebas / demos)
    - cualquier otra URL -> OpenCVCameraStream (RTSP/HTTP/archivo)
    - sin URL -> dispositivo local settings.camera_index
    """
    url = url if url is not None else settings.camera_url
    camera_id = camera_id or settings.camera_id

    # ==========================================================
    # 🧪 1) Fake camera
    # ==========================================================
    if url and url.startswith("fake://"):
        from src.infrastructure.Camera.fake_camera_stream import FakeCameraStream
        return FakeCameraStream(video_path=url.replace("fake://", "", 1), camera_id=camera_id)

    # ==========================================================
    # 📷 2) OpenCV (URL o dispositivo local)
    # ==========================================================
    from src.infrastructure.Camera.opencv_camera_stream import OpenCVCameraStream
    source = url if url else settings.camera_index
    return OpenCVCameraStream(source, camera_id=camera_id)
