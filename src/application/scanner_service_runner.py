import logging
import time

from src.application.scanner_service import ScannerService
from src.core.config import settings
from src.core.exceptions import ScannerError
from src.domain.Models.app_state import AppState
from src.domain.Models.target_set import TargetSet
from src.domain.Services.match_pipeline import MatchPipeline
from src.infrastructure.Camera.camera_factory import create_camera_stream
from src.infrastructure.Decoder.factory import create_barcode_decoder
from src.infrastructure.Normalizer.serial_normalizer import SerialNormalizer
from src.infrastructure.Presentation.feedback_presenter import FeedbackPresenter
from src.infrastructure.Presentation.haptic_notifiers import BellNotifier, NullNotifier
from src.infrastructure.Presentation.highlight_controller import HighlightController

logger = logging.getLogger(__name__)

# servicio activo (uno por proceso)
_running_service: ScannerService | None = None


def create_app_state() -> AppState:
    """Estado inicial: seriales precargados desde settings.initial_serials."""
    target_set = TargetSet(SerialNormalizer(), settings.initial_serials)
    if len(target_set):
        logger.info(f"📋 {len(target_set)} seriales precargados")
    return AppState(target_set=target_set)


def create_presenter(state: AppState) -> FeedbackPresenter:
    highlighter = HighlightController(duration=settings.highlight_duration)
    notifier = BellNotifier() if settings.haptics_enabled else NullNotifier()
    return FeedbackPresenter(history=state.history, highlighter=highlighter, notifier=notifier)


def create_scanner_service(state: AppState, presenter: FeedbackPresenter) -> ScannerService:
    stream = create_camera_stream()
    decoder = create_barcode_decoder()

    pipeline = MatchPipeline(
        target_set=state.target_set,
        normalizer=SerialNormalizer(),
        cooldown_period=settings.cooldown_period,
    )

    service = ScannerService(
        camera_stream=stream,
        decoder=decoder,
        pipeline=pipeline,
        sink=presenter,
        state=state,
        max_fps=settings.max_fps,
        frame_sample_interval=settings.frame_sample_interval,
        warmup_frames=settings.warmup_frames,
    )
    # el borrado del resaltado se aplica en el hilo de presentación
    presenter.highlighter.dispatcher = service.call_in_present
    return service


def run_scanner_service(state: AppState, presenter: FeedbackPresenter) -> None:
    """
    Levanta el escáner y mantiene el hilo bloqueado hasta stop_scanner_service().
    Los fallos de cámara/decoder quedan en state.last_error; no se reintenta.
    """
    global _running_service

    try:
        service = create_scanner_service(state, presenter)
    except ScannerError as e:
        state.report_error(str(e))
        logger.error(f"❌ No se pudo crear el escáner: {e}")
        return

    _running_service = service

    try:
        service.start()
        while not service.stop_event.is_set():
            time.sleep(1)
    except ScannerError:
        # ya registrado en state por ScannerService.start
        pass
    except Exception:
        logger.exception(f"❌ Error en escáner {service.camera_id}")
    finally:
        service.stop()
        presenter.highlighter.dispatcher = None
        presenter.highlighter.cancel()
        _running_service = None


def stop_scanner_service() -> None:
    service = _running_service
    if service:
        service.stop()
