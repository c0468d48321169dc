import logging
import threading

from src.core.config import settings
from src.api.main import create_app
from src.application.scanner_service_runner import (
    create_app_state, create_presenter, run_scanner_service, stop_scanner_service,
)
from src.monitoring.metrics import start_metrics_server

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


def main():
    state = create_app_state()
    presenter = create_presenter(state)

    start_metrics_server(port=settings.prometheus_port)

    # Escáner en su propio hilo
    threading.Thread(
        target=run_scanner_service,
        args=(state, presenter),
        name="scanner",
        daemon=True,
    ).start()

    logger.info("🚀 Snap Barcode Locator iniciado.")

    try:
        if settings.api_enabled:
            import uvicorn
            app = create_app(state, highlighter=presenter.highlighter)
            uvicorn.run(app, host="0.0.0.0", port=settings.app_port)
        else:
            while True:
                threading.Event().wait(5)
    except KeyboardInterrupt:
        logger.info("🧠 Deteniendo…")
    finally:
        stop_scanner_service()


if __name__ == "__main__":
    main()
