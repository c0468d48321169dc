import logging

from prometheus_client import Gauge, Counter, start_http_server

logger = logging.getLogger(__name__)

# FPS capturados por cámara
camera_fps = Gauge(
    "camera_fps",
    "FPS actuales de la cámara",
    ["camera_id"]
)

# Eventos que entregó el decoder
decode_events_total = Counter(
    "decode_events_total",
    "Total de códigos decodificados",
    ["camera_id"]
)

# Eventos descartados por cooldown
decode_events_suppressed_total = Counter(
    "decode_events_suppressed_total",
    "Eventos descartados por la ventana de cooldown",
    ["camera_id"]
)

# Coincidencias con la lista de seriales
barcode_matches_total = Counter(
    "barcode_matches_total",
    "Total de coincidencias con seriales buscados",
    ["camera_id"]
)

# Latencia decoder
decoder_latency = Gauge(
    "decoder_latency_seconds",
    "Tiempo de decodificación por frame",
    ["camera_id"]
)

# Latencia total pipeline
pipeline_latency = Gauge(
    "pipeline_latency_seconds",
    "Tiempo total de procesamiento de frame",
    ["camera_id"]
)


def start_metrics_server(port: int = 9100):
    """Arranca servidor de métricas Prometheus."""
    start_http_server(port)
    logger.info(f"📊 Prometheus metrics disponible en :{port}")
