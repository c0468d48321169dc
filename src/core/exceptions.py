# src/core/exceptions.py


class ScannerError(Exception):
    """Error base del servicio de escaneo."""


class CameraUnavailableError(ScannerError):
    """No se pudo abrir la cámara / stream configurado."""


class DecoderUnavailableError(ScannerError):
    """El backend de decodificación pedido no está instalado o no existe."""


class ExportError(ScannerError):
    """Falló la escritura del CSV de historial."""
