from src.core.config import settings
from src.core.exceptions import DecoderUnavailableError
from src.domain.Interfaces.barcode_decoder import IBarcodeDecoder


def create_barcode_decoder(backend: str | None = None) -> IBarcodeDecoder:
    backend = (backend or settings.decoder_backend).lower()

    if backend == "zxing":
        from src.infrastructure.Decoder.zxing_barcode_decoder import ZXingBarcodeDecoder
        return ZXingBarcodeDecoder()
    elif backend == "opencv":
        from src.infrastructure.Decoder.opencv_barcode_decoder import OpenCVBarcodeDecoder
        return OpenCVBarcodeDecoder()
    elif backend == "dummy":
        from src.infrastructure.Decoder.dummy_barcode_decoder import DummyBarcodeDecoder
        payloads = [p.strip() for p in settings.dummy_payloads.split(",")]
        return DummyBarcodeDecoder(payloads)
    else:
        raise DecoderUnavailableError(f"Backend de decodificación desconocido: {backend!r}")
