# src/infrastructure/Normalizer/serial_normalizer.py
from src.domain.Interfaces.text_normalizer import ITextNormalizer


class SerialNormalizer(ITextNormalizer):
    """
    Normaliza números de serie / payloads de códigos:
    - Quita espacios y saltos de línea de los extremos
    - Minúsculas
    Nada más: sin quitar separadores ni validar formato, la comparación es exacta.
    """

    def normalize(self, text: str) -> str:
        if not text:
            return ""
        return text.strip().lower()
