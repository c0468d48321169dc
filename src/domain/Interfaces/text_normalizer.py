from typing import Protocol


class ITextNormalizer(Protocol):
    """Lleva un texto a su forma canónica para compararlo."""
    def normalize(self, text: str) -> str: ...
