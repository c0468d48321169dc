# src/domain/Interfaces/barcode_decoder.py
from abc import ABC, abstractmethod
from typing import List

from src.domain.Models.frame import Frame
from src.domain.Models.decode_event import DecodeEvent


class IBarcodeDecoder(ABC):
    """
    Capacidad externa de decodificación: frame -> (payload, bounds)*.
    El repositorio no implementa ningún algoritmo; cada backend envuelve una librería.
    """
    name: str = "decoder"

    @abstractmethod
    def decode(self, frame: Frame) -> List[DecodeEvent]:
        """
        Decodifica todos los códigos visibles en el frame.
        Cada DecodeEvent lleva el timestamp del frame. Lista vacía si no hay nada.
        """
        pass
