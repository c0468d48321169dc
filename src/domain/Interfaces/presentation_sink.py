from abc import ABC, abstractmethod
from src.domain.Models.pipeline_result import PipelineResult


class IPresentationSink(ABC):
    """
    Receptor de los resultados del pipeline (resaltado, alerta, historial).
    Siempre se invoca desde un único contexto de presentación.
    """
    @abstractmethod
    def present(self, result: PipelineResult) -> None:
        pass
