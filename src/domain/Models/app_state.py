# src/domain/Models/app_state.py
from dataclasses import dataclass, field
from typing import Optional

from src.domain.Models.target_set import TargetSet
from src.domain.Models.scan_history import ScanHistory


@dataclass
class AppState:
    """
    Estado compartido de la aplicación. Se crea una vez en el arranque y se
    pasa explícitamente a quien lo necesite (servicio, presenter, API).
    """
    target_set: TargetSet
    history: ScanHistory = field(default_factory=ScanHistory)

    # flags de estado que consume la API (/health)
    camera_available: bool = False
    scanning: bool = False
    last_error: Optional[str] = None

    def report_error(self, message: str) -> None:
        self.last_error = message

    def to_status(self) -> dict:
        return {
            "camera_available": self.camera_available,
            "scanning": self.scanning,
            "last_error": self.last_error,
            "serials": len(self.target_set),
            "scanned": len(self.history),
        }
