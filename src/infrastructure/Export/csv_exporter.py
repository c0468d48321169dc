# src/infrastructure/Export/csv_exporter.py
import csv
import io
import logging
from pathlib import Path
from typing import Iterable

from src.core.config import settings
from src.core.exceptions import ExportError

logger = logging.getLogger(__name__)

HEADER = "Barcode"


class CsvExporter:
    """
    Exporta el historial de escaneos a CSV:

        Barcode
        "7501031311309"
        "SN-001"

    Cabecera sin comillas y un valor entre comillas dobles por fila.
    """

    def __init__(self, export_dir: str | None = None, filename: str | None = None):
        self.export_dir = Path(export_dir or settings.export_dir)
        self.filename = filename or settings.export_filename

    def render(self, barcodes: Iterable[str]) -> str:
        buf = io.StringIO()
        buf.write(HEADER + "\n")
        writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
        for value in barcodes:
            writer.writerow([value])
        return buf.getvalue()

    def export(self, barcodes: Iterable[str]) -> Path:
        path = self.export_dir / self.filename
        content = self.render(barcodes)
        try:
            self.export_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            logger.error(f"❌ Error exportando CSV a {path}: {e}")
            raise ExportError(f"No se pudo escribir {path}") from e

        logger.info(f"📄 CSV exportado a {path}")
        return path
