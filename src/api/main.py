from typing import Optional

from fastapi import FastAPI, HTTPException, Response

from src.api.schemas import SerialsIn, SerialsOut, ScansOut, HighlightOut
from src.core.config import settings
from src.core.exceptions import ExportError
from src.domain.Models.app_state import AppState
from src.infrastructure.Export.csv_exporter import CsvExporter
from src.infrastructure.Presentation.highlight_controller import HighlightController


def create_app(
    state: AppState,
    highlighter: Optional[HighlightController] = None,
    exporter: Optional[CsvExporter] = None,
) -> FastAPI:
    """
    API de la aplicación anfitriona: gestiona la lista de seriales,
    expone el historial y su exportación a CSV.
    """
    app = FastAPI(title=settings.app_name)
    exporter = exporter or CsvExporter()
    app.state.scanner = state

    @app.get("/health")
    def health_check():
        return {"status": "ok", "env": settings.app_env, **state.to_status()}

    # =========================
    #  Seriales
    # =========================
    @app.get("/serials", response_model=SerialsOut)
    def list_serials():
        return SerialsOut(serials=list(state.target_set.snapshot()))

    @app.post("/serials", response_model=SerialsOut)
    def add_serials(body: SerialsIn):
        added = state.target_set.add_many(body.serials)
        return SerialsOut(serials=list(state.target_set.snapshot()), added=added)

    @app.delete("/serials/{serial:path}", response_model=SerialsOut)
    def remove_serial(serial: str):
        if not state.target_set.remove(serial):
            raise HTTPException(status_code=404, detail=f"Serial {serial!r} no encontrado")
        return SerialsOut(serials=list(state.target_set.snapshot()))

    @app.delete("/serials", response_model=SerialsOut)
    def clear_serials():
        state.target_set.clear()
        return SerialsOut(serials=[])

    # =========================
    #  Historial
    # =========================
    @app.get("/scans", response_model=ScansOut)
    def list_scans():
        items = state.history.items()
        return ScansOut(scanned=items, total=len(items))

    @app.delete("/scans", response_model=ScansOut)
    def clear_scans():
        state.history.clear()
        return ScansOut(scanned=[], total=0)

    @app.get("/scans/export")
    def export_scans():
        items = state.history.items()
        try:
            exporter.export(items)
        except ExportError as e:
            raise HTTPException(status_code=500, detail=str(e))
        return Response(
            content=exporter.render(items),
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{exporter.filename}"'},
        )

    # =========================
    #  Resaltado actual
    # =========================
    @app.get("/highlight", response_model=Optional[HighlightOut])
    def current_highlight():
        current = highlighter.current() if highlighter else None
        if current is None:
            return None
        return HighlightOut(payload=current.payload, bounds=current.bounds)

    return app
