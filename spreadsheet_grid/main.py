"""
In-memory table store for local development and integration tests.

Serves the same contract as the production store but performs no formula
evaluation: edits are stored verbatim and no calculated value is returned.
"""

from typing import Dict, List, Optional, Tuple

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .config.cors_config import get_cors_config
from .config.logging_config import get_logger, setup_logging
from .config.settings import Settings, get_settings
from .models.cell_model import CellEdit, CellEntry

logger = get_logger(__name__)


class TableStore:
    """Sparse table of stored cells keyed by (row, column)."""

    def __init__(self, rows: int, columns: int):
        self.rows = rows
        self.columns = columns
        self._cells: Dict[Tuple[int, int], CellEntry] = {}

    def snapshot(self) -> List[CellEntry]:
        return [self._cells[key] for key in sorted(self._cells)]

    def save(self, edit: CellEdit) -> CellEntry:
        if edit.row >= self.rows or edit.column >= self.columns:
            raise IndexError(f"Cell ({edit.row}, {edit.column}) is outside the table")
        entry = CellEntry(row_index=edit.row, column_index=edit.column,
                          value=edit.value, formulas=edit.formula)
        self._cells[(edit.row, edit.column)] = entry
        return entry


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    store = TableStore(settings.GRID_ROWS, settings.GRID_COLUMNS)

    app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION,
                  description="Development table store for the spreadsheet grid")
    app.add_middleware(CORSMiddleware, **get_cors_config(settings))
    app.state.store = store

    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "version": settings.APP_VERSION}

    @app.get(settings.STORE_TABLE_PATH)
    async def get_table():
        return [entry.model_dump() for entry in store.snapshot()]

    @app.post(settings.STORE_CELL_PATH)
    async def update_cell(edit: CellEdit):
        try:
            store.save(edit)
        except IndexError as e:
            raise HTTPException(status_code=422, detail=str(e))
        logger.info("Cell stored", row=edit.row, column=edit.column)
        return {}

    return app


app = create_app()

if __name__ == "__main__":
    settings = get_settings()
    setup_logging(settings)
    uvicorn.run("spreadsheet_grid.main:app", host=settings.HOST, port=settings.PORT,
                log_level=settings.LOG_LEVEL.lower(), access_log=settings.DEBUG)
