"""
Grid view: wires the grid state, the interaction controllers and the
synchronizer together and maps raw presentation events onto them.
"""

from typing import List, Optional

from .config.logging_config import LoggerMixin
from .config.settings import Settings, get_settings
from .handlers.editing_controller import EditingController
from .handlers.formula_composer import FocusCallback, FormulaComposer
from .handlers.input_device import InputDevice, LocalInputDevice, PointerEvent
from .handlers.resize_controller import ResizeController
from .models.cell_model import CellEdit
from .models.grid_model import GridState
from .models.session_model import EditingSession, ResizeSession
from .services.sync_client import SyncClient
from .services.synchronizer import GridSynchronizer
from .utils.addressing import column_labels, row_labels


class GridView(LoggerMixin):
    """
    One interactive grid bound to one table store.

    Use as an async context manager: entering attaches the pointer
    listeners and loads the table, leaving waits for outstanding edits
    and releases the listeners. Event methods must be called from the
    running event loop since commits schedule their push on it.
    """

    def __init__(self, settings: Optional[Settings] = None,
                 client: Optional[SyncClient] = None,
                 device: Optional[InputDevice] = None,
                 restore_focus: Optional[FocusCallback] = None,
                 grid: Optional[GridState] = None):
        self.settings = settings or get_settings()
        self.grid = grid or GridState.from_settings(self.settings)
        self.client = client or SyncClient.from_settings(self.settings)
        self.device = device or LocalInputDevice()

        self.synchronizer = GridSynchronizer.from_settings(
            self.grid, self.client, self.settings)
        self.editing = EditingController(
            self.grid,
            on_commit=self._push_edit,
            switch_policy=self.settings.EDIT_SWITCH_POLICY,
        )
        self.composer = FormulaComposer(self.editing, restore_focus)
        self.resizing = ResizeController(self.grid)

    async def open(self) -> bool:
        """Attach listeners and load the table; False if the load failed."""
        self.resizing.attach(self.device)
        self.logger.info("Grid view opened",
                         rows=self.grid.dimensions.rows,
                         columns=self.grid.dimensions.columns)
        return await self.synchronizer.load()

    async def close(self) -> None:
        try:
            await self.synchronizer.drain()
        finally:
            self.resizing.detach()
            await self.client.aclose()
        self.logger.info("Grid view closed")

    async def __aenter__(self) -> 'GridView':
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # Presentation events

    def cell_double_clicked(self, row: int, column: int) -> EditingSession:
        return self.editing.activate(row, column)

    def cell_clicked(self, row: int, column: int) -> Optional[str]:
        return self.composer.click(row, column)

    def draft_changed(self, text: str) -> EditingSession:
        return self.editing.type(text)

    def editor_blurred(self) -> Optional[CellEdit]:
        return self.editing.commit()

    def key_pressed(self, key: str) -> Optional[CellEdit]:
        return self.editing.handle_key(key)

    def column_handle_pressed(self, index: int, event: PointerEvent) -> ResizeSession:
        return self.resizing.begin_column_drag(index, event)

    def row_handle_pressed(self, index: int, event: PointerEvent) -> ResizeSession:
        # Only the handle strip at the bottom of a row label starts a drag;
        # clicks elsewhere on the label are not routed here.
        return self.resizing.begin_row_drag(index, event)

    # Rendering queries

    @property
    def column_labels(self) -> List[str]:
        return column_labels(self.grid.dimensions.columns)

    @property
    def row_labels(self) -> List[int]:
        return row_labels(self.grid.dimensions.rows)

    def is_editing(self, row: int, column: int) -> bool:
        return self.editing.is_editing(row, column)

    def display_text(self, row: int, column: int) -> str:
        """Draft text for the cell being edited, displayed value otherwise."""
        if self.editing.is_editing(row, column):
            return self.editing.session.draft_text
        return self.grid.read_cell(row, column).value

    def column_width(self, index: int) -> int:
        return self.grid.column_widths[index]

    def row_height(self, index: int) -> int:
        return self.grid.row_heights[index]

    def _push_edit(self, edit: CellEdit) -> None:
        self.synchronizer.schedule(edit)
