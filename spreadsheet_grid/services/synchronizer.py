"""
Reconciles the local grid with the table store.

Every committed edit is pushed, its calculated value applied, and then the
whole table is pulled again so dependent cells computed by the store show
up. Failures are logged and leave the grid as it was.
"""

import asyncio
from typing import Dict, Optional, Set

from ..config.logging_config import LoggerMixin
from ..config.settings import Settings
from ..models.cell_model import CellEdit, EditResponse
from ..models.grid_model import Coordinate, GridState
from .errors import FetchFailure, SyncError
from .sync_client import SyncClient


class GridSynchronizer(LoggerMixin):
    """
    Push-then-pull reconciliation with per-cell ordering.

    With ``guard_stale_responses`` on, a calculated value is dropped if its
    cell was written locally after the push was issued, and a snapshot
    does not overwrite cells written after the pull was issued or cells
    whose push is still in flight.
    """

    def __init__(self, grid: GridState, client: SyncClient,
                 guard_stale_responses: bool = True):
        self.grid = grid
        self.client = client
        self.guard_stale_responses = guard_stale_responses
        self._tasks: Set[asyncio.Task] = set()
        self._in_flight: Dict[Coordinate, int] = {}

    @classmethod
    def from_settings(cls, grid: GridState, client: SyncClient,
                      settings: Settings) -> 'GridSynchronizer':
        return cls(grid, client,
                   guard_stale_responses=settings.GUARD_STALE_RESPONSES)

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def load(self) -> bool:
        """Pull the snapshot into the grid; False if the pull failed."""
        issued_at = self.grid.revision
        try:
            entries = await self.client.pull()
        except SyncError as e:
            self._report(e)
            return False

        preserve = self._protected_cells(issued_at) if self.guard_stale_responses else set()
        self.grid.load_bulk(entries, preserve=preserve)
        return True

    async def submit(self, edit: CellEdit) -> Optional[EditResponse]:
        """Push one edit, apply its calculated value, then reload everything."""
        issued_revision = self._issue(edit)
        return await self._round_trip(edit, issued_revision)

    def schedule(self, edit: CellEdit) -> asyncio.Task:
        """Submit an edit in the background and return its task.

        The cell's revision is recorded and the push registered as in
        flight before this returns, so a later commit to the same cell
        counts as newer than this push.
        """
        issued_revision = self._issue(edit)
        task = asyncio.get_running_loop().create_task(
            self._round_trip(edit, issued_revision))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def drain(self) -> None:
        """Wait until every scheduled edit has finished its round trip."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    def _issue(self, edit: CellEdit) -> int:
        coordinate = (edit.row, edit.column)
        self._in_flight[coordinate] = self._in_flight.get(coordinate, 0) + 1
        return self.grid.revision_of(*coordinate)

    async def _round_trip(self, edit: CellEdit, issued_revision: int) -> Optional[EditResponse]:
        coordinate = (edit.row, edit.column)
        try:
            response = await self.client.push(edit)
        except SyncError as e:
            self._report(e, row=edit.row, column=edit.column)
            return None
        finally:
            self._in_flight[coordinate] -= 1
            if not self._in_flight[coordinate]:
                del self._in_flight[coordinate]

        if response.has_calculated_value:
            if self._is_current(coordinate, issued_revision):
                self.grid.merge_cell(edit.row, edit.column,
                                     {"value": response.calculated_value})
            else:
                self.logger.debug("Dropping stale calculated value",
                                  row=edit.row, column=edit.column)

        await self.load()
        return response

    def _is_current(self, coordinate: Coordinate, issued_revision: int) -> bool:
        if not self.guard_stale_responses:
            return True
        return self.grid.revision_of(*coordinate) == issued_revision

    def _protected_cells(self, issued_at: int) -> Set[Coordinate]:
        return self.grid.changed_since(issued_at) | set(self._in_flight)

    def _report(self, error: SyncError, **context) -> None:
        status_code = error.status_code if isinstance(error, FetchFailure) else None
        self.logger.error(
            f"{error.operation} failed",
            operation=error.operation,
            error_type=type(error).__name__,
            status_code=status_code,
            error=error.message,
            **context
        )
