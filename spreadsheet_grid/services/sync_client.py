"""
HTTP client for the table store.

GET  <table path>  -> [{row_index, column_index, value, formulas}, ...]
POST <cell path>   {rowIndex, columnIndex, value, formula} -> {calculatedValue?}
"""

from typing import List, Optional

import httpx
from pydantic import ValidationError

from ..config.logging_config import LoggerMixin
from ..config.settings import Settings
from ..models.cell_model import CellEdit, CellEntry, EditResponse
from .errors import FetchFailure, TransportFailure


class SyncClient(LoggerMixin):
    """Pulls the full table snapshot and pushes single-cell edits.

    No timeout, retry or cancellation is applied unless ``timeout`` is
    given. Grid state is never touched here; callers apply the results.
    """

    def __init__(self, base_url: str = "", table_path: str = "/api/table",
                 cell_path: str = "/api/table/cell",
                 timeout: Optional[float] = None,
                 client: Optional[httpx.AsyncClient] = None):
        self.table_url = f"{base_url.rstrip('/')}{table_path}"
        self.cell_url = f"{base_url.rstrip('/')}{cell_path}"
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_settings(cls, settings: Settings,
                      client: Optional[httpx.AsyncClient] = None) -> 'SyncClient':
        return cls(client=client, **settings.get_sync_config())

    async def pull(self) -> List[CellEntry]:
        """Fetch the whole table snapshot."""
        response = await self._send("pull", "GET", self.table_url)
        body = self._decode("pull", response)

        if not isinstance(body, list):
            raise FetchFailure("pull", "Snapshot is not a list",
                               response.status_code)
        try:
            entries = [CellEntry.model_validate(item) for item in body]
        except ValidationError as e:
            raise FetchFailure("pull", f"Malformed snapshot entry: {e}",
                               response.status_code) from e

        self.logger.debug("Snapshot pulled", entries=len(entries))
        return entries

    async def push_edit(self, row: int, column: int, value: str,
                        formula: str) -> EditResponse:
        return await self.push(CellEdit(row=row, column=column,
                                        value=value, formula=formula))

    async def push(self, edit: CellEdit) -> EditResponse:
        """Send one committed edit and return the store's reply."""
        response = await self._send("push_edit", "POST", self.cell_url,
                                    json=edit.to_payload())
        body = self._decode("push_edit", response)

        if not isinstance(body, dict):
            raise FetchFailure("push_edit", "Reply is not an object",
                               response.status_code)

        result = EditResponse.model_validate(body)
        self.logger.debug("Edit pushed", row=edit.row, column=edit.column,
                          calculated=result.has_calculated_value)
        return result

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> 'SyncClient':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def _send(self, operation: str, method: str, url: str,
                    **kwargs) -> httpx.Response:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise TransportFailure(operation, str(e) or type(e).__name__) from e

        if not response.is_success:
            raise FetchFailure(operation,
                               f"Store responded with {response.status_code}",
                               response.status_code)
        return response

    @staticmethod
    def _decode(operation: str, response: httpx.Response):
        try:
            return response.json()
        except ValueError as e:
            raise TransportFailure(operation, "Response body is not JSON") from e
