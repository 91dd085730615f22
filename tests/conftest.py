"""
Pytest configuration and shared fixtures
"""

import asyncio
from typing import Any, Dict, List, Optional

import pytest

from spreadsheet_grid.config.logging_config import configure_test_logging
from spreadsheet_grid.config.settings import Settings
from spreadsheet_grid.models.cell_model import CellEdit, CellEntry, EditResponse
from spreadsheet_grid.models.grid_model import GridState


def pytest_configure(config):
    configure_test_logging()


async def settle(rounds: int = 20):
    """Let scheduled tasks run up to their next suspension point."""
    for _ in range(rounds):
        await asyncio.sleep(0)


def entry(row: int, column: int, value: str = "", formulas: str = "") -> Dict[str, Any]:
    """A snapshot element in the store's wire format."""
    return {"row_index": row, "column_index": column,
            "value": value, "formulas": formulas}


class ScriptedClient:
    """Sync client stand-in that answers immediately from canned data."""

    def __init__(self, snapshot: Optional[List[Dict[str, Any]]] = None,
                 response: Optional[EditResponse] = None,
                 pull_error: Optional[Exception] = None,
                 push_error: Optional[Exception] = None):
        self.snapshot = snapshot or []
        self.response = response or EditResponse()
        self.pull_error = pull_error
        self.push_error = push_error
        self.pull_count = 0
        self.pushed: List[CellEdit] = []
        self.closed = False

    async def pull(self) -> List[CellEntry]:
        self.pull_count += 1
        if self.pull_error is not None:
            raise self.pull_error
        return [CellEntry.model_validate(item) for item in self.snapshot]

    async def push(self, edit: CellEdit) -> EditResponse:
        self.pushed.append(edit)
        if self.push_error is not None:
            raise self.push_error
        return self.response

    async def aclose(self) -> None:
        self.closed = True


class ControlledClient:
    """Sync client stand-in whose calls stay pending until the test resolves them."""

    def __init__(self):
        self.pushes: List[tuple] = []
        self.pulls: List[asyncio.Future] = []

    async def pull(self) -> List[CellEntry]:
        future = asyncio.get_running_loop().create_future()
        self.pulls.append(future)
        return await future

    async def push(self, edit: CellEdit) -> EditResponse:
        future = asyncio.get_running_loop().create_future()
        self.pushes.append((edit, future))
        return await future

    def resolve_pull(self, index: int, snapshot: List[Dict[str, Any]]) -> None:
        self.pulls[index].set_result(
            [CellEntry.model_validate(item) for item in snapshot])

    def resolve_push(self, index: int, calculated_value: Optional[str] = None) -> None:
        self.pushes[index][1].set_result(
            EditResponse(calculatedValue=calculated_value))

    async def aclose(self) -> None:
        pass


@pytest.fixture
def settings():
    """Default settings, isolated from any local .env file"""
    return Settings(_env_file=None)


@pytest.fixture
def grid():
    return GridState()


@pytest.fixture
def scripted_client():
    return ScriptedClient()


@pytest.fixture
def controlled_client():
    return ControlledClient()
