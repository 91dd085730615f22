"""
Interactive spreadsheet grid client: editing, formula composition,
resizing and synchronization with a table store.
"""

from .grid_view import GridView
from .models import Cell, GridState, EditingSession, EditMode, ResizeAxis, ResizeSession
from .services import SyncClient, GridSynchronizer, SyncError, FetchFailure, TransportFailure

__version__ = "1.0.0"

__all__ = [
    "GridView",
    "Cell",
    "GridState",
    "EditingSession",
    "EditMode",
    "ResizeAxis",
    "ResizeSession",
    "SyncClient",
    "GridSynchronizer",
    "SyncError",
    "FetchFailure",
    "TransportFailure"
]
