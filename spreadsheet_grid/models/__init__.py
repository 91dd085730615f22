from .cell_model import Cell, CellEntry, CellEdit, EditResponse
from .grid_model import GridState, GridDimensions, ResizeAxis
from .session_model import EditingSession, EditMode, ResizeSession

__all__ = [
    # Cell models
    "Cell",
    "CellEntry",
    "CellEdit",
    "EditResponse",

    # Grid models
    "GridState",
    "GridDimensions",
    "ResizeAxis",

    # Session models
    "EditingSession",
    "EditMode",
    "ResizeSession"
]
