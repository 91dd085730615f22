"""
Grid state model for the spreadsheet grid client.
Owns the fixed-size matrix of cells and the per-axis size arrays.
"""

from enum import Enum
from typing import Any, Collection, Dict, Iterable, List, Set, Tuple
from pydantic import BaseModel, Field, PrivateAttr, model_validator

from ..config.logging_config import get_logger
from ..config.settings import OutOfBoundsPolicy, Settings
from .cell_model import Cell, CellEntry

logger = get_logger(__name__)

Coordinate = Tuple[int, int]


class ResizeAxis(str, Enum):
    COLUMN = "column"
    ROW = "row"


class GridDimensions(BaseModel):
    """Grid dimensions and sizing limits, fixed at creation."""
    rows: int = Field(default=30, ge=1)
    columns: int = Field(default=26, ge=1)
    default_column_width: int = Field(default=100)
    default_row_height: int = Field(default=30)
    min_column_width: int = Field(default=50, ge=1)
    min_row_height: int = Field(default=20, ge=1)

    model_config = {"frozen": True}

    @model_validator(mode='after')
    def validate_defaults(self):
        if self.default_column_width < self.min_column_width:
            raise ValueError("Default column width is below the minimum")
        if self.default_row_height < self.min_row_height:
            raise ValueError("Default row height is below the minimum")
        return self

    def contains(self, row: int, column: int) -> bool:
        return 0 <= row < self.rows and 0 <= column < self.columns

    def clamp(self, row: int, column: int) -> Coordinate:
        return (max(0, min(self.rows - 1, row)),
                max(0, min(self.columns - 1, column)))

    def minimum(self, axis: ResizeAxis) -> int:
        if axis == ResizeAxis.COLUMN:
            return self.min_column_width
        return self.min_row_height


class GridState(BaseModel):
    """
    Dense rows x columns matrix of cells plus column widths and row heights.

    Every local write bumps a global revision counter and stamps the cell
    with it, so synchronization can tell which cells changed after a
    request was issued.
    """

    dimensions: GridDimensions = Field(default_factory=GridDimensions)
    out_of_bounds_policy: OutOfBoundsPolicy = OutOfBoundsPolicy.REJECT

    cells: List[List[Cell]] = Field(default_factory=list)
    column_widths: List[int] = Field(default_factory=list)
    row_heights: List[int] = Field(default_factory=list)

    _revision: int = PrivateAttr(default=0)
    _cell_revisions: Dict[Coordinate, int] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context: Any) -> None:
        if not self.cells:
            self.cells = self._empty_matrix()
        if not self.column_widths:
            self.column_widths = [
                self.dimensions.default_column_width] * self.dimensions.columns
        if not self.row_heights:
            self.row_heights = [
                self.dimensions.default_row_height] * self.dimensions.rows

    @classmethod
    def from_settings(cls, settings: Settings) -> 'GridState':
        dimensions = GridDimensions(**settings.get_grid_config())
        return cls(dimensions=dimensions,
                   out_of_bounds_policy=settings.OUT_OF_BOUNDS_POLICY)

    # Cell content

    def load_bulk(self, entries: Iterable[CellEntry],
                  preserve: Collection[Coordinate] = ()) -> int:
        """Replace the whole matrix with a snapshot.

        Coordinates not mentioned in ``entries`` become empty. Cells listed
        in ``preserve`` keep their current contents. Returns the number of
        entries applied.
        """
        matrix = self._empty_matrix()
        applied = 0

        for entry in entries:
            row, column = entry.row_index, entry.column_index
            if not self.dimensions.contains(row, column):
                if self.out_of_bounds_policy == OutOfBoundsPolicy.REJECT:
                    logger.warning("Dropping out-of-bounds snapshot entry",
                                   row=row, column=column)
                    continue
                row, column = self.dimensions.clamp(row, column)
            matrix[row][column] = entry.to_cell()
            applied += 1

        for row, column in preserve:
            if self.dimensions.contains(row, column):
                matrix[row][column] = self.cells[row][column]

        self.cells = matrix
        logger.debug("Grid loaded", entries=applied, preserved=len(preserve))
        return applied

    def merge_cell(self, row: int, column: int, partial: Dict[str, Any]) -> Cell:
        """Shallow-merge ``partial`` into the cell and return the result."""
        self._check_cell(row, column)
        cell = self.cells[row][column].merged(partial)
        self.cells[row][column] = cell

        self._revision += 1
        self._cell_revisions[(row, column)] = self._revision
        return cell

    def read_cell(self, row: int, column: int) -> Cell:
        self._check_cell(row, column)
        return self.cells[row][column].model_copy()

    @property
    def revision(self) -> int:
        return self._revision

    def revision_of(self, row: int, column: int) -> int:
        return self._cell_revisions.get((row, column), 0)

    def changed_since(self, revision: int) -> Set[Coordinate]:
        """Cells written locally after the given global revision."""
        return {coord for coord, rev in self._cell_revisions.items()
                if rev > revision}

    def non_empty_cells(self) -> Dict[Coordinate, Cell]:
        return {(r, c): cell
                for r, row in enumerate(self.cells)
                for c, cell in enumerate(row)
                if not cell.is_empty}

    # Sizes

    def set_column_width(self, index: int, size: int) -> int:
        return self.set_size(ResizeAxis.COLUMN, index, size)

    def set_row_height(self, index: int, size: int) -> int:
        return self.set_size(ResizeAxis.ROW, index, size)

    def size_of(self, axis: ResizeAxis, index: int) -> int:
        return self._sizes(axis)[index]

    def set_size(self, axis: ResizeAxis, index: int, size: int) -> int:
        """Store a size clamped to the axis minimum and return it."""
        sizes = self._sizes(axis)
        if not 0 <= index < len(sizes):
            raise IndexError(f"No {axis.value} at index {index}")
        sizes[index] = max(int(size), self.dimensions.minimum(axis))
        return sizes[index]

    def _sizes(self, axis: ResizeAxis) -> List[int]:
        if axis == ResizeAxis.COLUMN:
            return self.column_widths
        return self.row_heights

    def _empty_matrix(self) -> List[List[Cell]]:
        return [[Cell() for _ in range(self.dimensions.columns)]
                for _ in range(self.dimensions.rows)]

    def _check_cell(self, row: int, column: int) -> None:
        if not self.dimensions.contains(row, column):
            raise IndexError(f"Cell ({row}, {column}) is outside the grid")
