"""
Transient interaction sessions: the cell being edited and the size being dragged.
"""

from enum import Enum
from typing import Tuple
from pydantic import BaseModel, ConfigDict, Field

from ..utils.addressing import reference_of
from .grid_model import ResizeAxis


class EditMode(str, Enum):
    LITERAL = "literal"
    FORMULA = "formula"

    @classmethod
    def of(cls, text: str) -> 'EditMode':
        """Formula mode iff the text starts with '='."""
        return cls.FORMULA if text.startswith('=') else cls.LITERAL


class EditingSession(BaseModel):
    """The one cell currently being edited and its in-progress draft."""

    model_config = ConfigDict(frozen=True)

    row: int = Field(..., ge=0)
    column: int = Field(..., ge=0)
    draft_text: str = ""
    mode: EditMode = EditMode.LITERAL

    @property
    def coordinates(self) -> Tuple[int, int]:
        return (self.row, self.column)

    @property
    def address(self) -> str:
        return reference_of(self.row, self.column)

    @property
    def is_formula(self) -> bool:
        return self.mode == EditMode.FORMULA

    def targets(self, row: int, column: int) -> bool:
        return self.row == row and self.column == column

    def with_draft(self, text: str) -> 'EditingSession':
        return self.model_copy(update={"draft_text": text, "mode": EditMode.of(text)})


class ResizeSession(BaseModel):
    """An in-progress drag of a column or row boundary."""

    model_config = ConfigDict(frozen=True)

    axis: ResizeAxis
    index: int = Field(..., ge=0)
    start_pointer: float
    start_size: int

    def size_for(self, pointer: float, minimum: int) -> int:
        return max(int(self.start_size + (pointer - self.start_pointer)), minimum)
