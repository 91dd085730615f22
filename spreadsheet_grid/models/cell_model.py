from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, Optional


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    return str(value)


class Cell(BaseModel):
    """Last-known content of one grid slot.

    ``value`` is what the grid displays (a literal or a store-computed
    result); ``formula`` is the raw text typed in formula mode, or None
    for literal cells.
    """

    value: str = Field(default="", description="Displayed content")
    formula: Optional[str] = Field(
        default=None, description="Raw formula text, absent for literals")

    @field_validator('value', mode='before')
    @classmethod
    def coerce_value(cls, value):
        return _as_text(value)

    @property
    def is_empty(self) -> bool:
        return self.value == "" and self.formula is None

    @property
    def has_formula(self) -> bool:
        """True when the stored formula can be re-entered in formula mode."""
        return self.formula is not None and self.formula.startswith('=')

    def merged(self, partial: Dict[str, Any]) -> 'Cell':
        """Return a copy with the given fields replaced.

        Keys missing from ``partial`` keep their current value; a key
        present with None clears an optional field.
        """
        unknown = set(partial) - set(type(self).model_fields)
        if unknown:
            raise ValueError(f"Unknown cell fields: {sorted(unknown)}")
        return type(self).model_validate({**self.model_dump(), **partial})

    def __str__(self):
        return self.value


class CellEntry(BaseModel):
    """One element of the table snapshot returned by the store."""

    model_config = ConfigDict(extra='ignore')

    row_index: int
    column_index: int
    value: str = ""
    formulas: str = ""

    @field_validator('value', 'formulas', mode='before')
    @classmethod
    def coerce_text(cls, value):
        return _as_text(value)

    @field_validator('row_index', 'column_index', mode='before')
    @classmethod
    def reject_non_integers(cls, value):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError("Coordinates must be integers")
        return value

    def to_cell(self) -> Cell:
        # An empty formulas string means the cell holds a literal
        return Cell(value=self.value, formula=self.formulas or None)


class CellEdit(BaseModel):
    """Body of a committed single-cell edit, in the store's wire casing."""

    model_config = ConfigDict(populate_by_name=True)

    row: int = Field(..., ge=0, alias="rowIndex")
    column: int = Field(..., ge=0, alias="columnIndex")
    value: str = ""
    formula: str = ""

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class EditResponse(BaseModel):
    """Store reply to a cell edit."""

    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    calculated_value: Optional[str] = Field(
        default=None, alias="calculatedValue")

    @field_validator('calculated_value', mode='before')
    @classmethod
    def normalize_calculated_value(cls, value):
        """Falsy replies (null, "", 0, false) mean no calculated value."""
        if value is None or value == "":
            return None
        if isinstance(value, (bool, int, float)) and not value:
            return None
        return _as_text(value)

    @property
    def has_calculated_value(self) -> bool:
        return self.calculated_value is not None
