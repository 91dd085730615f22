"""
Editing state machine: Idle <-> Editing(row, column, draft, mode).
"""

from typing import Callable, Optional

from ..config.logging_config import LoggerMixin
from ..config.settings import EditSwitchPolicy
from ..models.cell_model import CellEdit
from ..models.grid_model import GridState
from ..models.session_model import EditingSession, EditMode

CommitHandler = Callable[[CellEdit], None]

CONFIRM_KEY = "Enter"


class EditingController(LoggerMixin):
    """
    Tracks the single cell being edited.

    Typing mirrors the draft into the cell's ``formula`` field on every
    change. Commit writes the draft optimistically as the cell's value and
    hands the edit to ``on_commit`` without waiting for the store.
    """

    def __init__(self, grid: GridState,
                 on_commit: Optional[CommitHandler] = None,
                 switch_policy: EditSwitchPolicy = EditSwitchPolicy.DISCARD):
        self.grid = grid
        self.on_commit = on_commit
        self.switch_policy = switch_policy
        self._session: Optional[EditingSession] = None

    @property
    def session(self) -> Optional[EditingSession]:
        return self._session

    @property
    def is_active(self) -> bool:
        return self._session is not None

    @property
    def in_formula_mode(self) -> bool:
        return self._session is not None and self._session.is_formula

    def is_editing(self, row: int, column: int) -> bool:
        return self._session is not None and self._session.targets(row, column)

    def activate(self, row: int, column: int) -> EditingSession:
        """Start editing a cell, drafting its formula or its value."""
        if self._session is not None and self._session.targets(row, column):
            return self._session

        cell = self.grid.read_cell(row, column)
        if self._session is not None:
            self._leave_previous_session()

        if cell.has_formula:
            session = EditingSession(row=row, column=column,
                                     draft_text=cell.formula,
                                     mode=EditMode.FORMULA)
        else:
            session = EditingSession(row=row, column=column,
                                     draft_text=cell.value,
                                     mode=EditMode.LITERAL)

        self._session = session
        self.logger.debug("Editing started", cell=session.address,
                          mode=session.mode.value)
        return session

    def type(self, text: str) -> EditingSession:
        """Replace the draft text; the mode follows the leading '='."""
        session = self._require_session()
        self._session = session.with_draft(text)
        self.grid.merge_cell(session.row, session.column, {"formula": text})
        return self._session

    def append(self, text: str) -> EditingSession:
        session = self._require_session()
        return self.type(session.draft_text + text)

    def handle_key(self, key: str) -> Optional[CellEdit]:
        if key == CONFIRM_KEY:
            return self.commit()
        return None

    def commit(self) -> Optional[CellEdit]:
        """Finish the session and send the draft on; no-op when idle."""
        session = self._session
        if session is None:
            return None

        self._session = None
        draft = session.draft_text
        self.grid.merge_cell(session.row, session.column, {
            "value": draft,
            "formula": draft if session.is_formula else None,
        })

        edit = CellEdit(row=session.row, column=session.column,
                        value=draft, formula=draft)
        self.logger.debug("Edit committed", cell=session.address,
                          mode=session.mode.value)

        if self.on_commit is not None:
            self.on_commit(edit)
        return edit

    def _leave_previous_session(self) -> None:
        if self.switch_policy == EditSwitchPolicy.COMMIT:
            self.commit()
            return

        self.logger.debug("Discarding uncommitted draft",
                          cell=self._session.address)
        self._session = None

    def _require_session(self) -> EditingSession:
        if self._session is None:
            raise RuntimeError("No cell is being edited")
        return self._session
