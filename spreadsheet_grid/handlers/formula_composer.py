from typing import Callable, Optional

from ..config.logging_config import LoggerMixin
from ..utils.addressing import reference_of
from .editing_controller import EditingController

FocusCallback = Callable[[], None]


class FormulaComposer(LoggerMixin):
    """
    Turns clicks on other cells into reference tokens while a formula is drafted.

    The token is appended to the end of the draft as-is. No syntax checks
    are made; self-references and malformed expressions are left for the
    store to reject.
    """

    def __init__(self, editing: EditingController,
                 restore_focus: Optional[FocusCallback] = None):
        self.editing = editing
        self.restore_focus = restore_focus

    @property
    def is_active(self) -> bool:
        return self.editing.in_formula_mode

    def click(self, row: int, column: int) -> Optional[str]:
        """Append the clicked cell's reference; returns the token or None."""
        if not self.is_active or self.editing.is_editing(row, column):
            return None

        token = reference_of(row, column)
        self.editing.append(token)
        self.logger.debug("Reference appended", token=token,
                          draft=self.editing.session.draft_text)

        if self.restore_focus is not None:
            self.restore_focus()
        return token
