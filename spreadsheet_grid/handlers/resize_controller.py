"""
Resize state machine for column widths and row heights.

Column and row handles share one session slot, so only one boundary can
be dragged at a time. Move and release handlers are attached to the input
device once and stay attached until ``detach``.
"""

from typing import Optional

from ..config.logging_config import LoggerMixin
from ..models.grid_model import GridState, ResizeAxis
from ..models.session_model import ResizeSession
from .input_device import InputDevice, PointerEvent, PointerEventType


class ResizeController(LoggerMixin):

    def __init__(self, grid: GridState):
        self.grid = grid
        self._session: Optional[ResizeSession] = None
        self._device: Optional[InputDevice] = None

    @property
    def session(self) -> Optional[ResizeSession]:
        return self._session

    @property
    def is_resizing(self) -> bool:
        return self._session is not None

    @property
    def is_attached(self) -> bool:
        return self._device is not None

    def attach(self, device: InputDevice) -> None:
        if self._device is not None:
            raise RuntimeError("Resize controller is already attached")
        device.subscribe(PointerEventType.MOVE, self.on_pointer_move)
        device.subscribe(PointerEventType.UP, self.on_pointer_up)
        self._device = device

    def detach(self) -> None:
        if self._device is None:
            return
        self._device.unsubscribe(PointerEventType.MOVE, self.on_pointer_move)
        self._device.unsubscribe(PointerEventType.UP, self.on_pointer_up)
        self._device = None
        self._session = None

    def begin_drag(self, axis: ResizeAxis, index: int,
                   event: PointerEvent) -> ResizeSession:
        """Start dragging; a drag already in progress is replaced."""
        self._session = ResizeSession(
            axis=axis,
            index=index,
            start_pointer=self._coordinate(axis, event),
            start_size=self.grid.size_of(axis, index),
        )
        self.logger.debug("Resize started", axis=axis.value, index=index,
                          start_size=self._session.start_size)
        return self._session

    def begin_column_drag(self, index: int, event: PointerEvent) -> ResizeSession:
        return self.begin_drag(ResizeAxis.COLUMN, index, event)

    def begin_row_drag(self, index: int, event: PointerEvent) -> ResizeSession:
        return self.begin_drag(ResizeAxis.ROW, index, event)

    def on_pointer_move(self, event: PointerEvent) -> None:
        session = self._session
        if session is None:
            return

        new_size = session.size_for(self._coordinate(session.axis, event),
                                    self.grid.dimensions.minimum(session.axis))
        self.grid.set_size(session.axis, session.index, new_size)

    def on_pointer_up(self, event: PointerEvent) -> None:
        if self._session is not None:
            self.logger.debug("Resize finished", axis=self._session.axis.value,
                              index=self._session.index,
                              size=self.grid.size_of(self._session.axis,
                                                     self._session.index))
        self._session = None

    @staticmethod
    def _coordinate(axis: ResizeAxis, event: PointerEvent) -> float:
        return event.client_x if axis == ResizeAxis.COLUMN else event.client_y
