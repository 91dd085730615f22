"""
Pointer input abstraction.

The grid view registers its pointer move/release handlers once, for its own
lifetime, through an InputDevice supplied by the presentation layer.
"""

from enum import Enum
from typing import Callable, Dict, List, Protocol
from pydantic import BaseModel, ConfigDict

from ..config.logging_config import LoggerMixin


class PointerEventType(str, Enum):
    MOVE = "pointer_move"
    UP = "pointer_up"


class PointerEvent(BaseModel):
    """Pointer position in the presentation layer's client coordinates."""

    model_config = ConfigDict(frozen=True)

    client_x: float = 0.0
    client_y: float = 0.0


PointerHandler = Callable[[PointerEvent], None]


class InputDevice(Protocol):
    def subscribe(self, event_type: PointerEventType, handler: PointerHandler) -> None:
        ...

    def unsubscribe(self, event_type: PointerEventType, handler: PointerHandler) -> None:
        ...


class LocalInputDevice(LoggerMixin):
    """In-process InputDevice that delivers events synchronously, in order."""

    def __init__(self):
        self._handlers: Dict[PointerEventType, List[PointerHandler]] = {
            event_type: [] for event_type in PointerEventType
        }

    def subscribe(self, event_type: PointerEventType, handler: PointerHandler) -> None:
        self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: PointerEventType, handler: PointerHandler) -> None:
        try:
            self._handlers[event_type].remove(handler)
        except ValueError:
            self.logger.warning("Handler was not subscribed",
                                event_type=event_type.value)

    def listener_count(self, event_type: PointerEventType) -> int:
        return len(self._handlers[event_type])

    def dispatch(self, event_type: PointerEventType, event: PointerEvent) -> None:
        for handler in list(self._handlers[event_type]):
            handler(event)

    def move(self, client_x: float = 0.0, client_y: float = 0.0) -> None:
        self.dispatch(PointerEventType.MOVE,
                      PointerEvent(client_x=client_x, client_y=client_y))

    def release(self, client_x: float = 0.0, client_y: float = 0.0) -> None:
        self.dispatch(PointerEventType.UP,
                      PointerEvent(client_x=client_x, client_y=client_y))
