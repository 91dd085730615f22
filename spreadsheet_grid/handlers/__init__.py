from .input_device import InputDevice, LocalInputDevice, PointerEvent, PointerEventType
from .editing_controller import EditingController
from .formula_composer import FormulaComposer
from .resize_controller import ResizeController

__all__ = [
    "InputDevice",
    "LocalInputDevice",
    "PointerEvent",
    "PointerEventType",
    "EditingController",
    "FormulaComposer",
    "ResizeController"
]
