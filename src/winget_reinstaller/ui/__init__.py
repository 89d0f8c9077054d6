from .selector import ConsolePicker
from .tui import PickerApp, TextualPicker

__all__ = ["ConsolePicker", "PickerApp", "TextualPicker"]
