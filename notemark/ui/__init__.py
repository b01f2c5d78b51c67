from .completion_popup import CompletionPopup, FloatingCompletionPanel
from .decorations import build_extra_selections
from .note_input import NoteInput
from .surface import EditableSurface, QtTextSurface, apply_quick_fix
from .validation_controller import ValidationController
from .validation_tooltip import ValidationTooltip

__all__ = [
    "CompletionPopup",
    "EditableSurface",
    "FloatingCompletionPanel",
    "NoteInput",
    "QtTextSurface",
    "ValidationController",
    "ValidationTooltip",
    "apply_quick_fix",
    "build_extra_selections",
]
