"""PTE Practice UI Module - Terminal interface for timed practice exercises."""

from ui.app import PracticeUI
from ui.components import (
    ExercisePanel,
    StatusLine,
    ResultPanel,
    ExerciseMenu,
    ProgressTable,
    WelcomeScreen,
)
from ui.styles import (
    DEFAULT_THEME,
    PTE_BLUE,
    WRITING_GOLD,
    SUCCESS_GREEN,
    ERROR_RED,
    INFO_BLUE,
    MUTED_GRAY,
)

__all__ = [
    "PracticeUI",
    "ExercisePanel",
    "StatusLine",
    "ResultPanel",
    "ExerciseMenu",
    "ProgressTable",
    "WelcomeScreen",
    "DEFAULT_THEME",
    "PTE_BLUE",
    "WRITING_GOLD",
    "SUCCESS_GREEN",
    "ERROR_RED",
    "INFO_BLUE",
    "MUTED_GRAY",
]
