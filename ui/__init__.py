"""Quiz UI Module - terminal interface for the German quiz."""

from ui.app import QUIT, QuizUI
from ui.components import (
    ExercisePanel,
    FeedbackPanel,
    SessionSummary,
    WelcomeScreen,
)
from ui.styles import (
    FLAG_RED,
    FLAG_GOLD,
    SUCCESS_GREEN,
    ERROR_RED,
    INFO_BLUE,
    MUTED_GRAY,
)

__all__ = [
    "QUIT",
    "QuizUI",
    "ExercisePanel",
    "FeedbackPanel",
    "SessionSummary",
    "WelcomeScreen",
    "FLAG_RED",
    "FLAG_GOLD",
    "SUCCESS_GREEN",
    "ERROR_RED",
    "INFO_BLUE",
    "MUTED_GRAY",
]
