# Shared constants, errors and logging utilities
from .constants import (
    FALLBACK_SUPPORT_MESSAGE,
    SENTIMENTS,
    UNSPECIFIED_TRIGGER,
    WORD_TO_EMOTION,
)

__all__ = [
    "FALLBACK_SUPPORT_MESSAGE",
    "SENTIMENTS",
    "UNSPECIFIED_TRIGGER",
    "WORD_TO_EMOTION",
]
