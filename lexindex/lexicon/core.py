"""
Core data structures for the lexicon engine.

Contains the settings, sentinel values, entry records and exceptions used
throughout the lexicon package.
"""

from dataclasses import dataclass
from typing import Any, Optional

from ..lex_types import LexicalType

# Returned by disambiguation queries when no single class can be chosen
NOT_FOUND: Optional[int] = None

ENGLISH = "en"


@dataclass
class LexicalEntry:
    """An upstream (identifier, name, type, source, weight) tuple ready to be added."""

    class_id: int
    name: str
    lex_type: LexicalType
    source: str
    weight: float
    language: str = ENGLISH


class LexiconSettings:
    """Settings that control how a lexicon normalizes and ranks its names."""

    def __init__(
        self,
        label_language: str = ENGLISH,
        stop_words_path: Optional[str] = None,
        small_formula_length: int = 10,
        default_language: str = ENGLISH,
    ):
        self.label_language = label_language
        self.stop_words_path = stop_words_path
        self.small_formula_length = small_formula_length
        self.default_language = default_language


class LexiconFormatError(ValueError):
    """Raised when a persisted lexicon file contains a malformed line."""

    def __init__(self, path: str, line_number: int, message: str):
        super().__init__(f"{path}:{line_number}: {message}")
        self.path = path
        self.line_number = line_number


def extract_lexicon_settings(config: Any) -> LexiconSettings:
    """
    Extract lexicon settings from a LexiconSettings object or dict.

    Args:
        config: Either a LexiconSettings object, a dictionary or None

    Returns:
        LexiconSettings with defaults for anything not configured
    """
    if config is None:
        return LexiconSettings()
    if isinstance(config, LexiconSettings):  # Already settings
        return config
    settings = LexiconSettings()
    for key, value in dict(config).items():
        if hasattr(settings, key):
            setattr(settings, key, value)
    return settings
