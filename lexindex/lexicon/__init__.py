"""
Lexicon package - lexical indexing and weighted term resolution.

This package maps the names of knowledge-base classes to their identifiers
and back, broken down into focused modules:

- core: Settings, sentinel values, entry records and exceptions
- table: Indexed bi-directional multimap
- normalizer: Name and formula normalization, tokenization and stemming
- raw_processor: Validation of upstream lexical tuples
- parenthesis: Parenthetical synonym generation
- stop_words: Stop-word loading and stop-word synonym generation
- persistence: Lexicon file format
- lexicon: The Lexicon itself
"""

from .core import (
    NOT_FOUND,
    LexicalEntry,
    LexiconFormatError,
    LexiconSettings,
    extract_lexicon_settings,
)
from .lexicon import Lexicon
from .normalizer import IdentityStemmer, Normalizer, SnowballStemmer, Stemmer
from .parenthesis import ParenthesisSynonymGenerator
from .raw_processor import RawEntryProcessor
from .stop_words import StopWordSynonymGenerator
from .table import IndexedBiMultimap

__all__ = [
    "NOT_FOUND",
    "LexicalEntry",
    "LexiconFormatError",
    "LexiconSettings",
    "extract_lexicon_settings",
    "IndexedBiMultimap",
    "Stemmer",
    "IdentityStemmer",
    "SnowballStemmer",
    "Normalizer",
    "RawEntryProcessor",
    "ParenthesisSynonymGenerator",
    "StopWordSynonymGenerator",
    "Lexicon",
]
