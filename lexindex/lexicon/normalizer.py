"""
Text normalization functionality for the lexicon.

Handles name normalization, formula detection and normalization, whitespace
tokenization and English stemming. Stemming is an injectable capability so
that other algorithms can be substituted without touching the Lexicon.
"""

import html
import logging
import re
from functools import lru_cache
from typing import Dict, List, Optional

import snowballstemmer

from .. import lex_formula
from .core import ENGLISH

logger = logging.getLogger(__name__)

# Pre-compiled regex patterns for performance
RE_LANGUAGE_TAG = re.compile(r"@[A-Za-z]{2}(?:-[A-Za-z0-9]+)?$")
RE_CAMEL_CASE = re.compile(r"([a-z])([A-Z])")
# Everything but letters, digits and parentheses separates words
RE_NON_SEMANTIC = re.compile(r"[^\w()]|_")
RE_WHITESPACE = re.compile(r"\s+")
RE_TOKEN_CORE = re.compile(r"^(\W*)(.*?)(\W*)$", re.DOTALL)


class Stemmer:
    """Reduces a single token to its stem."""

    def reduce(self, token: str) -> str:
        raise NotImplementedError


class IdentityStemmer(Stemmer):
    """Stemmer that leaves tokens unchanged."""

    def reduce(self, token: str) -> str:
        return token


@lru_cache(maxsize=65536)
def _snowball_reduce(algorithm: str, token: str) -> str:
    # A new stemmer per distinct token keeps the call free of shared state
    return snowballstemmer.stemmer(algorithm).stemWord(token)


class SnowballStemmer(Stemmer):
    """Snowball (Porter2) stemmer, English by default."""

    def __init__(self, algorithm: str = "english"):
        self.algorithm = algorithm

    def reduce(self, token: str) -> str:
        return _snowball_reduce(self.algorithm, token)


class Normalizer:
    """
    Turns raw surface forms into the normalized strings used as index keys.
    """

    def __init__(self, stemmer: Optional[Stemmer] = None):
        self.stemmer = stemmer if stemmer is not None else SnowballStemmer()
        self._name_cache: Dict[str, str] = {}  # Cache for normalized names

    @staticmethod
    def is_formula(text: str) -> bool:
        """Whether text is a chemical formula or symbolic expression."""
        return lex_formula.is_formula(text)

    @staticmethod
    def normalize_formula(text: str) -> str:
        """Less aggressive normalization that keeps formula syntax intact."""
        return lex_formula.normalize_formula(text)

    def normalize_name(self, text: str) -> str:
        """
        Normalize a natural-language name.

        Decodes HTML entities, drops a trailing language tag, splits camelCase,
        replaces punctuation (except parentheses) and underscores by spaces,
        collapses whitespace and lower-cases.

        Args:
            text: Raw name

        Returns:
            Normalized name
        """
        if not text:
            return ""
        if text in self._name_cache:
            return self._name_cache[text]

        normalized = html.unescape(text)
        normalized = RE_LANGUAGE_TAG.sub("", normalized)
        normalized = RE_CAMEL_CASE.sub(r"\1 \2", normalized)
        normalized = RE_NON_SEMANTIC.sub(" ", normalized)
        normalized = RE_WHITESPACE.sub(" ", normalized).strip().lower()

        self._name_cache[text] = normalized
        return normalized

    @staticmethod
    def tokenize(text: str) -> List[str]:
        """Split normalized text on whitespace."""
        return text.split()

    def stem(self, word: str, language: str = ENGLISH) -> str:
        """
        Stem a single token; non-English tokens are returned unchanged.

        Leading and trailing punctuation such as parentheses is kept and only
        the word inside is reduced.
        """
        if language != ENGLISH:
            return word
        prefix, core, suffix = RE_TOKEN_CORE.match(word).groups()
        if not core:
            return word
        return f"{prefix}{self.stemmer.reduce(core)}{suffix}"

    def stem_name(self, text: str, language: str = ENGLISH) -> str:
        """Stem each whitespace token of text and rejoin with single spaces."""
        return " ".join(self.stem(token, language) for token in self.tokenize(text))

    def name_key(self, text: str, language: str = ENGLISH, stem: bool = True) -> str:
        """
        The index key a raw name is stored under.

        English names are normalized (as formulas when they are formulas) and
        stemmed unless they are formulas or stem is False. Other languages get
        formula-style normalization and no stemming.
        """
        if not text:
            return ""
        if language != ENGLISH:
            return self.normalize_formula(text)
        if self.is_formula(text):
            return self.normalize_formula(text)
        normalized = self.normalize_name(text)
        if not stem:
            return normalized
        return self.stem_name(normalized, language)
