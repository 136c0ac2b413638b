"""
Stop-word synonym generation for the lexicon.

Loads stop-word lists and derives internal synonyms by trimming leading and
trailing stop words from names.
"""

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Set, Tuple

from ..lex_types import LexicalType

logger = logging.getLogger(__name__)

DEFAULT_STOP_WORDS_PATH = Path(__file__).parent / "stop_words.txt"

STOP_WORD_WEIGHT = 0.9


class StopWordSynonymGenerator:
    """
    Generates synonyms by removing leading and trailing stop words from names.
    """

    def __init__(
        self,
        stop_words: Optional[Set[str]] = None,
        stop_words_path: Optional[str] = None,
    ):
        """
        Args:
            stop_words: Stop words to use; loaded from stop_words_path when None
            stop_words_path: Stop-word file; the packaged English list when None
        """
        self._stop_words_cache: Dict[str, Set[str]] = {}
        self.stop_words = (
            stop_words
            if stop_words is not None
            else self.load_stop_words(stop_words_path)
        )

    def load_stop_words(self, file_path: Optional[str] = None) -> Set[str]:
        """
        Load stop words from a file, with caching.

        Args:
            file_path: Path to a stop-word file, one word per line; the packaged
                English list when None

        Returns:
            Set of stop words (normalized to lowercase)
        """
        path = os.path.abspath(file_path or DEFAULT_STOP_WORDS_PATH)
        if path in self._stop_words_cache:
            return self._stop_words_cache[path]

        stop_words = set()
        try:
            with open(path, "r", encoding="utf-8") as f:
                for line in f:
                    word = line.strip()
                    if word and not word.startswith("#"):  # Skip comments and empty lines
                        stop_words.add(word.lower())

            logger.debug("Loaded %s stop words from %s", len(stop_words), path)

        except OSError as e:
            logger.warning("Failed to load stop words from %s: %s", path, e)

        self._stop_words_cache[path] = stop_words
        return stop_words

    @staticmethod
    def trim(words: Sequence[str], stop_words: Set[str]) -> Optional[Tuple[int, int]]:
        """
        Find the span left after trimming leading and trailing stop words.

        Args:
            words: Tokens of a name
            stop_words: Words to trim

        Returns:
            (start, end) slice bounds, or None when nothing is trimmed or
            every word is a stop word
        """
        content = [i for i, word in enumerate(words) if word not in stop_words]
        if not content:
            return None
        start, end = content[0], content[-1] + 1
        if start == 0 and end == len(words):
            return None
        return start, end

    def generate(self, lexicon) -> int:
        """
        Add stop-word-trimmed synonyms for every internal class of every name.

        Names are index keys and therefore stemmed, so stop words are matched
        both as listed and in their stemmed form. Synonyms are cut from those
        keys, so they are added without stemming them again. The set of names
        is snapshot before the pass.

        Args:
            lexicon: Lexicon to read names from and add synonyms to

        Returns:
            Number of lexical entries added
        """
        normalizer = lexicon.normalizer
        stop_words = set(self.stop_words)
        stop_words.update(normalizer.stem(word) for word in self.stop_words)

        names: List[str] = lexicon.get_names_in_order()
        added = 0
        for name in names:
            if lexicon.is_formula(name):
                continue
            words = normalizer.tokenize(name)
            span = self.trim(words, stop_words)
            if span is None:
                continue
            synonym = " ".join(words[span[0] : span[1]])

            for class_id in sorted(lexicon.get_internal_classes(name)):
                for provenance in lexicon.get(name, class_id):
                    if lexicon.add(
                        class_id,
                        synonym,
                        LexicalType.INTERNAL_SYNONYM,
                        provenance.source,
                        provenance.weight * STOP_WORD_WEIGHT,
                        language=provenance.language,
                        stem=False,
                    ):
                        added += 1
            logger.debug("Stop-word synonym: '%s' -> '%s'", name, synonym)

        logger.info(
            "Stop-word synonyms: %s entries added from %s names", added, len(names)
        )
        return added
