"""
Main lexicon implementation.

The Lexicon maps classes of a knowledge base to their names and synonyms.
Every (name, class) pair carries the provenances of the entries that attach
the name to the class, and every provenance is weighted, so that ambiguous
names can be resolved to the class they most confidently denote.

Names are index keys: normalized, and stemmed for English natural-language
names. Each add inserts exactly one key into both directions of the index;
the unstemmed form of a label is only kept in the canonical-label maps.
"""

import logging
import re
from typing import Dict, Iterable, List, Optional, Set

from ..lex_types import LexicalType, Provenance
from . import persistence
from .core import (
    ENGLISH,
    NOT_FOUND,
    LexicalEntry,
    LexiconSettings,
    extract_lexicon_settings,
)
from .normalizer import Normalizer
from .parenthesis import ParenthesisSynonymGenerator
from .stop_words import StopWordSynonymGenerator
from .table import IndexedBiMultimap

logger = logging.getLogger(__name__)

RE_LATIN = re.compile(r"[a-zA-Z]")


# pylint: disable=too-many-public-methods,too-many-instance-attributes
class Lexicon:
    """
    Lexicon of a knowledge base, mapping each class to its weighted names.

    The lexicon is append-only and not thread-safe; concurrent readers should
    work on a copy().
    """

    def __init__(
        self,
        settings: Optional[LexiconSettings] = None,
        normalizer: Optional[Normalizer] = None,
    ):
        """
        Initialize an empty lexicon.

        Args:
            settings: LexiconSettings, a dict of settings, or None for defaults
            normalizer: Normalizer to use (carries the stemmer)
        """
        self.settings = extract_lexicon_settings(settings)
        self.normalizer = normalizer if normalizer is not None else Normalizer()

        self._names: IndexedBiMultimap[str, int, Provenance] = IndexedBiMultimap()
        self._classes: IndexedBiMultimap[int, str, Provenance] = IndexedBiMultimap()
        self._corrected_names: Dict[int, str] = {}
        self._corrected_classes: Dict[str, int] = {}
        self._language_counts: Dict[str, int] = {}
        self._synonyms: Dict[int, Set[str]] = {}
        self._stop_word_generator: Optional[StopWordSynonymGenerator] = None

    def __repr__(self):
        return f"Lexicon(names={self.name_count()}, classes={self.class_count()})"

    def __contains__(self, name) -> bool:
        return self._names.contains(name)

    def __len__(self) -> int:
        return self.size()

    # === Construction ===

    def copy(self) -> "Lexicon":
        """Deep copy of this lexicon, for readers that must not see later adds."""
        other = Lexicon(self.settings, self.normalizer)
        other._names = self._names.copy()
        other._classes = self._classes.copy()
        other._corrected_names = dict(self._corrected_names)
        other._corrected_classes = dict(self._corrected_classes)
        other._language_counts = dict(self._language_counts)
        other._synonyms = {k: set(v) for k, v in self._synonyms.items()}
        other._stop_word_generator = self._stop_word_generator
        return other

    @classmethod
    def load(
        cls,
        path: str,
        settings: Optional[LexiconSettings] = None,
        normalizer: Optional[Normalizer] = None,
    ) -> "Lexicon":
        """
        Read a lexicon saved with save().

        Each entry gets the default weight of its lexical type, an empty source
        and the English language tag. Names are already index keys, so they are
        inserted as they are, without normalization or rejection.

        Raises:
            LexiconFormatError: if any line is malformed
            OSError: if the file cannot be read
        """
        lexicon = cls(settings, normalizer)
        count = 0
        for class_id, name, lex_type in persistence.read_entries(path):
            provenance = Provenance(lex_type, "", ENGLISH, lex_type.default_weight)
            lexicon._insert(class_id, name, name, provenance)
            count += 1
        logger.info("Loaded %s lexicon entries from %s", count, path)
        return lexicon

    def save(self, path: str) -> int:
        """
        Save the lexicon, one line per (class, name) pair with its best type.

        Returns:
            Number of lines written
        """
        return persistence.write_entries(
            path,
            (
                (class_id, name, self.get_type(name, class_id))
                for class_id in self._classes.key_set()
                for name in self._classes.second_keys(class_id)
            ),
        )

    # === Adding entries ===

    # pylint: disable=too-many-arguments
    def add(
        self,
        class_id: int,
        name: str,
        lex_type: LexicalType,
        source: str,
        weight: float,
        language: str = ENGLISH,
        stem: bool = True,
    ) -> bool:
        """
        Add a lexical entry.

        Empty names, and English names without Latin letters, are silently
        ignored. English formulas are stored as FORMULA entries regardless of
        the given type.

        Args:
            class_id: The class the name belongs to
            name: The raw name
            lex_type: The lexical type of the entry (label, synonym, ...)
            source: Where the entry comes from; empty for the knowledge base itself
            weight: Confidence in [0, 1], rounded to 4 decimals
            language: Language code of the name
            stem: Whether to stem English natural-language names

        Returns:
            True if the entry was added
        """
        if not name:
            return False

        if language != ENGLISH:
            normalized = self.normalizer.normalize_formula(name)
            key = normalized
        elif not RE_LATIN.search(name):
            logger.debug("Ignoring name without Latin letters: '%s'", name)
            return False
        elif self.normalizer.is_formula(name):
            normalized = self.normalizer.normalize_formula(name)
            key = normalized
            lex_type = LexicalType.FORMULA
        else:
            normalized = self.normalizer.normalize_name(name)
            key = self.normalizer.stem_name(normalized) if stem else normalized

        if not key:
            logger.debug("Ignoring name that normalizes to nothing: '%s'", name)
            return False

        self._insert(
            class_id, key, normalized, Provenance(lex_type, source, language, weight)
        )
        return True

    def _insert(self, class_id: int, key: str, normalized: str, provenance: Provenance):
        if provenance.type is LexicalType.LABEL:
            self._set_corrected_name(class_id, normalized)
        self._names.add(key, class_id, provenance)
        self._classes.add(class_id, key, provenance)
        language = provenance.language
        self._language_counts[language] = self._language_counts.get(language, 0) + 1

    def add_entries(self, entries: Iterable[LexicalEntry]) -> int:
        """
        Add validated upstream entries.

        Returns:
            Number of entries added
        """
        added = 0
        total = 0
        for entry in entries:
            total += 1
            if self.add(
                entry.class_id,
                entry.name,
                entry.lex_type,
                entry.source,
                entry.weight,
                language=entry.language,
            ):
                added += 1
        logger.info("Added %s of %s lexical entries", added, total)
        return added

    def add_synonym(self, class_id: int, name: str):
        """Record a normalized, stemmed synonym in the auxiliary synonym sets."""
        key = self.normalizer.stem_name(self.normalizer.normalize_name(name))
        if key:
            self._synonyms.setdefault(class_id, set()).add(key)

    def get_synonyms(self) -> Dict[int, List[str]]:
        """The auxiliary synonyms of each class, sorted."""
        return {class_id: sorted(names) for class_id, names in self._synonyms.items()}

    def _set_corrected_name(self, class_id: int, normalized: str):
        previous = self._corrected_names.get(class_id)
        if previous is not None and self._corrected_classes.get(previous) == class_id:
            del self._corrected_classes[previous]
        self._corrected_names[class_id] = normalized
        self._corrected_classes[normalized] = class_id

    # === Synonym generation ===

    def generate_parenthesis_synonyms(self) -> int:
        """Generate internal synonyms by removing within-parenthesis sections of names."""
        return ParenthesisSynonymGenerator().generate(self)

    def generate_stop_word_synonyms(self, stop_words: Optional[Set[str]] = None) -> int:
        """
        Generate internal synonyms by removing leading and trailing stop words.

        Without explicit stop words, the configured list is loaded on the first
        call and reused by later calls.
        """
        if stop_words is not None:
            return StopWordSynonymGenerator(stop_words).generate(self)
        if self._stop_word_generator is None:
            self._stop_word_generator = StopWordSynonymGenerator(
                stop_words_path=self.settings.stop_words_path
            )
        return self._stop_word_generator.generate(self)

    # === Counts ===

    def class_count(self, name: Optional[str] = None) -> int:
        """Number of classes in the lexicon, or of entries under the name."""
        if name is None:
            return self._classes.key_count()
        return self._names.entry_count(name)

    def class_count_of_type(self, name: str, lex_type: LexicalType) -> int:
        return len(self.get_classes_of_type(name, lex_type))

    def name_count(self, class_id: Optional[int] = None) -> int:
        """Number of names in the lexicon, or of entries under the class."""
        if class_id is None:
            return self._names.key_count()
        return self._classes.entry_count(class_id)

    def name_count_of_type(
        self, class_id: int, lex_type: LexicalType, language: Optional[str] = None
    ) -> int:
        """Number of names of the given type (and language) attached to the class."""
        return len(
            [
                name
                for name in self._classes.second_keys(class_id)
                if any(
                    p.type is lex_type and (language is None or p.language == language)
                    for p in self._classes.get(class_id, name)
                )
            ]
        )

    def size(self) -> int:
        """Number of lexical entries."""
        return self._names.size()

    def get_language_count(self, language: str) -> int:
        return self._language_counts.get(language, 0)

    def get_languages(
        self, name: Optional[str] = None, class_id: Optional[int] = None
    ) -> Set[str]:
        """
        Languages of the lexicon, of a name, or of a (name, class) pair.
        """
        if name is None:
            return set(self._language_counts)
        class_ids = [class_id] if class_id is not None else self._names.second_keys(name)
        return {p.language for i in class_ids for p in self._names.get(name, i)}

    # === Containment ===

    def contains(self, name: str) -> bool:
        return self._names.contains(name)

    def contains_pair(self, class_id: int, name: str) -> bool:
        return self._classes.contains_pair(class_id, name)

    def contains_non_small_formula(self, class_id: int) -> bool:
        """
        Whether the class has a name other than a small formula, i.e. a name
        at least small_formula_length long or any name that is not a formula.
        """
        for name in self._classes.second_keys(class_id):
            if len(name) >= self.settings.small_formula_length:
                return True
            for provenance in self._classes.get(class_id, name):
                if provenance.type is not LexicalType.FORMULA:
                    return True
        return False

    def is_formula(self, name: str) -> bool:
        return self.normalizer.is_formula(name)

    # === Names and classes ===

    def get(self, name: str, class_id: int) -> List[Provenance]:
        """The provenances of the (name, class) pair."""
        return self._names.get(name, class_id)

    def get_classes(self, name: Optional[str] = None) -> Set[int]:
        """All classes, or the classes attached to the name."""
        if name is None:
            return set(self._classes.key_set())
        return set(self._names.second_keys(name))

    def get_classes_of_type(self, name: str, lex_type: LexicalType) -> Set[int]:
        return {
            class_id
            for class_id in self._names.second_keys(name)
            if any(p.type is lex_type for p in self._names.get(name, class_id))
        }

    def get_classes_with_language(self, name: str, language: str) -> Set[int]:
        return {
            class_id
            for class_id in self._names.second_keys(name)
            if any(p.language == language for p in self._names.get(name, class_id))
        }

    def get_classes_with_source(self, source: str) -> List[int]:
        """Classes with a name from the given source, in insertion order."""
        return [
            class_id
            for class_id in self._classes.key_set()
            if self.has_name_from_source(class_id, source)
        ]

    def get_extended_classes(self) -> Set[int]:
        """Classes with at least one external name."""
        return {
            class_id
            for class_id in self._classes.key_set()
            if self.has_external_name(class_id)
        }

    def get_internal_classes(self, name: str) -> Set[int]:
        """Classes attached to the name by at least one non-external entry."""
        return {
            class_id
            for class_id in self._names.second_keys(name)
            if not self.is_external(name, class_id)
        }

    def get_names(self, class_id: Optional[int] = None) -> Set[str]:
        """All names, or the names attached to the class."""
        if class_id is None:
            return set(self._names.key_set())
        return set(self._classes.second_keys(class_id))

    def get_names_in_order(self) -> List[str]:
        """Snapshot of all names in insertion order."""
        return self._names.key_set()

    def get_names_of_type(self, class_id: int, lex_type: LexicalType) -> Set[str]:
        return {
            name
            for name in self._classes.second_keys(class_id)
            if any(p.type is lex_type for p in self._classes.get(class_id, name))
        }

    def get_names_with_language(self, class_id: int, language: str) -> Set[str]:
        return set(self._names_with_language(class_id, language))

    def get_internal_names(self, class_id: int) -> Set[str]:
        return set(self._internal_names(class_id))

    def get_sources(self, name: str, class_id: int) -> Set[str]:
        return {p.source for p in self._names.get(name, class_id)}

    def get_type(self, name: str, class_id: int) -> Optional[LexicalType]:
        """The type of the highest-weighted provenance of the pair (first on ties)."""
        best: Optional[Provenance] = None
        for provenance in self._names.get(name, class_id):
            if best is None or provenance.weight > best.weight:
                best = provenance
        return best.type if best is not None else None

    def get_types(self, name: str, class_id: int) -> Set[LexicalType]:
        return {p.type for p in self._names.get(name, class_id)}

    def get_corrected_name(self, class_id: int) -> Optional[str]:
        """The unstemmed normalized label last added for the class."""
        return self._corrected_names.get(class_id)

    def get_corrected_class(self, label: str) -> Optional[int]:
        """The class whose latest label normalizes to the given string."""
        return self._corrected_classes.get(label)

    def name_key(self, name: str, language: str = ENGLISH, stem: bool = True) -> str:
        """The index key a raw name would be stored under."""
        return self.normalizer.name_key(name, language, stem)

    def _names_with_language(self, class_id: int, language: str) -> List[str]:
        return [
            name
            for name in self._classes.second_keys(class_id)
            if any(p.language == language for p in self._classes.get(class_id, name))
        ]

    def _internal_names(self, class_id: int) -> List[str]:
        return [
            name
            for name in self._classes.second_keys(class_id)
            if not self.is_external(name, class_id)
        ]

    # === Weights and disambiguation ===

    def get_weight(
        self, name: str, class_id: int, language: Optional[str] = None
    ) -> float:
        """
        Highest provenance weight of the (name, class) pair, optionally among
        provenances in the given language; 0.0 if there is none.
        """
        weight = 0.0
        for provenance in self._names.get(name, class_id):
            if language is not None and provenance.language != language:
                continue
            if provenance.weight > weight:
                weight = provenance.weight
        return weight

    def get_corrected_weight(
        self, name: str, class_id: int, language: Optional[str] = None
    ) -> float:
        """
        Weight of the best provenance of the pair, minus a penalty of 0.01 for
        every name of that provenance's type the class has.

        Classes with many names of a type are less discriminated by each one.
        With a language, only provenances and names in that language count.
        """
        best: Optional[Provenance] = None
        for provenance in self._names.get(name, class_id):
            if language is not None and provenance.language != language:
                continue
            if best is None or provenance.weight > best.weight:
                best = provenance
        if best is None:
            return 0.0
        correction = self.name_count_of_type(class_id, best.type, language) / 100.0
        return best.weight - correction

    def get_best_class(self, name: str, internal: bool = False) -> Optional[int]:
        """
        The class the name most confidently denotes.

        Args:
            name: Index key to resolve
            internal: Only consider classes attached by non-external entries

        Returns:
            The class with the highest weight for the name, or NOT_FOUND when
            there is no class or two or more classes share the highest weight
        """
        if internal:
            hits = [c for c in self._names.second_keys(name) if not self.is_external(name, c)]
        else:
            hits = self._names.second_keys(name)

        best_classes: List[int] = []
        max_weight = 0.0
        for class_id in hits:
            weight = self.get_weight(name, class_id)
            if weight > max_weight:
                max_weight = weight
                best_classes = [class_id]
            elif weight == max_weight:
                best_classes.append(class_id)

        if len(best_classes) != 1:
            return NOT_FOUND
        return best_classes[0]

    def get_best_name(self, class_id: int) -> str:
        """
        The highest-weighted name of the class in the label language, falling
        back to its internal names. The first name wins ties; "" if none.
        """
        hits = self._names_with_language(class_id, self.settings.label_language)
        if not hits:
            hits = self._internal_names(class_id)

        best_name = ""
        max_weight = 0.0
        for name in hits:
            weight = self.get_weight(name, class_id)
            if weight > max_weight:
                max_weight = weight
                best_name = name
        return best_name

    # === Provenance queries ===

    def is_external(
        self, name: str, class_id: int, language: Optional[str] = None
    ) -> bool:
        """
        Whether the (name, class) pair is external.

        Without a language, a pair is external when every provenance is
        external. With a language, when any provenance in that language is.
        """
        provenances = self._names.get(name, class_id)
        if not provenances:
            return False
        if language is not None:
            return any(p.language == language and p.is_external for p in provenances)
        return all(p.is_external for p in provenances)

    def has_external_name(self, class_id: int) -> bool:
        return any(
            self.is_external(name, class_id)
            for name in self._classes.second_keys(class_id)
        )

    def has_name_from_source(self, class_id: int, source: str) -> bool:
        return any(
            source in self.get_sources(name, class_id)
            for name in self._classes.second_keys(class_id)
        )
