from dataclasses import dataclass
from enum import Enum
from typing import Optional

# === Lexical Categories ===


class LexicalType(Enum):
    """
    Category of a lexical entry, i.e. the role a name plays for its class.

    Each category carries the label used in persisted lexicon files and the
    default weight given to entries of that category when no weight is known.
    """

    LOCAL_NAME = ("localName", 0.95)
    LABEL = ("label", 0.90)
    EXACT_SYNONYM = ("exactSynonym", 0.85)
    SYNONYM = ("otherSynonym", 0.80)
    FORMULA = ("formula", 0.80)
    INTERNAL_SYNONYM = ("internalSynonym", 0.70)
    EXTERNAL_MATCH = ("externalMatch", 0.70)

    def __init__(self, label: str, default_weight: float):
        self.label = label
        self.default_weight = default_weight

    def __str__(self) -> str:
        return self.label


def parse_lexical_type(text: str) -> LexicalType:
    """
    Parse a lexical category from its label ("label") or member name ("LABEL").

    Raises:
        ValueError: if the text names no known category
    """
    candidate = text.strip()
    for lex_type in LexicalType:
        if candidate.lower() in (lex_type.label.lower(), lex_type.name.lower()):
            return lex_type
    raise ValueError(f"Unknown lexical type: {text!r}")


# === Provenance ===


@dataclass(frozen=True)
class Provenance:
    """Why, where from and how confidently a name is attached to a class."""

    type: LexicalType
    source: str
    language: str
    weight: float

    def __post_init__(self):
        object.__setattr__(self, "weight", round(float(self.weight), 4))

    @property
    def is_external(self) -> bool:
        """
        Whether the entry was imported rather than declared by the primary
        knowledge base. Declared entries carry an empty source.
        """
        return self.type is LexicalType.EXTERNAL_MATCH or bool(self.source)


# === Formulas ===


@dataclass(frozen=True)
class Formula:
    """Represents a name recognized as a chemical formula or symbolic expression."""

    kind: str  # "chemical" or "expression"
    text: str  # canonical rendering
    well_formed: bool = True


# === Mapping Settings ===


class MappingRelation(Enum):
    """Semantic relation recorded by a correspondence between two classes."""

    EQUIVALENCE = "="
    SUPERCLASS = ">"
    SUBCLASS = "<"
    OVERLAP = "^"
    UNKNOWN = "?"

    def __str__(self) -> str:
        return self.value

    @property
    def inverse(self) -> "MappingRelation":
        if self is MappingRelation.SUBCLASS:
            return MappingRelation.SUPERCLASS
        if self is MappingRelation.SUPERCLASS:
            return MappingRelation.SUBCLASS
        return self

    @classmethod
    def parse(cls, text: str) -> "MappingRelation":
        for relation in cls:
            if text.strip() in (relation.value, relation.name.lower(), relation.name):
                return relation
        return cls.UNKNOWN


class StringSimMeasure(Enum):
    """String similarity measures selectable by downstream fuzzy matchers."""

    ISUB = "ISub"
    EDIT = "Levenstein"
    JW = "Jaro-Winkler"
    QGRAM = "Q-gram"

    def __str__(self) -> str:
        return self.value


def parse_measure(text: str) -> Optional[StringSimMeasure]:
    """Case-insensitive lookup of a similarity measure by label; None if unknown."""
    for measure in StringSimMeasure:
        if text.strip().lower() == measure.value.lower():
            return measure
    return None
