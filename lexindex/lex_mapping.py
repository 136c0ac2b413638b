"""
Correspondences between classes of two knowledge bases.

Mappings are recorded by alignment components that query the lexicon. They
are ordered by similarity only, while equality is decided by the classes they
relate, so a collection of mappings can be sorted by confidence and
deduplicated by class pair.
"""

from typing import Any

from lexindex.lex_types import MappingRelation


def _round_similarity(similarity: float) -> float:
    return round(float(similarity), 4)


class _SimilarityOrdered:
    """Ordering by similarity; subclasses define equality."""

    similarity: float

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, _SimilarityOrdered):
            return NotImplemented
        return self.similarity < other.similarity

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, _SimilarityOrdered):
            return NotImplemented
        return self.similarity <= other.similarity

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, _SimilarityOrdered):
            return NotImplemented
        return self.similarity > other.similarity

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, _SimilarityOrdered):
            return NotImplemented
        return self.similarity >= other.similarity


class Mapping(_SimilarityOrdered):
    """A scored correspondence between a source class and a target class."""

    def __init__(
        self,
        source_id: int,
        target_id: int,
        similarity: float = 1.0,
        relation: MappingRelation = MappingRelation.EQUIVALENCE,
    ):
        self.source_id = source_id
        self.target_id = target_id
        self.similarity = _round_similarity(similarity)
        self.relation = relation

    def __repr__(self):
        return (
            f"Mapping({self.source_id} {self.relation} {self.target_id}, "
            f"similarity={self.similarity})"
        )

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Mapping):
            return NotImplemented
        return (self.source_id, self.target_id) == (other.source_id, other.target_id)

    def __hash__(self) -> int:
        return hash((self.source_id, self.target_id))

    def set_similarity(self, similarity: float):
        self.similarity = _round_similarity(similarity)


class CompoundMapping(_SimilarityOrdered):
    """
    A correspondence between a source class and a pair of target classes.

    The target pair is unordered: two compound mappings are equal when they
    share the source class and the same two target classes in either order.
    """

    def __init__(
        self,
        source_id: int,
        target_id1: int = 0,
        target_id2: int = 0,
        similarity: float = 1.0,
        relation: MappingRelation = MappingRelation.EQUIVALENCE,
    ):
        self.source_id = source_id
        self.target_id1 = target_id1
        self.target_id2 = target_id2
        self.similarity = _round_similarity(similarity)
        self.relation = relation

    def __repr__(self):
        return (
            f"CompoundMapping({self.source_id} {self.relation} "
            f"{self.target_id1} + {self.target_id2}, similarity={self.similarity})"
        )

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, CompoundMapping):
            return NotImplemented
        return self.source_id == other.source_id and self._targets() == other._targets()

    def __hash__(self) -> int:
        return hash((self.source_id, self._targets()))

    def _targets(self) -> frozenset:
        return frozenset((self.target_id1, self.target_id2))

    def set_similarity(self, similarity: float):
        self.similarity = _round_similarity(similarity)

    def set_targets(self, target_id1: int, target_id2: int, similarity: float):
        self.target_id1 = target_id1
        self.target_id2 = target_id2
        self.set_similarity(similarity)
