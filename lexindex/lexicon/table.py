"""
Indexed bi-directional multimap for the lexicon.

Maps pairs of keys to ordered lists of values and keeps secondary indexes in
both directions, so the second keys under a first key and the first keys under
a second key are both available in constant time.
"""

import copy
from typing import Dict, Generic, List, Tuple, TypeVar

K1 = TypeVar("K1")
K2 = TypeVar("K2")
V = TypeVar("V")


class IndexedBiMultimap(Generic[K1, K2, V]):
    """
    Two-key, multi-value table.

    Each (k1, k2) pair holds an ordered list of values. Keys are kept in
    insertion order in both secondary indexes. The table only grows.
    """

    def __init__(self):
        self._values: Dict[Tuple[K1, K2], List[V]] = {}
        # Ordered key sets: dict keys with None values
        self._by_first: Dict[K1, Dict[K2, None]] = {}
        self._by_second: Dict[K2, Dict[K1, None]] = {}

    def __repr__(self):
        return f"IndexedBiMultimap(keys={len(self._by_first)}, size={self.size()})"

    def __contains__(self, k1) -> bool:
        return k1 in self._by_first

    def add(self, k1: K1, k2: K2, value: V):
        """Append a value to the list stored at (k1, k2), creating the slot if needed."""
        pair = (k1, k2)
        if pair in self._values:
            self._values[pair].append(value)
            return
        self._values[pair] = [value]
        self._by_first.setdefault(k1, {})[k2] = None
        self._by_second.setdefault(k2, {})[k1] = None

    def get(self, k1: K1, k2: K2) -> List[V]:
        """Return a copy of the values at (k1, k2), or an empty list."""
        return list(self._values.get((k1, k2), ()))

    def key_set(self) -> List[K1]:
        """All first keys, in insertion order."""
        return list(self._by_first)

    def second_keys(self, k1: K1) -> List[K2]:
        """All second keys paired with k1, in insertion order."""
        return list(self._by_first.get(k1, ()))

    def first_keys(self, k2: K2) -> List[K1]:
        """All first keys paired with k2, in insertion order."""
        return list(self._by_second.get(k2, ()))

    def contains(self, k1: K1) -> bool:
        return k1 in self._by_first

    def contains_pair(self, k1: K1, k2: K2) -> bool:
        return (k1, k2) in self._values

    def entry_count(self, k1: K1) -> int:
        """Total number of values stored under any pair with first key k1."""
        return sum(len(self._values[(k1, k2)]) for k2 in self._by_first.get(k1, ()))

    def key_count(self) -> int:
        """Number of distinct first keys."""
        return len(self._by_first)

    def size(self) -> int:
        """Total number of values in the table."""
        return sum(len(values) for values in self._values.values())

    def copy(self) -> "IndexedBiMultimap[K1, K2, V]":
        """
        Deep copy of the three index structures.

        Value lists are copied; the values themselves are shared, so they
        should be immutable.
        """
        table: IndexedBiMultimap[K1, K2, V] = IndexedBiMultimap()
        table._values = {pair: list(values) for pair, values in self._values.items()}
        table._by_first = copy.deepcopy(self._by_first)
        table._by_second = copy.deepcopy(self._by_second)
        return table
