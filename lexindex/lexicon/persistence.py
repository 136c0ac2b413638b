"""
Lexicon file format.

One entry per line, three tab-separated fields:

    <identifier>\t<name>\t<lexical type label>

The format keeps only the best lexical type of each (class, name) pair, so
weights and sources are lost on a round trip.
"""

import logging
from typing import Iterable, Iterator, Tuple

from ..lex_types import LexicalType, parse_lexical_type
from .core import LexiconFormatError

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = "\t"
FIELD_COUNT = 3


def write_entries(path: str, entries: Iterable[Tuple[int, str, LexicalType]]) -> int:
    """
    Write (class_id, name, type) triples to a lexicon file.

    Returns:
        Number of lines written
    """
    count = 0
    with open(path, "w", encoding="utf-8", newline="\n") as out:
        for class_id, name, lex_type in entries:
            out.write(f"{class_id}{FIELD_SEPARATOR}{name}{FIELD_SEPARATOR}{lex_type}\n")
            count += 1
    logger.info("Saved %s lexicon entries to %s", count, path)
    return count


def parse_line(path: str, line_number: int, line: str) -> Tuple[int, str, LexicalType]:
    """
    Parse one lexicon line.

    Raises:
        LexiconFormatError: on a wrong field count, a non-integer identifier,
            an empty name or an unknown lexical type
    """
    fields = line.rstrip("\r\n").split(FIELD_SEPARATOR)
    if len(fields) != FIELD_COUNT:
        raise LexiconFormatError(
            path, line_number, f"expected {FIELD_COUNT} fields, found {len(fields)}"
        )
    raw_id, name, raw_type = fields
    if not name:
        raise LexiconFormatError(path, line_number, "empty name")
    try:
        class_id = int(raw_id)
    except ValueError as e:
        raise LexiconFormatError(
            path, line_number, f"invalid identifier {raw_id!r}"
        ) from e
    try:
        lex_type = parse_lexical_type(raw_type)
    except ValueError as e:
        raise LexiconFormatError(path, line_number, str(e)) from e
    return class_id, name, lex_type


def read_entries(path: str) -> Iterator[Tuple[int, str, LexicalType]]:
    """Yield (class_id, name, type) triples from a lexicon file."""
    with open(path, "r", encoding="utf-8") as f:
        for line_number, line in enumerate(f, start=1):
            yield parse_line(path, line_number, line)
