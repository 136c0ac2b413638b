"""
Raw entry processing and validation for the lexicon.

Handles loading and validation of upstream lexical tuples extracted from
knowledge bases. Extraction output is messy, so invalid tuples are logged and
skipped rather than failing the whole batch.
"""

import logging
from typing import Dict, List

from ..lex_types import LexicalType, parse_lexical_type
from .core import ENGLISH, LexicalEntry

logger = logging.getLogger(__name__)

ENTRY_FIELDS = ("id", "name", "type", "source", "weight", "language")


class RawEntryProcessor:
    """
    Handles loading and validation of raw lexical entry dictionaries.
    """

    REQUIRED_FIELDS = {"id", "name", "type", "source", "weight"}

    @staticmethod
    def validate_raw_entry(entry_dict: Dict) -> bool:
        """
        Validate that a raw entry dictionary has all required fields.

        Args:
            entry_dict: Dictionary to validate

        Returns:
            True if valid, False otherwise
        """
        if not isinstance(entry_dict, dict):
            return False

        # Check required fields
        missing_fields = RawEntryProcessor.REQUIRED_FIELDS - set(entry_dict.keys())
        if missing_fields:
            logger.warning("Entry missing required fields: %s", missing_fields)
            return False

        # Validate field types
        try:
            class_id = entry_dict["id"]
            name = entry_dict["name"]
            lex_type = entry_dict["type"]
            source = entry_dict["source"]
            weight = entry_dict["weight"]
            language = entry_dict.get("language", ENGLISH)

            if not isinstance(class_id, int) or isinstance(class_id, bool):
                logger.warning("Invalid id: %s", class_id)
                return False

            if not isinstance(name, str):
                logger.warning("Invalid name type: %s", type(name))
                return False

            if not isinstance(lex_type, LexicalType):
                parse_lexical_type(lex_type)

            if not isinstance(source, str):
                logger.warning("Invalid source: %s", source)
                return False

            if not isinstance(weight, (int, float)) or not 0.0 <= weight <= 1.0:
                logger.warning("Invalid weight: %s", weight)
                return False

            if not isinstance(language, str) or not language:
                logger.warning("Invalid language: %s", language)
                return False

        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning("Error validating entry: %s", e)
            return False

        return True

    @staticmethod
    def load_and_validate_entries(entries: List[Dict]) -> List[Dict]:
        """
        Load and validate a list of raw entry dictionaries.

        Args:
            entries: List of raw entry dictionaries

        Returns:
            List of validated entries (invalid ones are filtered out)
        """
        validated_entries = []

        for i, entry_dict in enumerate(entries):
            if RawEntryProcessor.validate_raw_entry(entry_dict):
                validated_entries.append(entry_dict)
            else:
                logger.warning("Skipping invalid entry at index %s: %s", i, entry_dict)

        logger.info(
            "Validated %s out of %s raw entries", len(validated_entries), len(entries)
        )
        return validated_entries

    @staticmethod
    def convert_to_entries(entries: List[Dict]) -> List[LexicalEntry]:
        """
        Convert validated raw entry dictionaries to LexicalEntry objects.

        Args:
            entries: List of validated raw entry dictionaries

        Returns:
            List of LexicalEntry objects
        """
        lexical_entries = []

        for entry_dict in entries:
            lex_type = entry_dict["type"]
            if not isinstance(lex_type, LexicalType):
                lex_type = parse_lexical_type(lex_type)
            lexical_entries.append(
                LexicalEntry(
                    class_id=entry_dict["id"],
                    name=entry_dict["name"],
                    lex_type=lex_type,
                    source=entry_dict["source"],
                    weight=float(entry_dict["weight"]),
                    language=entry_dict.get("language", ENGLISH),
                )
            )

        return lexical_entries

    @staticmethod
    def read_entries_file(file_path: str) -> List[Dict]:
        """
        Read raw entries from a tab-separated file.

        Each line holds id, name, type, source, weight and an optional language.
        Numeric fields are converted where possible; anything else is left for
        validation to reject.

        Args:
            file_path: Path to the entries file

        Returns:
            List of raw entry dictionaries
        """
        entries = []
        with open(file_path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.rstrip("\r\n")
                if not line or line.startswith("#"):
                    continue
                fields = line.split("\t")
                entry_dict: Dict = dict(zip(ENTRY_FIELDS, fields))
                try:
                    entry_dict["id"] = int(entry_dict["id"])
                except (KeyError, ValueError):
                    pass
                try:
                    entry_dict["weight"] = float(entry_dict["weight"])
                except (KeyError, ValueError):
                    pass
                entries.append(entry_dict)

        logger.info("Read %s raw entries from %s", len(entries), file_path)
        return entries
