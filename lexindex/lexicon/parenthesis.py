"""
Parenthetical synonym generation for the lexicon.

Derives internal synonyms from names that contain parenthesized sections,
either by dropping the parentheses or by dropping the sections they enclose.
"""

import logging
import math
import re
from typing import List, Optional, Tuple

from ..lex_types import LexicalType

logger = logging.getLogger(__name__)

RE_SINGLE_GROUP = re.compile(r"\([^()]+\)")
RE_PARENTHESIZED = re.compile(r"\([^)]*\)")
RE_PARENTHESES = re.compile(r"[()]")


class ParenthesisSynonymGenerator:
    """
    Generates synonyms by removing within-parenthesis sections of names.

    Three cases are handled for each name with parentheses:
    1. The whole name is one parenthesized group, or alternatives joined by
       ") or (": the parentheses are removed and the weight is kept.
    2. The name has adjacent groups ")(": it is skipped.
    3. Otherwise every parenthesized section is removed and the weight is
       scaled by the square root of the fraction of text that remains.
    """

    # pylint: disable=too-few-public-methods

    @staticmethod
    def derive(name: str) -> Optional[Tuple[str, float]]:
        """
        Derive the synonym and weight multiplier for a single name.

        Args:
            name: A name (index key) from the lexicon

        Returns:
            (synonym, multiplier), or None if the name yields no synonym
        """
        if "(" not in name or ")" not in name:
            return None
        if RE_SINGLE_GROUP.fullmatch(name) or ") or (" in name:
            synonym = RE_PARENTHESES.sub("", name)
            multiplier = 1.0
        elif ")(" in name:
            return None
        else:
            synonym = RE_PARENTHESIZED.sub("", name).strip()
            multiplier = math.sqrt(len(synonym) / len(name))
        if not synonym.strip():
            return None
        return synonym, multiplier

    def generate(self, lexicon) -> int:
        """
        Add parenthetical synonyms for every internal class of every name.

        The set of names is snapshot before the pass, so synonyms added here
        are not expanded again in the same pass. Names are stemmed keys, so
        the synonyms cut from them are not stemmed again.

        Args:
            lexicon: Lexicon to read names from and add synonyms to

        Returns:
            Number of lexical entries added
        """
        names: List[str] = lexicon.get_names_in_order()
        added = 0
        for name in names:
            if lexicon.is_formula(name):
                continue
            derived = self.derive(name)
            if derived is None:
                continue
            synonym, multiplier = derived
            for class_id in sorted(lexicon.get_internal_classes(name)):
                for provenance in lexicon.get(name, class_id):
                    if lexicon.add(
                        class_id,
                        synonym,
                        LexicalType.INTERNAL_SYNONYM,
                        provenance.source,
                        multiplier * provenance.weight,
                        language=provenance.language,
                        stem=False,
                    ):
                        added += 1
            logger.debug("Parenthesis synonym: '%s' -> '%s'", name, synonym)

        logger.info(
            "Parenthesis synonyms: %s entries added from %s names", added, len(names)
        )
        return added
