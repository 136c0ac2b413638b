import logging
import re
from pathlib import Path
from typing import Optional

from lark import Lark
from lark.exceptions import UnexpectedInput, VisitError

from lexindex.lex_transformer import FormulaTransformer
from lexindex.lex_types import Formula

logger = logging.getLogger(__name__)

GRAMMAR_PATH = Path(__file__).parent / "formula_grammar.lark"
with open(GRAMMAR_PATH, "r", encoding="utf-8") as f:
    FORMULA_GRAMMAR = f.read()

formula_parser = Lark(
    FORMULA_GRAMMAR, start=["chemical", "expression"], parser="lalr"
)

# Pre-compile regex patterns for performance
# An expression needs an operator that cannot be part of an ordinary name;
# hyphens and slashes only count when surrounded by whitespace ("heart-shaped").
RE_OPERATOR_HINT = re.compile(r"==|!=|<=|>=|->|=>|[=<>+*^&|~¬∧∨→↔≤≥≠×·]|\s[-/]\s")
RE_UPPERCASE_START = re.compile(r"^\s*[\[(]*[A-Z]")
RE_FORMULA_SEPARATORS = re.compile(r"[_\s]+")


def parse_formula(text: str) -> Optional[Formula]:
    """
    Parse text as a chemical formula or a symbolic expression.

    Args:
        text: Raw or normalized name

    Returns:
        The well-formed Formula, or None when the text is not a formula
    """
    if not text or not text.strip():
        return None

    candidates = []
    if RE_UPPERCASE_START.match(text):
        candidates.append("chemical")
    if RE_OPERATOR_HINT.search(text):
        candidates.append("expression")

    for start in candidates:
        try:
            tree = formula_parser.parse(text, start=start)
            formula = FormulaTransformer().transform(tree)
        except (UnexpectedInput, VisitError):
            continue
        if formula.well_formed:
            logger.debug("Parsed '%s' as %s formula '%s'", text, start, formula.text)
            return formula
    return None


def is_formula(text: str) -> bool:
    """Whether text is a chemical formula or a symbolic expression."""
    return parse_formula(text) is not None


def normalize_formula(text: str) -> str:
    """
    Normalize a formula, preserving its syntax and letter case.

    Formulas are rendered canonically. Any other text (names routed here by the
    language-specific add path) only has underscores turned into spaces and
    whitespace collapsed.
    """
    formula = parse_formula(text)
    if formula is not None:
        return formula.text
    return RE_FORMULA_SEPARATORS.sub(" ", text).strip()
