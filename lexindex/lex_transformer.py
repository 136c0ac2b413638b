"""
Formula Transformer: Lark tree transformer for lexical formulas.

This module provides the FormulaTransformer class that converts Lark parse trees
of the formula grammar into canonical formula text. Chemical formulas are
rendered without whitespace and checked against the periodic table; symbolic
expressions are rendered with single spaces around binary operators.
"""

import re

from lark import Token, Transformer, v_args

from lexindex.lex_types import Formula

ELEMENT_SYMBOLS = frozenset(
    """
    H He Li Be B C N O F Ne Na Mg Al Si P S Cl Ar K Ca Sc Ti V Cr Mn Fe Co Ni
    Cu Zn Ga Ge As Se Br Kr Rb Sr Y Zr Nb Mo Tc Ru Rh Pd Ag Cd In Sn Sb Te I Xe
    Cs Ba La Ce Pr Nd Pm Sm Eu Gd Tb Dy Ho Er Tm Yb Lu Hf Ta W Re Os Ir Pt Au Hg
    Tl Pb Bi Po At Rn Fr Ra Ac Th Pa U Np Pu Am Cm Bk Cf Es Fm Md No Lr Rf Db Sg
    Bh Hs Mt Ds Rg Cn Nh Fl Mc Lv Ts Og
    """.split()
)

# Ordinary words joined by operators ("Salt & Pepper") are names, not expressions
RE_WORD_OPERAND = re.compile(r"[A-Za-z]{3,}")


@v_args(inline=True)  # This simplifies most method signatures
class FormulaTransformer(Transformer):  # pylint: disable=too-many-public-methods
    """
    Transformer that renders formula parse trees as canonical text.

    A fresh instance must be used for each tree: it records whether the
    chemical symbols are valid, whether the formula is quantified, how many
    operators an expression uses and whether any operand is a plain word.
    """

    def __init__(self):
        super().__init__()
        self._valid_symbols = True
        self._quantified = False
        self._operators = 0
        self._word_operands = False

    # === Chemical formulas ===

    def chemical(self, *parts):
        """Transform a complete chemical formula."""
        return Formula(
            kind="chemical",
            text="".join(parts),
            well_formed=self._valid_symbols and self._quantified,
        )

    def element(self, symbol, count=None):
        """Transform an element symbol with its optional atom count."""
        if str(symbol) not in ELEMENT_SYMBOLS:
            self._valid_symbols = False
        if count is not None:
            self._quantified = True
            return f"{symbol}{count}"
        return str(symbol)

    def paren_group(self, *items):
        """Transform a parenthesized group of chemical parts."""
        return self._group("(", ")", items)

    def bracket_group(self, *items):
        """Transform a bracketed group of chemical parts."""
        return self._group("[", "]", items)

    def charge(self, token):
        """Transform an ionic charge suffix."""
        self._quantified = True
        return str(token)

    def _group(self, opening, closing, items):
        self._quantified = True
        count = ""
        if items and isinstance(items[-1], Token) and items[-1].type == "COUNT":
            count = str(items[-1])
            items = items[:-1]
        return f"{opening}{''.join(items)}{closing}{count}"

    # === Symbolic expressions ===

    def expression(self, body):
        """Transform a complete symbolic expression."""
        return Formula(
            kind="expression",
            text=str(body),
            well_formed=self._operators > 0 and not self._word_operands,
        )

    def implication(self, *items):
        return self._operation(items)

    def disjunction(self, *items):
        return self._operation(items)

    def conjunction(self, *items):
        return self._operation(items)

    def relation(self, *items):
        return self._operation(items)

    def sum(self, *items):
        return self._operation(items)

    def product(self, *items):
        return self._operation(items)

    def power(self, *items):
        return self._operation(items)

    def negation(self, operator, operand):
        """Transform a prefix operator (logical not, unary sign)."""
        self._operators += 1
        return f"{operator}{operand}"

    def number(self, token):
        return str(token)

    def symbol(self, token):
        if RE_WORD_OPERAND.fullmatch(str(token)):
            self._word_operands = True
        return str(token)

    def call(self, name, arguments):
        """Transform a function application such as f(x, y)."""
        return f"{name}({arguments})"

    def arguments(self, *expressions):
        return ", ".join(str(e) for e in expressions)

    def group(self, inner):
        return f"({inner})"

    def _operation(self, items):
        # Operands and operator tokens alternate
        self._operators += len(items) // 2
        return " ".join(str(item) for item in items)
