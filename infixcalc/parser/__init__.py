"""
infixcalc Parser Package

Shunting-yard conversion of infix lexemes into postfix order, with bracket
matching by registered pair.
"""

from .shunting_yard import ShuntingYardConverter

__all__ = [
    "ShuntingYardConverter",
]
