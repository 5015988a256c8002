"""
infixcalc Evaluator Package

Stack-based evaluation of postfix lexeme sequences.
"""

from .postfix import PostfixEvaluator

__all__ = [
    "PostfixEvaluator",
]
