"""
infixcalc Lexer Package

Turns an expression string into classified lexemes using the symbols
currently registered with a calculator.

Key Features:
- Greedy longest-match over a grammar rebuilt from the symbol table
- Configurable decimal separator
- Unary/binary disambiguation from context
- Error offsets and symbol suggestions for diagnostics
"""

from .tokens import Lexeme, LexemeType, join_lexemes
from .lexer import Tokenizer

__all__ = [
    "Tokenizer",
    "Lexeme",
    "LexemeType",
    "join_lexemes",
]
