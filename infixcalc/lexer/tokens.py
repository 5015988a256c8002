"""
Lexeme definitions for the infixcalc tokenizer.

Author: xwest
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Iterable, Optional


class LexemeType(Enum):
    """Classes of lexemes produced by the tokenizer."""
    NUMBER = auto()                 # 42, 2.75
    OPEN_BRACKET = auto()           # (, [, any registered open symbol
    CLOSE_BRACKET = auto()          # ), ], any registered close symbol
    BINARY_OPERATOR = auto()        # infix: 2 + 3
    UNARY_OPERATOR = auto()         # prefix: -3


@dataclass(frozen=True)
class Lexeme:
    """
    A classified piece of the expression.
    
    ``text`` is the raw text as written, ``value`` the parsed float for
    numbers (None otherwise) and ``offset`` the position of the first
    character in the expression.
    """
    type: LexemeType
    text: str
    value: Optional[float]
    offset: int
    
    def __str__(self) -> str:
        if self.value is not None:
            return f"{self.type.name}({self.text!r} -> {self.value!r})"
        return f"{self.type.name}({self.text!r})"
    
    @property
    def is_operator(self) -> bool:
        return self.type in {LexemeType.BINARY_OPERATOR, LexemeType.UNARY_OPERATOR}
    
    @property
    def ends_operand(self) -> bool:
        """True if an infix operator may follow this lexeme."""
        return self.type in {LexemeType.NUMBER, LexemeType.CLOSE_BRACKET}


def join_lexemes(lexemes: Iterable[Lexeme]) -> str:
    """Join lexeme texts with single spaces."""
    return " ".join(lexeme.text for lexeme in lexemes)
