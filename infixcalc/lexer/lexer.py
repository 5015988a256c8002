"""
infixcalc tokenizer - splits an expression into lexemes

The grammar is not fixed: it is whatever the symbol table holds at the
moment scanning starts. Each step matches either a number literal or the
longest registered symbol at the current position, after skipping
whitespace.

Whether a symbol is a binary or a unary operator is decided here from the
previous lexeme. After a number or a close bracket an operator is infix;
anywhere else (start of input, after an open bracket, after another
operator) it must be a prefix operator.
"""

import logging
import math
from typing import Iterator, List, Optional, Union

from .tokens import Lexeme, LexemeType
from ..config import CalculatorConfiguration
from ..errors import (
    create_illegal_expression_error, create_malformed_number_error,
    create_misplaced_operator_error, create_number_too_big_error
)
from ..symbols import SymbolSnapshot, SymbolTable, as_snapshot

logger = logging.getLogger(__name__)


class Tokenizer:
    """
    Lexical analyzer for arithmetic expressions.
    
    A Tokenizer is cheap to create and holds no per-expression state, so one
    instance can scan any number of expressions, also from several threads.
    """
    
    def __init__(
        self,
        symbols: Union[SymbolTable, SymbolSnapshot],
        config: Optional[CalculatorConfiguration] = None
    ):
        """
        Args:
            symbols: symbol table (read at every scan) or a fixed snapshot;
                it also fixes the decimal separator of number literals
            config: calculator configuration; defaults are used when omitted
        """
        self.symbols = symbols
        self.config = config or CalculatorConfiguration()
    
    def scan(self, expression: str) -> Iterator[Lexeme]:
        """
        Lazily produce the lexemes of ``expression``.
        
        Every call starts a fresh scan from the beginning of the string.
        
        Raises:
            LexError: on text that is not a number or a registered symbol, on
                a malformed number, or on an operator in a position its role
                does not allow
            NumericError: on a literal too big for a double
        """
        snapshot = as_snapshot(self.symbols)
        pattern = snapshot.pattern
        separator = snapshot.decimal_separator
        
        position = 0
        length = len(expression)
        previous: Optional[Lexeme] = None
        
        while position < length:
            # Skip whitespace; trailing whitespace ends the scan
            while position < length and expression[position].isspace():
                position += 1
            if position >= length:
                break
            
            match = pattern.match(expression, position)
            if match is None:
                raise create_illegal_expression_error(expression, position, snapshot.symbols())
            
            text = match.group(1)
            start = match.start(1)
            position = match.end()
            
            if text[0].isdecimal():
                lexeme = self._number(text, start, expression, position, separator)
            elif snapshot.is_open_bracket(text):
                lexeme = Lexeme(LexemeType.OPEN_BRACKET, text, None, start)
            elif snapshot.is_close_bracket(text):
                lexeme = Lexeme(LexemeType.CLOSE_BRACKET, text, None, start)
            else:
                lexeme = self._operator(text, start, previous, snapshot)
            
            if self.config.debug_mode:
                logger.debug("Lexeme %s at offset %d", lexeme, start)
            
            yield lexeme
            previous = lexeme
    
    def tokenize(self, expression: str) -> List[Lexeme]:
        """Scan the whole expression and return its lexemes as a list."""
        return list(self.scan(expression))
    
    def _number(self, text: str, start: int, expression: str, end: int, separator: str) -> Lexeme:
        # A separator right after a complete literal means "2.4.7" or "2."
        if expression.startswith(separator, end):
            raise create_malformed_number_error(expression[start:end + 1], start, separator)
        
        value = float(text.replace(separator, "."))
        if math.isinf(value) and not self.config.allow_numeric_overflow:
            raise create_number_too_big_error(text, start)
        
        return Lexeme(LexemeType.NUMBER, text, value, start)
    
    @staticmethod
    def _operator(text: str, start: int, previous: Optional[Lexeme], snapshot: SymbolSnapshot) -> Lexeme:
        expects_operand = previous is None or not previous.ends_operand
        
        if expects_operand:
            if not snapshot.is_unary(text):
                raise create_misplaced_operator_error(text, start, expected_unary=True)
            return Lexeme(LexemeType.UNARY_OPERATOR, text, None, start)
        
        if not snapshot.is_binary(text):
            raise create_misplaced_operator_error(text, start, expected_unary=False)
        return Lexeme(LexemeType.BINARY_OPERATOR, text, None, start)
