"""
Infix to postfix conversion for infixcalc.

Implements the shunting-yard algorithm over the lexemes produced by the
tokenizer. Priorities come from the symbol table; operators of equal
priority associate left to right, so "8-3-2" becomes "8 3 - 2 -".

Author: xwest
"""

import logging
from typing import Iterable, List, Optional, Union

from ..config import CalculatorConfiguration
from ..errors import ExpressionSyntaxError
from ..lexer.tokens import Lexeme, LexemeType
from ..symbols import SymbolSnapshot, SymbolTable, as_snapshot

logger = logging.getLogger(__name__)


class ShuntingYardConverter:
    """
    Converts a lexeme sequence from infix to postfix order.
    
    The operator stack holds operators and open brackets. An open bracket is
    a boundary: operators below it are only released by its close bracket.
    """
    
    def __init__(
        self,
        symbols: Union[SymbolTable, SymbolSnapshot],
        config: Optional[CalculatorConfiguration] = None
    ):
        self.symbols = symbols
        self.config = config or CalculatorConfiguration()
    
    def convert(self, lexemes: Iterable[Lexeme]) -> List[Lexeme]:
        """
        Reorder ``lexemes`` into postfix notation.
        
        Raises:
            ExpressionSyntaxError: on an empty expression or unbalanced brackets
        """
        snapshot = as_snapshot(self.symbols)
        output: List[Lexeme] = []
        stack: List[Lexeme] = []
        seen_any = False
        
        for lexeme in lexemes:
            seen_any = True
            
            if lexeme.type == LexemeType.NUMBER:
                output.append(lexeme)
            
            elif lexeme.type in (LexemeType.OPEN_BRACKET, LexemeType.UNARY_OPERATOR):
                # A prefix operator has no left operand to complete
                stack.append(lexeme)
            
            elif lexeme.type == LexemeType.BINARY_OPERATOR:
                priority = self._priority(lexeme, snapshot)
                while stack and stack[-1].is_operator:
                    if self._priority(stack[-1], snapshot) < priority:
                        break
                    output.append(stack.pop())
                stack.append(lexeme)
            
            elif lexeme.type == LexemeType.CLOSE_BRACKET:
                self._close_bracket(lexeme, snapshot, stack, output)
        
        if not seen_any:
            raise ExpressionSyntaxError(
                "empty expression",
                code="S001",
                help_text="The expression contains nothing but whitespace."
            )
        
        while stack:
            top = stack.pop()
            if top.type == LexemeType.OPEN_BRACKET:
                raise ExpressionSyntaxError(
                    "unmatched open bracket",
                    offset=top.offset,
                    code="S004",
                    help_text=f"{top.text!r} is never closed; expected "
                              f"{snapshot.brackets_by_open[top.text].close!r}."
                )
            output.append(top)
        
        if self.config.debug_mode:
            logger.debug("Postfix: %s", " ".join(item.text for item in output))
        
        return output
    
    @staticmethod
    def _close_bracket(
        lexeme: Lexeme,
        snapshot: SymbolSnapshot,
        stack: List[Lexeme],
        output: List[Lexeme]
    ) -> None:
        """Release operators down to the open bracket paired with ``lexeme``."""
        pair = snapshot.brackets_by_close[lexeme.text]
        
        while stack:
            top = stack.pop()
            if top.type != LexemeType.OPEN_BRACKET:
                output.append(top)
                continue
            
            if top.text == pair.open:
                return
            
            raise ExpressionSyntaxError(
                "mismatched bracket",
                offset=lexeme.offset,
                code="S003",
                help_text=f"{lexeme.text!r} closes {pair.open!r}, but the innermost "
                          f"open bracket is {top.text!r}."
            )
        
        raise ExpressionSyntaxError(
            "unmatched bracket",
            offset=lexeme.offset,
            code="S002",
            help_text=f"{lexeme.text!r} has no matching {pair.open!r}."
        )
    
    @staticmethod
    def _priority(lexeme: Lexeme, snapshot: SymbolSnapshot) -> int:
        if lexeme.type == LexemeType.BINARY_OPERATOR:
            return snapshot.binary[lexeme.text].priority
        return snapshot.unary[lexeme.text].priority
