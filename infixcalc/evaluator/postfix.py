"""
Postfix evaluation for infixcalc.

Walks a postfix lexeme sequence with a value stack, applying each operator
to the operands it pops.
"""

import logging
from typing import Iterable, List, Optional, Union

from ..config import CalculatorConfiguration
from ..errors import CalcError, EvalError, NumericError
from ..lexer.tokens import Lexeme, LexemeType
from ..symbols import Operator, SymbolSnapshot, SymbolTable, as_snapshot

logger = logging.getLogger(__name__)


class PostfixEvaluator:
    """Computes the value of a postfix lexeme sequence."""
    
    def __init__(
        self,
        symbols: Union[SymbolTable, SymbolSnapshot],
        config: Optional[CalculatorConfiguration] = None
    ):
        self.symbols = symbols
        self.config = config or CalculatorConfiguration()
    
    def evaluate(self, postfix: Iterable[Lexeme]) -> float:
        """
        Evaluate ``postfix`` and return the single remaining value.
        
        Raises:
            EvalError: if an operator lacks operands, the sequence leaves
                zero or several values, or an operator function fails
            NumericError: if an operator function overflows
        """
        snapshot = as_snapshot(self.symbols)
        stack: List[float] = []
        
        for lexeme in postfix:
            if lexeme.type == LexemeType.NUMBER:
                stack.append(lexeme.value)
            
            elif lexeme.type == LexemeType.BINARY_OPERATOR:
                if len(stack) < 2:
                    raise self._insufficient_operands(lexeme, 2, len(stack))
                
                # The operand pushed last is the right-hand side
                right = stack.pop()
                left = stack.pop()
                stack.append(self._apply(snapshot.binary[lexeme.text], lexeme, left, right))
            
            elif lexeme.type == LexemeType.UNARY_OPERATOR:
                if not stack:
                    raise self._insufficient_operands(lexeme, 1, 0)
                
                stack.append(self._apply(snapshot.unary[lexeme.text], lexeme, stack.pop()))
            
            else:
                raise EvalError(
                    "malformed expression",
                    offset=lexeme.offset,
                    code="E002",
                    help_text=f"Unexpected {lexeme.type.name.lower()} {lexeme.text!r} in postfix input."
                )
        
        if len(stack) != 1:
            raise EvalError(
                "malformed expression",
                code="E002",
                help_text=f"Evaluation left {len(stack)} values instead of exactly one; "
                          f"check for missing operators or operands."
            )
        
        return stack.pop()
    
    @staticmethod
    def _insufficient_operands(lexeme: Lexeme, needed: int, available: int) -> EvalError:
        return EvalError(
            "insufficient operands",
            offset=lexeme.offset,
            code="E001",
            help_text=f"{lexeme.text!r} needs {needed} operand(s) but only {available} available."
        )
    
    def _apply(self, operator: Operator, lexeme: Lexeme, *operands: float) -> float:
        try:
            result = float(operator.function(*operands))
        except CalcError:
            raise
        except OverflowError as e:
            raise NumericError(
                "numeric overflow",
                offset=lexeme.offset,
                code="N002",
                help_text=f"{operator.symbol!r} overflowed on {operands!r}: {e}"
            ) from e
        except Exception as e:
            raise EvalError(
                f"operator {operator.symbol!r} failed",
                offset=lexeme.offset,
                code="E003",
                help_text=f"{type(e).__name__}: {e}"
            ) from e
        
        if self.config.debug_mode:
            logger.debug("%s %r -> %r", operator.symbol, operands, result)
        
        return result
