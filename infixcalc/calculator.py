"""
Public entry point of the infixcalc engine.

A Calculator owns a symbol table and runs each expression through the
pipeline tokenizer -> shunting-yard converter -> postfix evaluator.

Registration may happen at any time and from any thread. Each evaluation
works on an immutable snapshot of the symbol table taken when it starts, so
it either sees a registration completely or not at all.

Author: xwest
"""

import logging
from typing import Callable, List, Optional

from .config import CalculatorConfiguration
from .errors import CalcError
from .evaluator import PostfixEvaluator
from .lexer import Lexeme, Tokenizer, join_lexemes
from .parser import ShuntingYardConverter
from .symbols import SymbolSnapshot, SymbolTable, create_default_symbol_table

logger = logging.getLogger(__name__)


class Calculator:
    """
    Evaluates arithmetic expressions with caller-defined operators and brackets.
    
    Defaults (unless disabled in the configuration): binary ``+`` and ``-`` at
    priority 10, ``*`` and ``/`` at 20, unary ``-`` at 30 and the bracket
    pair ``(`` ``)``.
    
    Example:
        >>> calc = Calculator()
        >>> calc.register_binary_operator("**", pow, 30)
        >>> calc.evaluate("2**3")
        8.0
    """
    
    def __init__(self, config: Optional[CalculatorConfiguration] = None):
        self.config = config or CalculatorConfiguration()
        if self.config.register_defaults:
            self._symbols = create_default_symbol_table(self.config.decimal_separator)
        else:
            self._symbols = SymbolTable(self.config.decimal_separator)
    
    @property
    def symbols(self) -> SymbolTable:
        """The live symbol table of this calculator."""
        return self._symbols
    
    # ========================================================================
    # Registration
    # ========================================================================
    
    def register_binary_operator(
        self, symbol: str, function: Callable[[float, float], float], priority: int
    ) -> None:
        """
        Add a binary operation.
        
        Args:
            symbol: operator text, e.g. ``"**"``
            function: ``(left, right) -> value``
            priority: higher binds tighter
        
        Raises:
            ConfigError: if the symbol is invalid or collides with a bracket
        """
        self._symbols.register_binary(symbol, function, priority)
    
    def register_unary_operator(self, symbol: str, function: Callable[[float], float], priority: int) -> None:
        """
        Add a unary prefix operation. The symbol may be shared with a binary one.
        
        Raises:
            ConfigError: if the symbol is invalid or collides with a bracket
        """
        self._symbols.register_unary(symbol, function, priority)
    
    def register_bracket(self, open_symbol: str, close_symbol: str) -> None:
        """
        Add a bracket pair such as ``"["``/``"]"``.
        
        Raises:
            ConfigError: if either symbol is invalid or overlaps a known symbol
        """
        self._symbols.register_bracket(open_symbol, close_symbol)
    
    # ========================================================================
    # Evaluation
    # ========================================================================
    
    def evaluate(self, expression: str) -> float:
        """
        Compute the value of an infix expression.
        
        The whole expression is tokenized before conversion starts, so lexical
        errors are reported ahead of bracket or operand errors.
        
        Division by zero and float arithmetic that overflows are not errors:
        they give ``inf`` or ``nan`` as IEEE-754 prescribes.
        
        Raises:
            LexError: on unknown text or malformed numbers
            ExpressionSyntaxError: on empty input or unbalanced brackets
            EvalError: on missing operands or operators
            NumericError: on literals too big for a double, or an operator
                function raising OverflowError
        """
        snapshot = self._symbols.snapshot()
        try:
            lexemes = Tokenizer(snapshot, self.config).tokenize(expression)
            postfix = ShuntingYardConverter(snapshot, self.config).convert(lexemes)
            result = PostfixEvaluator(snapshot, self.config).evaluate(postfix)
        except CalcError as e:
            logger.debug("Evaluation of %r failed: %s (%s)", expression, e.message, e.code)
            raise
        
        if self.config.debug_mode:
            logger.debug("%r = %r", expression, result)
        return result
    
    def solve(self, expression: str) -> float:
        """Alias of :meth:`evaluate`."""
        return self.evaluate(expression)
    
    def tokenize(self, expression: str) -> List[Lexeme]:
        """Return the lexemes of ``expression`` without evaluating it."""
        return Tokenizer(self._symbols.snapshot(), self.config).tokenize(expression)
    
    def to_postfix(self, expression: str) -> str:
        """Return ``expression`` in postfix notation, lexemes separated by spaces."""
        snapshot: SymbolSnapshot = self._symbols.snapshot()
        lexemes = Tokenizer(snapshot, self.config).tokenize(expression)
        return join_lexemes(ShuntingYardConverter(snapshot, self.config).convert(lexemes))
    
    def __repr__(self) -> str:
        return f"Calculator({self._symbols!r})"


_default_calculator: Optional[Calculator] = None


def evaluate(expression: str) -> float:
    """Evaluate ``expression`` with a shared calculator holding only the defaults."""
    global _default_calculator
    if _default_calculator is None:
        _default_calculator = Calculator()
    return _default_calculator.evaluate(expression)
