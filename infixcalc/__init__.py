"""
infixcalc - extensible arithmetic expression engine

Evaluates infix expressions such as ``"(2 + 3) * -4"`` against a set of
operators and bracket pairs that the host program can extend at runtime.

Architecture:
    infixcalc/
    ├── symbols/         # Operator and bracket registry
    ├── lexer/           # Tokenization and unary/binary disambiguation
    ├── parser/          # Shunting-yard infix to postfix conversion
    ├── evaluator/       # Postfix evaluation
    ├── calculator.py    # Public facade
    ├── config.py        # CalculatorConfiguration
    └── errors.py        # CalcError taxonomy and diagnostics

Author: xwest
License: MIT
"""

import logging

from .version import __version__, __author__, __email__, __license__
from .config import CalculatorConfiguration
from .errors import (
    CalcError, ConfigError, LexError, ExpressionSyntaxError, EvalError,
    NumericError, ErrorKind, Diagnostic
)
from .symbols import SymbolTable, SymbolRole, Operator, BracketPair
from .lexer import Tokenizer, Lexeme, LexemeType
from .parser import ShuntingYardConverter
from .evaluator import PostfixEvaluator
from .calculator import Calculator, evaluate

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core classes
    "Calculator",
    "CalculatorConfiguration",
    "SymbolTable",
    "Tokenizer",
    "ShuntingYardConverter",
    "PostfixEvaluator",
    "evaluate",
    
    # Data model
    "SymbolRole",
    "Operator",
    "BracketPair",
    "Lexeme",
    "LexemeType",
    
    # Errors
    "CalcError",
    "ConfigError",
    "LexError",
    "ExpressionSyntaxError",
    "EvalError",
    "NumericError",
    "ErrorKind",
    "Diagnostic",
    
    # Version info
    "__version__",
    "__author__",
    "__email__",
    "__license__",
]
