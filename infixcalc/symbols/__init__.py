"""
infixcalc Symbols Package

Registry of the operators and bracket pairs a calculator understands.

Key Features:
- Separate binary and unary operator tables sharing visible symbols
- Registration-time validation of every symbol
- Immutable snapshots for lock-free evaluation
- Tokenizer pattern derived lazily from the current symbol set
"""

from .symbol_table import (
    SymbolTable, SymbolSnapshot, SymbolRole, Operator, BracketPair,
    create_default_symbol_table, divide, as_snapshot, number_pattern,
    DEFAULT_DECIMAL_SEPARATOR
)

__all__ = [
    "SymbolTable",
    "SymbolSnapshot",
    "SymbolRole",
    "Operator",
    "BracketPair",
    "create_default_symbol_table",
    "divide",
    "as_snapshot",
    "number_pattern",
    "DEFAULT_DECIMAL_SEPARATOR",
]
