"""
Configuration for a Calculator instance.
"""

from dataclasses import dataclass

from .symbols.symbol_table import DEFAULT_DECIMAL_SEPARATOR, check_decimal_separator


@dataclass
class CalculatorConfiguration:
    """Configuration parameters for the calculator"""

    # Number grammar, handed to the SymbolTable that owns it
    decimal_separator: str = DEFAULT_DECIMAL_SEPARATOR  # Single character between integer and fraction digits

    # Registry
    register_defaults: bool = True  # + - * / binary, unary -, ( ) brackets

    # Numeric policy
    allow_numeric_overflow: bool = False  # Oversized literals become inf instead of raising

    # Debugging
    debug_mode: bool = False  # Log every pipeline stage at DEBUG level

    def __post_init__(self):
        check_decimal_separator(self.decimal_separator)
