"""
Error handling for the infixcalc expression engine.

Every failure of a registration call or of an evaluation is reported as a
subclass of CalcError. Each error carries its kind, a short message, the
offending character offset (when there is one) and a Diagnostic with help
text and suggestions, formatted the same way for every stage.

Author: xwest
"""

from typing import Optional, List, Iterable
from dataclasses import dataclass
from enum import Enum


class ErrorKind(Enum):
    """Categories of calculator failures."""
    CONFIG = "config"
    LEX = "lex"
    SYNTAX = "syntax"
    EVAL = "eval"
    NUMERIC = "numeric"


@dataclass
class Diagnostic:
    """Structured description of a single error."""
    message: str
    offset: Optional[int]
    severity: str  # "error", "warning"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None
    
    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        result = f"{severity_prefix}: {self.message}"
        if self.code:
            result += f" [{self.code}]"
        result += "\n"
        
        if self.offset is not None:
            result += f"  --> offset {self.offset}\n"
        
        if self.help_text:
            result += f"  help: {self.help_text}\n"
        
        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"
        
        return result


class CalcError(Exception):
    """
    Base class of every error raised by the calculator.
    
    Errors are terminal: the same input always fails the same way, so callers
    should report them rather than retry.
    """
    
    kind: Optional[ErrorKind] = None
    
    def __init__(
        self,
        message: str,
        offset: Optional[int] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.offset = offset
        self.code = code
        self.diagnostic = Diagnostic(
            message=message,
            offset=offset,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )
    
    def __str__(self) -> str:
        return str(self.diagnostic)


class ConfigError(CalcError):
    """Invalid operator, bracket or configuration registration."""
    kind = ErrorKind.CONFIG


class LexError(CalcError):
    """Input text that cannot be split into known lexemes."""
    kind = ErrorKind.LEX


class ExpressionSyntaxError(CalcError):
    """Bracket structure errors and empty expressions."""
    kind = ErrorKind.SYNTAX


class EvalError(CalcError):
    """Operand stack underflow or leftover values during evaluation."""
    kind = ErrorKind.EVAL


class NumericError(CalcError):
    """A value that does not fit into a double."""
    kind = ErrorKind.NUMERIC


class ErrorRecovery:
    """
    Helpers for building friendlier error messages.
    """
    
    @staticmethod
    def suggest_symbol_corrections(invalid: str, known: Iterable[str]) -> List[str]:
        """Suggest registered symbols close to an unrecognised one."""
        if not invalid:
            return []
        
        # Only symbols sharing the first character are plausible typos
        candidates = [symbol for symbol in known if symbol[:1] == invalid[:1]]
        
        return sorted(
            candidates,
            key=lambda s: (ErrorRecovery._edit_distance(invalid[:len(s)], s), s)
        )[:3]
    
    @staticmethod
    def _edit_distance(s1: str, s2: str) -> int:
        """Calculate Levenshtein distance between two strings."""
        if len(s1) < len(s2):
            return ErrorRecovery._edit_distance(s2, s1)
        
        if len(s2) == 0:
            return len(s1)
        
        previous_row = list(range(len(s2) + 1))
        for i, c1 in enumerate(s1):
            current_row = [i + 1]
            for j, c2 in enumerate(s2):
                insertions = previous_row[j + 1] + 1
                deletions = current_row[j] + 1
                substitutions = previous_row[j] + (c1 != c2)
                current_row.append(min(insertions, deletions, substitutions))
            previous_row = current_row
        
        return previous_row[-1]


# Error codes for categorization
ERROR_CODES = {
    "C001": "Invalid operator symbol",
    "C002": "Invalid bracket pair",
    "C003": "Invalid operator definition",
    "C004": "Invalid configuration value",
    "L001": "Illegal expression",
    "L002": "Malformed number literal",
    "L003": "Operator not allowed in this position",
    "S001": "Empty expression",
    "S002": "Unmatched close bracket",
    "S003": "Mismatched bracket",
    "S004": "Unmatched open bracket",
    "E001": "Insufficient operands",
    "E002": "Malformed expression",
    "E003": "Operator function failed",
    "N001": "Number too big",
    "N002": "Numeric overflow",
}


# Helper functions for creating common errors
def create_invalid_symbol_error(symbol: str, reason: str) -> ConfigError:
    """Create an error for an operator symbol that cannot be registered."""
    return ConfigError(
        message=f"Error while adding operation {symbol!r}",
        code="C001",
        help_text=reason
    )


def create_invalid_bracket_error(open_symbol: str, close_symbol: str, reason: str) -> ConfigError:
    """Create an error for a bracket pair that cannot be registered."""
    return ConfigError(
        message=f"Error while adding brackets {open_symbol!r} {close_symbol!r}",
        code="C002",
        help_text=reason
    )


def create_illegal_expression_error(
    text: str, offset: int, known_symbols: Iterable[str] = ()
) -> LexError:
    """Create an error for characters that match no number or symbol."""
    fragment = text[offset:offset + 8]
    suggestions = ErrorRecovery.suggest_symbol_corrections(fragment, known_symbols)
    help_text = f"Cannot recognise {fragment!r}."
    if suggestions:
        help_text += f" Did you mean one of: {', '.join(suggestions)}?"
    
    return LexError(
        message="illegal expression",
        offset=offset,
        code="L001",
        help_text=help_text,
        suggestions=suggestions or None
    )


def create_malformed_number_error(lexeme: str, offset: int, separator: str) -> LexError:
    """Create an error for a number literal with a dangling or repeated separator."""
    return LexError(
        message="illegal expression",
        offset=offset,
        code="L002",
        help_text=f"Malformed number literal starting with {lexeme!r}; "
                  f"use digits with at most one {separator!r} between them."
    )


def create_misplaced_operator_error(symbol: str, offset: int, expected_unary: bool) -> LexError:
    """Create an error for an operator used in a position its role does not allow."""
    if expected_unary:
        help_text = f"{symbol!r} has no unary form and cannot start an operand."
    else:
        help_text = f"{symbol!r} is a prefix operator and cannot follow an operand."
    
    return LexError(
        message="illegal expression",
        offset=offset,
        code="L003",
        help_text=help_text
    )


def create_number_too_big_error(lexeme: str, offset: int) -> NumericError:
    """Create an error for a literal outside the range of a double."""
    return NumericError(
        message="number too big",
        offset=offset,
        code="N001",
        help_text=f"The literal {lexeme[:16]!r}{'...' if len(lexeme) > 16 else ''} "
                  f"does not fit into a double."
    )
