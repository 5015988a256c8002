"""
Operator and bracket registry for the infixcalc engine.

Holds the binary operators, the unary (prefix) operators and the bracket
pairs known to one calculator, and validates every registration so that the
visible symbols stay pairwise distinct. The tokenizer relies on that to scan
with a single greedy longest-match pattern.

Binary and unary operators live in separate tables. A unary operator may reuse
the symbol of a binary one (unary "-" next to binary "-"); the tokenizer picks
the table from the lexical context.

Author: xwest
"""

import logging
import math
import re
import threading
from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional, Pattern, Union

from ..errors import ConfigError, create_invalid_bracket_error, create_invalid_symbol_error

logger = logging.getLogger(__name__)

DEFAULT_DECIMAL_SEPARATOR = "."


def number_pattern(decimal_separator: str = DEFAULT_DECIMAL_SEPARATOR) -> str:
    """Regex source of a number literal: digits, optionally a separator and more digits."""
    return r"\d+(?:" + re.escape(decimal_separator) + r"\d+)?"


def check_decimal_separator(separator) -> None:
    """Raise ConfigError unless separator is one non-digit, non-whitespace character."""
    if not isinstance(separator, str) or len(separator) != 1:
        raise ConfigError(
            f"Invalid decimal separator {separator!r}",
            code="C004",
            help_text="The decimal separator must be exactly one character."
        )
    if separator.isdigit() or separator.isspace():
        raise ConfigError(
            f"Invalid decimal separator {separator!r}",
            code="C004",
            help_text="The decimal separator cannot be a digit or whitespace."
        )


class SymbolRole(Enum):
    """Roles a registered symbol can play."""
    BINARY_OPERATOR = "binary_operator"
    UNARY_OPERATOR = "unary_operator"
    OPEN_BRACKET = "open_bracket"
    CLOSE_BRACKET = "close_bracket"


@dataclass(frozen=True)
class Operator:
    """A registered operator: its symbol, evaluation function and priority."""
    symbol: str
    function: Callable[..., float]
    priority: int
    role: SymbolRole
    
    @property
    def arity(self) -> int:
        return 2 if self.role == SymbolRole.BINARY_OPERATOR else 1
    
    def __str__(self) -> str:
        return f"{self.symbol} ({self.role.value}, priority {self.priority})"


@dataclass(frozen=True)
class BracketPair:
    """An open/close bracket pair."""
    open: str
    close: str
    
    # Brackets only act as a boundary marker on the operator stack
    priority: int = 0
    
    def __str__(self) -> str:
        return f"{self.open} ... {self.close}"


class SymbolSnapshot:
    """
    Immutable view of a SymbolTable at one point in time.
    
    One evaluation works against one snapshot, so registrations made by other
    threads in the meantime are never half-visible to it.
    """
    
    def __init__(
        self,
        binary: Dict[str, Operator],
        unary: Dict[str, Operator],
        brackets: Dict[str, BracketPair],
        decimal_separator: str,
        version: int
    ):
        self.binary: Mapping[str, Operator] = MappingProxyType(dict(binary))
        self.unary: Mapping[str, Operator] = MappingProxyType(dict(unary))
        self.brackets_by_open: Mapping[str, BracketPair] = MappingProxyType(dict(brackets))
        self.brackets_by_close: Mapping[str, BracketPair] = MappingProxyType(
            {pair.close: pair for pair in brackets.values()}
        )
        self.decimal_separator = decimal_separator
        self.number_pattern = number_pattern(decimal_separator)
        self.version = version
    
    def is_binary(self, symbol: str) -> bool:
        return symbol in self.binary
    
    def is_unary(self, symbol: str) -> bool:
        return symbol in self.unary
    
    def is_open_bracket(self, symbol: str) -> bool:
        return symbol in self.brackets_by_open
    
    def is_close_bracket(self, symbol: str) -> bool:
        return symbol in self.brackets_by_close
    
    def symbols(self) -> List[str]:
        """All visible symbols, each listed once."""
        seen: Dict[str, None] = {}
        for symbol in (*self.binary, *self.unary, *self.brackets_by_open, *self.brackets_by_close):
            seen.setdefault(symbol, None)
        return list(seen)
    
    @cached_property
    def pattern(self) -> Pattern[str]:
        """
        Matcher for one lexeme at the start of a string.
        
        The number grammar comes first, then every symbol ordered by
        descending length so that "**" wins over "*".
        """
        symbols = sorted(self.symbols(), key=len, reverse=True)
        alternatives = [self.number_pattern] + [re.escape(symbol) for symbol in symbols]
        return re.compile(r"\s*(" + "|".join(alternatives) + ")")


class SymbolTable:
    """
    Registry of operators and brackets for one calculator.
    
    Every effective change bumps ``version`` and drops the cached snapshot;
    the next read rebuilds it, including the tokenizer pattern.
    """
    
    def __init__(self, decimal_separator: str = DEFAULT_DECIMAL_SEPARATOR):
        check_decimal_separator(decimal_separator)
        self.decimal_separator = decimal_separator
        self._number_regex = re.compile(number_pattern(decimal_separator))
        self._binary: Dict[str, Operator] = {}
        self._unary: Dict[str, Operator] = {}
        self._brackets: Dict[str, BracketPair] = {}
        self._version = 0
        self._snapshot: Optional[SymbolSnapshot] = None
        self.lock = threading.RLock()
    
    # ========================================================================
    # Registration
    # ========================================================================
    
    def register_binary(self, symbol: str, function: Callable[[float, float], float], priority: int) -> None:
        """
        Register a binary operator.
        
        Re-registering an existing binary symbol is a no-op; the first
        registration wins.
        
        Raises:
            ConfigError: if the symbol, function or priority is invalid
        """
        with self.lock:
            self._validate_operator(symbol, function, priority)
            if symbol in self._binary:
                logger.debug("Binary operator %r already registered, keeping the first one", symbol)
                return
            
            binary = dict(self._binary)
            binary[symbol] = Operator(symbol, function, priority, SymbolRole.BINARY_OPERATOR)
            self._binary = binary
            self._touch()
            logger.debug("Registered binary operator %r with priority %d", symbol, priority)
    
    def register_unary(self, symbol: str, function: Callable[[float], float], priority: int) -> None:
        """
        Register a unary prefix operator.
        
        The symbol may already be used by a binary operator. Re-registering an
        existing unary symbol is a no-op.
        
        Raises:
            ConfigError: if the symbol, function or priority is invalid
        """
        with self.lock:
            self._validate_operator(symbol, function, priority)
            if symbol in self._unary:
                logger.debug("Unary operator %r already registered, keeping the first one", symbol)
                return
            
            unary = dict(self._unary)
            unary[symbol] = Operator(symbol, function, priority, SymbolRole.UNARY_OPERATOR)
            self._unary = unary
            self._touch()
            logger.debug("Registered unary operator %r with priority %d", symbol, priority)
    
    def register_bracket(self, open_symbol: str, close_symbol: str) -> None:
        """
        Register a bracket pair.
        
        Re-registering an identical pair is a no-op.
        
        Raises:
            ConfigError: if either symbol is invalid or overlaps a known symbol
        """
        with self.lock:
            existing = self._brackets.get(open_symbol) if isinstance(open_symbol, str) else None
            if existing is not None and existing.close == close_symbol:
                logger.debug("Brackets %r %r already registered", open_symbol, close_symbol)
                return
            
            self._validate_bracket(open_symbol, close_symbol)
            
            brackets = dict(self._brackets)
            brackets[open_symbol] = BracketPair(open_symbol, close_symbol)
            self._brackets = brackets
            self._touch()
            logger.debug("Registered brackets %r %r", open_symbol, close_symbol)
    
    # ========================================================================
    # Queries
    # ========================================================================
    
    @property
    def version(self) -> int:
        return self._version
    
    def snapshot(self) -> SymbolSnapshot:
        """Return the immutable view for the current version, building it if needed."""
        with self.lock:
            if self._snapshot is None:
                self._snapshot = SymbolSnapshot(
                    self._binary, self._unary, self._brackets, self.decimal_separator, self._version
                )
            return self._snapshot
    
    @property
    def pattern(self) -> Pattern[str]:
        return self.snapshot().pattern
    
    def binary(self, symbol: str) -> Optional[Operator]:
        return self._binary.get(symbol)
    
    def unary(self, symbol: str) -> Optional[Operator]:
        return self._unary.get(symbol)
    
    def bracket_for_open(self, symbol: str) -> Optional[BracketPair]:
        return self._brackets.get(symbol)
    
    def bracket_for_close(self, symbol: str) -> Optional[BracketPair]:
        return self.snapshot().brackets_by_close.get(symbol)
    
    def is_binary(self, symbol: str) -> bool:
        return symbol in self._binary
    
    def is_unary(self, symbol: str) -> bool:
        return symbol in self._unary
    
    def is_open_bracket(self, symbol: str) -> bool:
        return symbol in self._brackets
    
    def is_close_bracket(self, symbol: str) -> bool:
        return self.bracket_for_close(symbol) is not None
    
    def symbols(self) -> List[str]:
        return self.snapshot().symbols()
    
    def __len__(self) -> int:
        return len(self._binary) + len(self._unary) + len(self._brackets)
    
    def __contains__(self, symbol: object) -> bool:
        return isinstance(symbol, str) and symbol in self.snapshot().symbols()
    
    def __repr__(self) -> str:
        return (f"SymbolTable(binary={list(self._binary)}, unary={list(self._unary)}, "
                f"brackets={[(p.open, p.close) for p in self._brackets.values()]})")
    
    # ========================================================================
    # Validation
    # ========================================================================
    
    def _touch(self) -> None:
        self._version += 1
        self._snapshot = None
    
    def _check_symbol_format(self, symbol: object) -> Optional[str]:
        """Return the reason a symbol is malformed, or None if it is fine."""
        if not isinstance(symbol, str) or not symbol or symbol.isspace():
            return "Symbols must be non-empty strings."
        if re.search(r"\s", symbol):
            return "Symbols cannot contain whitespace."
        if self._number_regex.search(symbol):
            return "Symbols cannot contain a number."
        if self.decimal_separator in symbol:
            return f"Symbols cannot contain the decimal separator {self.decimal_separator!r}."
        return None
    
    def _validate_operator(self, symbol: str, function: Callable, priority: int) -> None:
        reason = self._check_symbol_format(symbol)
        if reason is None and (symbol in self._brackets or self.is_close_bracket(symbol)):
            reason = f"{symbol!r} is already used as a bracket."
        if reason is None and not callable(function):
            reason = "The operator function must be callable."
        if reason is None and (isinstance(priority, bool) or not isinstance(priority, int) or priority < 0):
            reason = "The priority must be a non-negative integer."
        
        if reason is not None:
            logger.debug("Rejected operator %r: %s", symbol, reason)
            raise create_invalid_symbol_error(str(symbol), reason)
    
    def _validate_bracket(self, open_symbol: str, close_symbol: str) -> None:
        reason = self._check_symbol_format(open_symbol) or self._check_symbol_format(close_symbol)
        if reason is None and open_symbol == close_symbol:
            reason = "Open and close brackets must differ."
        if reason is None:
            for symbol in (open_symbol, close_symbol):
                if symbol in self._binary or symbol in self._unary:
                    reason = f"{symbol!r} is already used as an operator."
                    break
                if symbol in self._brackets or self.is_close_bracket(symbol):
                    reason = f"Brackets overlap with existing bracket {symbol!r}."
                    break
        
        if reason is not None:
            logger.debug("Rejected brackets %r %r: %s", open_symbol, close_symbol, reason)
            raise create_invalid_bracket_error(str(open_symbol), str(close_symbol), reason)


def create_default_symbol_table(decimal_separator: str = DEFAULT_DECIMAL_SEPARATOR) -> SymbolTable:
    """Build a table with the standard arithmetic operators and round brackets."""
    table = SymbolTable(decimal_separator)
    
    table.register_binary("+", lambda x, y: x + y, 10)
    table.register_binary("-", lambda x, y: x - y, 10)
    table.register_binary("*", lambda x, y: x * y, 20)
    table.register_binary("/", divide, 20)
    
    table.register_unary("-", lambda x: -x, 30)
    
    table.register_bracket("(", ")")
    return table


def divide(x: float, y: float) -> float:
    """Division with IEEE-754 results for a zero divisor."""
    if y == 0:
        if x == 0 or math.isnan(x):
            return float("nan")
        # Sign follows the signs of both operands, including -0.0
        return math.copysign(math.inf, x) * math.copysign(1.0, y)
    return x / y


def as_snapshot(symbols: Union[SymbolTable, SymbolSnapshot]) -> SymbolSnapshot:
    """Return the current snapshot of a table, or a snapshot unchanged."""
    if isinstance(symbols, SymbolTable):
        return symbols.snapshot()
    return symbols
