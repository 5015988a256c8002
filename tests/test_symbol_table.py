"""
Tests for the infixcalc symbol table.

Tests cover:
- Default operator and bracket registration
- Idempotent re-registration
- Validation of operator and bracket symbols
- Snapshots and the derived tokenizer pattern
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from infixcalc.errors import ConfigError, ErrorKind
from infixcalc.symbols import (
    SymbolTable, SymbolRole, BracketPair, create_default_symbol_table, divide
)


class TestDefaultSymbols(unittest.TestCase):
    """The table every Calculator starts with."""
    
    def setUp(self):
        self.table = create_default_symbol_table()
    
    def test_default_operators(self):
        """Binary + - * / and unary - are registered with their priorities."""
        self.assertEqual(self.table.binary("+").priority, 10)
        self.assertEqual(self.table.binary("-").priority, 10)
        self.assertEqual(self.table.binary("*").priority, 20)
        self.assertEqual(self.table.binary("/").priority, 20)
        self.assertEqual(self.table.unary("-").priority, 30)
        self.assertIsNone(self.table.unary("+"))
    
    def test_default_brackets(self):
        self.assertEqual(self.table.bracket_for_open("("), BracketPair("(", ")"))
        self.assertEqual(self.table.bracket_for_close(")"), BracketPair("(", ")"))
        self.assertTrue(self.table.is_open_bracket("("))
        self.assertTrue(self.table.is_close_bracket(")"))
        self.assertFalse(self.table.is_open_bracket(")"))
    
    def test_unary_and_binary_minus_are_separate(self):
        """The shared '-' symbol keeps one entry per role."""
        binary = self.table.binary("-")
        unary = self.table.unary("-")
        
        self.assertEqual(binary.role, SymbolRole.BINARY_OPERATOR)
        self.assertEqual(unary.role, SymbolRole.UNARY_OPERATOR)
        self.assertEqual(binary.arity, 2)
        self.assertEqual(unary.arity, 1)
        self.assertEqual(binary.function(5, 3), 2)
        self.assertEqual(unary.function(5), -5)
    
    def test_visible_symbols_listed_once(self):
        symbols = self.table.symbols()
        self.assertEqual(sorted(symbols), sorted(["+", "-", "*", "/", "(", ")"]))
        self.assertIn("-", self.table)
        self.assertNotIn("^", self.table)
    
    def test_size(self):
        # 4 binary + 1 unary + 1 bracket pair
        self.assertEqual(len(self.table), 6)


class TestRegistration(unittest.TestCase):
    """Registration rules and their failures."""
    
    def setUp(self):
        self.table = create_default_symbol_table()
    
    def test_register_binary(self):
        self.table.register_binary("**", pow, 30)
        self.assertTrue(self.table.is_binary("**"))
        self.assertEqual(self.table.binary("**").function(2, 3), 8)
    
    def test_binary_registration_is_idempotent(self):
        """The first registration of a binary symbol wins."""
        size = len(self.table)
        self.table.register_binary("+", lambda x, y: x * 100, 99)
        
        self.assertEqual(len(self.table), size)
        self.assertEqual(self.table.binary("+").priority, 10)
        self.assertEqual(self.table.binary("+").function(1, 2), 3)
    
    def test_unary_registration_is_idempotent(self):
        size = len(self.table)
        self.table.register_unary("-", lambda x: x, 5)
        
        self.assertEqual(len(self.table), size)
        self.assertEqual(self.table.unary("-").priority, 30)
    
    def test_bracket_registration_is_idempotent(self):
        size = len(self.table)
        version = self.table.version
        self.table.register_bracket("(", ")")
        
        self.assertEqual(len(self.table), size)
        self.assertEqual(self.table.version, version)
    
    def test_unary_may_share_binary_symbol(self):
        self.table.register_unary("+", lambda x: x, 30)
        self.assertTrue(self.table.is_unary("+"))
        self.assertTrue(self.table.is_binary("+"))
    
    def test_invalid_operator_symbols(self):
        """Empty, whitespace, number-shaped and bracket symbols are rejected."""
        invalid = ["", "   ", "+ +", "a\tb", "2", "x1", "1.5", "(", ")"]
        for symbol in invalid:
            with self.subTest(symbol=symbol):
                with self.assertRaises(ConfigError) as context:
                    self.table.register_binary(symbol, lambda x, y: x, 10)
                self.assertEqual(context.exception.kind, ErrorKind.CONFIG)
                
                with self.assertRaises(ConfigError):
                    self.table.register_unary(symbol, lambda x: x, 10)
    
    def test_symbols_containing_separator_rejected(self):
        table = SymbolTable(",")
        for symbol in [",", "a,b", ",,"]:
            with self.subTest(symbol=symbol):
                with self.assertRaises(ConfigError):
                    table.register_binary(symbol, lambda x, y: x, 10)
                with self.assertRaises(ConfigError):
                    table.register_unary(symbol, lambda x: x, 10)
        with self.assertRaises(ConfigError):
            table.register_bracket("(", ",)")
        self.assertEqual(len(table), 0)

        table.register_binary(".", lambda x, y: x, 10)
        self.assertTrue(table.is_binary("."))

    def test_default_table_rejects_clashing_separator(self):
        with self.assertRaises(ConfigError):
            create_default_symbol_table("-")
        self.assertEqual(create_default_symbol_table(",").decimal_separator, ",")

    def test_invalid_separator_rejected(self):
        for separator in ["", "..", "7", "\t", None]:
            with self.subTest(separator=separator):
                with self.assertRaises(ConfigError):
                    SymbolTable(separator)

    def test_snapshot_carries_separator(self):
        snapshot = SymbolTable(";").snapshot()
        self.assertEqual(snapshot.decimal_separator, ";")
        self.assertIsNotNone(snapshot.pattern.match("3;5"))

    def test_non_string_symbol_rejected(self):
        with self.assertRaises(ConfigError):
            self.table.register_binary(None, lambda x, y: x, 10)
    
    def test_invalid_function_or_priority(self):
        with self.assertRaises(ConfigError):
            self.table.register_binary("%", "not callable", 10)
        with self.assertRaises(ConfigError):
            self.table.register_binary("%", lambda x, y: x % y, -1)
        with self.assertRaises(ConfigError):
            self.table.register_binary("%", lambda x, y: x % y, 2.5)
        with self.assertRaises(ConfigError):
            self.table.register_unary("!", lambda x: x, True)
        self.assertFalse(self.table.is_binary("%"))
    
    def test_register_bracket(self):
        self.table.register_bracket("[", "]")
        self.table.register_bracket("@--", "--@")
        
        self.assertEqual(self.table.bracket_for_close("]").open, "[")
        self.assertEqual(self.table.bracket_for_open("@--").close, "--@")
    
    def test_bracket_overlaps_rejected(self):
        """A bracket may not reuse any bracket or operator symbol."""
        self.table.register_bracket("[", "]")
        
        invalid = [
            ("(", "%"),      # open already registered
            ("%", "]"),      # close already registered
            (")", "%"),      # open equals an existing close
            ("%", "["),      # close equals an existing open
            ("<", "+"),      # operator symbol
            ("-", ">"),      # operator symbol shared by unary and binary
            ("|", "|"),      # open equals close
            ("", "]]"),
            ("{ ", "}"),
            ("{", "1}"),
        ]
        for open_symbol, close_symbol in invalid:
            with self.subTest(pair=(open_symbol, close_symbol)):
                with self.assertRaises(ConfigError):
                    self.table.register_bracket(open_symbol, close_symbol)
    
    def test_unary_only_symbol_blocks_bracket(self):
        self.table.register_unary("~", lambda x: -x, 30)
        with self.assertRaises(ConfigError):
            self.table.register_bracket("~", "!")
    
    def test_operator_cannot_reuse_bracket(self):
        self.table.register_bracket("[", "]")
        with self.assertRaises(ConfigError):
            self.table.register_binary("]", lambda x, y: x, 10)
    
    def test_error_message(self):
        with self.assertRaises(ConfigError) as context:
            self.table.register_bracket("(", "%")
        self.assertIn("Error while adding brackets", context.exception.message)
        self.assertEqual(context.exception.code, "C002")
        self.assertIn("ERROR", str(context.exception))


class TestSnapshots(unittest.TestCase):
    """Snapshots and the derived pattern."""
    
    def test_snapshot_cached_until_change(self):
        table = create_default_symbol_table()
        first = table.snapshot()
        self.assertIs(table.snapshot(), first)
        
        table.register_binary("^", pow, 30)
        second = table.snapshot()
        self.assertIsNot(second, first)
        self.assertGreater(second.version, first.version)
    
    def test_snapshot_is_isolated_from_later_registrations(self):
        table = create_default_symbol_table()
        snapshot = table.snapshot()
        table.register_binary("^", pow, 30)
        
        self.assertFalse(snapshot.is_binary("^"))
        self.assertTrue(table.snapshot().is_binary("^"))
        with self.assertRaises(TypeError):
            snapshot.binary["%"] = None
    
    def test_pattern_prefers_longer_symbols(self):
        table = create_default_symbol_table()
        table.register_binary("**", pow, 30)
        
        match = table.pattern.match("**2")
        self.assertEqual(match.group(1), "**")
    
    def test_pattern_rebuilt_after_registration(self):
        table = create_default_symbol_table()
        self.assertIsNone(table.pattern.match("[1]"))
        
        table.register_bracket("[", "]")
        self.assertEqual(table.pattern.match("[1]").group(1), "[")
    
    def test_pattern_matches_numbers_first(self):
        table = SymbolTable(",")
        self.assertEqual(table.pattern.match("  2,75 +").group(1), "2,75")


class TestDivide(unittest.TestCase):
    """IEEE-754 division used by the default '/' operator."""
    
    def test_regular_division(self):
        self.assertEqual(divide(7.0, 2.0), 3.5)
    
    def test_division_by_zero(self):
        self.assertEqual(divide(1.0, 0.0), float("inf"))
        self.assertEqual(divide(-1.0, 0.0), float("-inf"))
        self.assertEqual(divide(1.0, -0.0), float("-inf"))
        self.assertNotEqual(divide(0.0, 0.0), divide(0.0, 0.0))  # nan


if __name__ == '__main__':
    unittest.main()
