"""
Test suite for the shared diagnostics sink.

Author: xwest
"""

import unittest
import sys
import os
import io

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from numlang.lexer.tokens import SourceLocation
from numlang.lexer.errors import DiagnosticSink, Diagnostic, Severity, Category


class TestDiagnosticSink(unittest.TestCase):
    """Test cases for recording and querying diagnostics."""

    def setUp(self):
        self.sink = DiagnosticSink()

    def _at(self, line: int, column: int) -> SourceLocation:
        return SourceLocation("<test>", line, column, 0)

    def test_empty_sink(self):
        self.assertFalse(self.sink.has_diagnostics())
        self.assertFalse(self.sink.has_errors())
        self.assertEqual(len(self.sink), 0)

    def test_record(self):
        diagnostic = self.sink.record("unexpected character: '@'", self._at(3, 7), Category.LEXICAL)
        self.assertIsInstance(diagnostic, Diagnostic)
        self.assertIs(self.sink[0], diagnostic)
        self.assertEqual((diagnostic.line, diagnostic.column), (3, 7))
        self.assertEqual(diagnostic.message, "unexpected character: '@'")
        self.assertEqual(diagnostic.severity, Severity.ERROR)
        self.assertTrue(self.sink.has_diagnostics())
        self.assertTrue(self.sink.has_errors())

    def test_insertion_order_is_kept(self):
        self.sink.record("second line", self._at(2, 1), Category.SEMANTIC)
        self.sink.record("first line", self._at(1, 1), Category.SYNTACTIC)
        self.assertEqual([d.message for d in self.sink], ["second line", "first line"])

    def test_warnings_are_not_errors(self):
        self.sink.record("redeclared", self._at(1, 1), Category.SEMANTIC,
                         severity=Severity.WARNING, code="S011")
        self.assertTrue(self.sink.has_diagnostics())
        self.assertFalse(self.sink.has_errors())
        self.assertEqual(len(self.sink.warnings), 1)
        self.assertEqual(self.sink.errors, [])

    def test_by_category(self):
        self.sink.record("a", self._at(1, 1), Category.LEXICAL)
        self.sink.record("b", self._at(1, 2), Category.SEMANTIC)
        self.sink.record("c", self._at(1, 3), Category.LEXICAL)
        lexical = self.sink.by_category(Category.LEXICAL)
        self.assertEqual([d.message for d in lexical], ["a", "c"])

    def test_iteration_is_a_snapshot(self):
        self.sink.record("a", self._at(1, 1), Category.LEXICAL)
        for _ in self.sink:
            self.sink.record("b", self._at(1, 2), Category.LEXICAL)
        self.assertEqual(len(self.sink), 2)

    def test_print_all(self):
        self.sink.record("variable 'y' used without declaration", self._at(4, 2),
                         Category.SEMANTIC, help_text="Declare it first.")
        stream = io.StringIO()
        self.sink.print_all(stream)
        self.assertEqual(stream.getvalue(),
                         "ERROR: variable 'y' used without declaration\n"
                         "  --> <test>:4:2\n"
                         "  help: Declare it first.\n")


if __name__ == '__main__':
    unittest.main()
