"""
Test suite for the front end pipeline and the command line driver.

Author: xwest
"""

import unittest
import sys
import os
import io
import tempfile
from contextlib import redirect_stdout, redirect_stderr

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from numlang.frontend import FrontendOptions, analyze_source, analyze_file
from numlang.lexer.errors import Category
from numlang.parser.statements import StatementKind
from numlang.cli import SAMPLE_PROGRAM, main


class TestFrontend(unittest.TestCase):
    """Test cases for analyze_source / analyze_file."""

    def test_sample_program_is_clean(self):
        result = analyze_source(SAMPLE_PROGRAM)
        self.assertFalse(result.has_errors())
        self.assertFalse(result.has_warnings())
        self.assertEqual([s.kind for s in result.statements], [
            StatementKind.VARIABLE_DECL, StatementKind.VARIABLE_DECL,
            StatementKind.VARIABLE_DECL, StatementKind.READ, StatementKind.READ,
            StatementKind.IF, StatementKind.WRITE,
        ])
        self.assertEqual(len(result.scopes), 1)
        names = [d.name for d in result.symbol_table.declarations()]
        self.assertEqual(names, ["_x", "_y", "_avg"])

    def test_lexical_and_semantic_diagnostics_share_a_sink(self):
        result = analyze_source("long x = 1 @ 2;\nwrite(y);")
        categories = [d.category for d in result.diagnostics]
        self.assertEqual(categories, [Category.LEXICAL, Category.SEMANTIC])
        self.assertTrue(result.parsed)

    def test_stop_after_lexical_errors(self):
        options = FrontendOptions(stop_after_lexical_errors=True)
        result = analyze_source("long x = 1 @ 2;\nwrite(y);", options)
        self.assertFalse(result.parsed)
        self.assertEqual(result.statements, [])
        self.assertEqual(len(result.errors), 1)

    def test_compilations_are_independent(self):
        first = analyze_source("long x;")
        second = analyze_source("long x;")
        self.assertFalse(first.has_warnings())
        self.assertFalse(second.has_warnings())
        self.assertIsNot(first.symbol_table, second.symbol_table)

    def test_malformed_input_never_raises(self):
        cases = [
            "{" * 400 + "}" * 400,
            "long x = " + "9" * 5000 + ";",
            "while (1) {" * 300,
        ]
        for source in cases:
            with self.subTest(source=source[:20]):
                result = analyze_source(source)
                self.assertTrue(result.has_errors())
                self.assertEqual(len(result.scopes), 1)

    def test_warnings_as_errors_option(self):
        options = FrontendOptions(warnings_as_errors=True)
        result = analyze_source("long x; long x;", options)
        self.assertTrue(result.has_errors())

    def test_analyze_file_uses_path_in_locations(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "prog.nl")
            with open(path, "w", encoding="utf-8") as f:
                f.write("write(y);\n")
            options = FrontendOptions(filename="ignored")
            result = analyze_file(path, options)

        self.assertEqual(result.errors[0].location.filename, path)
        self.assertEqual(options.filename, "ignored")


class TestCommandLine(unittest.TestCase):
    """Test cases for the numlang command."""

    def _run(self, argv):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            status = main(argv)
        return status, out.getvalue(), err.getvalue()

    def _write_source(self, tmp, text):
        path = os.path.join(tmp, "prog.nl")
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
        return path

    def test_sample_program(self):
        status, out, err = self._run(["--symbols"])
        self.assertEqual(status, 0)
        self.assertIn("=== PROGRAM STRUCTURE ===", out)
        self.assertIn("=== SYMBOL TABLE ===", out)
        self.assertEqual(err, "")

    def test_tokens_listing(self):
        status, out, _ = self._run(["--tokens"])
        self.assertEqual(status, 0)
        self.assertIn("=== TOKENS ===", out)
        self.assertIn("IDENTIFIER('_avg')", out)

    def test_errors_give_nonzero_status(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = self._write_source(tmp, "write(y);\n")
            status, _, err = self._run([path])
        self.assertEqual(status, 1)
        self.assertIn("Found 1 error(s), 0 warning(s)", err)

    def test_warning_modes(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = self._write_source(tmp, "long x;\nlong x;\n")
            default_status, _, default_err = self._run([path])
            error_status, _, _ = self._run(["-W", "error", path])
            ignore_status, _, ignore_err = self._run(["-W", "ignore", path])

        self.assertEqual(default_status, 0)
        self.assertIn("0 error(s), 1 warning(s)", default_err)
        self.assertEqual(error_status, 1)
        self.assertEqual(ignore_status, 0)
        self.assertNotIn("Found", ignore_err)

    def test_missing_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            status, _, err = self._run([os.path.join(tmp, "absent.nl")])
        self.assertEqual(status, 2)
        self.assertIn("cannot read", err)


if __name__ == '__main__':
    unittest.main()
