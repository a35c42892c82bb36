#!/usr/bin/env python3
"""
Main test runner for the numlang front end.

Author: xwest
"""

import sys
import os
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, project_root)


def run_pipeline_smoke_test():
    """Push the sample program and a broken one through the front end."""

    print("🚀 numlang Front End Test Suite")
    print("=" * 60)

    try:
        from numlang.lexer.lexer import Lexer
        from numlang.parser.parser import Parser
        from numlang.analyzer.symbol_table import SymbolTable
        from numlang.cli import SAMPLE_PROGRAM

        print("✅ All front end modules imported successfully")
        print()

    except ImportError as e:
        print(f"❌ Failed to import front end modules: {e}")
        return False

    print("Testing sample program...")
    try:
        print("  🔧 Lexing...")
        lexer = Lexer(SAMPLE_PROGRAM, "<sample>")
        tokens = lexer.tokenize()
        print(f"     Generated {len(tokens)} tokens")

        print("  🔧 Parsing...")
        symbol_table = SymbolTable()
        parser = Parser(tokens, diagnostics=lexer.diagnostics, symbol_table=symbol_table)
        statements = parser.parse()
        print(f"     Recognized {len(statements)} top-level statements")

        if parser.diagnostics.has_diagnostics():
            print(f"     ❌ Unexpected diagnostics: {len(parser.diagnostics)}")
            for diagnostic in parser.diagnostics:
                print(f"        {diagnostic.message}")
            return False
        print(f"     ✅ No diagnostics, {len(symbol_table.declarations())} variables declared")
        print()

    except Exception as e:
        print(f"❌ Sample program test FAILED: {e}")
        import traceback
        traceback.print_exc()
        return False

    print("  ❌ Testing error handling...")
    error_code = """
    long z;
    z = 2.5;          // narrowing
    write(y);         // undeclared
    long ;            // syntax error
    { double w;       // unclosed block
    """

    try:
        lexer = Lexer(error_code)
        parser = Parser(lexer.tokenize(), diagnostics=lexer.diagnostics)
        parser.parse()

        if len(parser.diagnostics.errors) != 4:
            print(f"     ❌ Error handling test failed: expected 4 errors, got {len(parser.diagnostics.errors)}")
            return False

        print(f"     ✅ Error handling successful: caught {len(parser.diagnostics.errors)} expected errors")

    except Exception as e:
        print(f"     ❌ Error handling test failed: {e}")
        return False

    print()
    return True


def run_unit_tests():
    """Discover and run everything under tests/."""
    print("Running unit tests...")
    print("-" * 40)
    suite = unittest.defaultTestLoader.discover(os.path.join(project_root, "tests"))
    result = unittest.TextTestRunner(verbosity=1).run(suite)
    print("-" * 40)
    return result.wasSuccessful()


if __name__ == "__main__":
    success = run_pipeline_smoke_test() and run_unit_tests()
    if success:
        print("🎉 All tests PASSED!")
    sys.exit(0 if success else 1)
