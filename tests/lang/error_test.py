import io
import unittest

from gama.lang.error import (CapacityError, ErrorHandler, GamaRuntimeError, GamaSyntaxError, GenericException,
                             InputError, LexicalError, UndeclaredVariable, UninitializedVariable, ZeroDivision)
from gama.lang.lexical import Token, TokenKind, tokenize


class GenericExceptionTestCase(unittest.TestCase):

    def test_taxonomy(self):
        cases = {
            LexicalError: "lexical error",
            GamaSyntaxError: "syntax error",
            CapacityError: "capacity error",
            GamaRuntimeError: "runtime error",
            UndeclaredVariable: "runtime error",
            UninitializedVariable: "runtime error",
            ZeroDivision: "runtime error",
            InputError: "runtime error",
        }
        for case, category in cases.items():
            self.assertTrue(issubclass(case, GenericException), case)
            self.assertEqual(category, case.category, case)

    def test_plain_message(self):
        error = GenericException("'{}' could not be opened", "prog.txt")
        self.assertEqual("'prog.txt' could not be opened", error.plain)
        self.assertEqual(error.plain, str(error))
        self.assertIsNone(error.line)

    def test_expected(self):
        token = Token(TokenKind.RPAREN, ")", 3, 9)
        error = GamaSyntaxError.expected(token, "';'")
        self.assertEqual("expected ';', got ')'", error.plain)
        self.assertEqual((3, 9), (error.line, error.column))

        error = GamaSyntaxError.expected(token, "number", "identifier")
        self.assertEqual("expected number or identifier, got ')'", error.plain)

    def test_zero_division(self):
        self.assertEqual("division by zero", ZeroDivision("division").plain)
        self.assertEqual("modulo by zero", ZeroDivision("modulo").plain)


class ErrorHandlerTestCase(unittest.TestCase):

    def setUp(self):
        self.stream = io.StringIO()
        self.handler = ErrorHandler(stream=self.stream)
        self.handler.register_file("prog.txt", "Entero z = 5;\nImprimir(z / 0);\n")

    def test_fatal_exits(self):
        token = Token(TokenKind.DIV, "/", 2, 12)
        with self.assertRaises(SystemExit) as context:
            with self.handler:
                raise ZeroDivision("division", token)
        self.assertEqual(1, context.exception.code)

        output = self.stream.getvalue()
        self.assertIn("prog.txt:2:12:", output)
        self.assertIn("zero", output)
        self.assertIn("Imprimir(z ", output)
        self.assertIn("^", output)

    def test_non_fatal_continues(self):
        self.handler.fatal = False
        with self.handler:
            raise UndeclaredVariable("q")
        self.assertIn("q", self.stream.getvalue())

    def test_internal_error(self):
        with self.assertRaises(SystemExit):
            with self.handler:
                raise KeyError("oops")
        self.assertIn("[internal]", self.stream.getvalue())

    def test_system_exit_passes(self):
        with self.assertRaises(SystemExit) as context:
            with self.handler:
                raise SystemExit(2)
        self.assertEqual(2, context.exception.code)
        self.assertEqual("", self.stream.getvalue())

    def test_no_error(self):
        with self.handler:
            pass
        self.assertEqual("", self.stream.getvalue())

    def test_string_underline_covers_quotes(self):
        self.handler.register_file("prog.txt", 'Imprimir("hola" + 1);\n')
        token = tokenize('Imprimir("hola" + 1);')[2]
        self.assertEqual((TokenKind.STRING, 10, 6), (token.kind, token.column, token.span))

        diagnosis = self.handler.diagnose(GamaSyntaxError("misplaced string", token=token))
        self.assertIn('"hola"', diagnosis)
        self.assertIn("^~~~~~", diagnosis)
        self.assertNotIn("^~~~~~~", diagnosis)

    def test_warn(self):
        token = Token(TokenKind.IDENT, "z", 1, 8)
        self.handler.warn("variable '{}' is declared more than once", "z", token=token)
        output = self.stream.getvalue()
        self.assertIn("prog.txt:1:8:", output)
        self.assertIn("warning", output)


if __name__ == '__main__':
    unittest.main()
