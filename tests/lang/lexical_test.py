import unittest

from gama.lang.error import CapacityError, LexicalError
from gama.lang.lexical import Lexer, Token, TokenKind, dump_sections, tokenize
from gama.lang.limits import Limits


def kinds(source):
    return [token.kind for token in tokenize(source)]


class LexerTestCase(unittest.TestCase):

    def test_keywords(self):
        cases = {
            "Entero": TokenKind.INT,
            "ENTERO": TokenKind.INT,
            "entero": TokenKind.INT,
            "caracter": TokenKind.CHAR,
            "Flotante": TokenKind.FLOAT,
            "VAR": TokenKind.VAR,
            "Imprimir": TokenKind.PRINT,
            "leer": TokenKind.READ,
            "Suma": TokenKind.SUM,
            "si": TokenKind.IF,
            "SiNo": TokenKind.ELSE,
            "Mientras": TokenKind.WHILE,
            "switch": TokenKind.SWITCH,
            "Caso": TokenKind.CASE,
            "Predeterminado": TokenKind.DEFAULT,
            "Romper": TokenKind.BREAK,
        }
        for case, kind in cases.items():
            self.assertEqual([kind, TokenKind.EOF], kinds(case), case)

    def test_keyword_keeps_spelling(self):
        token = tokenize("ImPrImIr")[0]
        self.assertEqual(TokenKind.PRINT, token.kind)
        self.assertEqual("ImPrImIr", token.lexeme)

    def test_identifiers(self):
        should_pass = ["a", "x1", "Enteros", "sino2", "Si0", "abcDEF123"]
        for case in should_pass:
            token = tokenize(case)[0]
            self.assertEqual(TokenKind.IDENT, token.kind, case)
            self.assertEqual(case, token.lexeme, case)

    def test_numbers(self):
        self.assertEqual(
            [(TokenKind.NUM, "12"), (TokenKind.IDENT, "ab"), (TokenKind.NUM, "007")],
            [(token.kind, token.lexeme) for token in tokenize("12ab 007")[:-1]],
        )

    def test_strings(self):
        token = tokenize("\"hola, mundo (1 + 2);\"")[0]
        self.assertEqual(TokenKind.STRING, token.kind)
        self.assertEqual("hola, mundo (1 + 2);", token.lexeme)

        self.assertEqual("a\\nb", tokenize("\"a\\nb\"")[0].lexeme)  # no escape processing
        self.assertEqual("", tokenize("\"\"")[0].lexeme)

    def test_unterminated_string(self):
        should_raise = ["\"abc", "Imprimir(\"abc);", "\"line\nbreak\""]
        for case in should_raise:
            self.assertRaises(LexicalError, tokenize, case)

    def test_operators(self):
        cases = {
            "=": [TokenKind.ASSIGN],
            "==": [TokenKind.EQ],
            "===": [TokenKind.EQ, TokenKind.ASSIGN],
            "!=": [TokenKind.NEQ],
            "!": [TokenKind.UNKNOWN],
            "< <=": [TokenKind.LT, TokenKind.LE],
            "> >=": [TokenKind.GT, TokenKind.GE],
            "+-*/%^": [TokenKind.PLUS, TokenKind.MINUS, TokenKind.MULT, TokenKind.DIV, TokenKind.MOD, TokenKind.POW],
            ",;(){}:": [TokenKind.COMMA, TokenKind.SEMI, TokenKind.LPAREN, TokenKind.RPAREN, TokenKind.LBRACE,
                        TokenKind.RBRACE, TokenKind.COLON],
            "@ # $": [TokenKind.UNKNOWN] * 3,
        }
        for case, expected in cases.items():
            self.assertEqual(expected + [TokenKind.EOF], kinds(case), case)

    def test_whitespace_and_positions(self):
        tokens = tokenize("Entero a;\n\t  a = 1;\r\n")
        self.assertEqual(["Entero", "a", ";", "a", "=", "1", ";", "EOF"], [token.lexeme for token in tokens])
        self.assertEqual((1, 1), (tokens[0].line, tokens[0].column))
        self.assertEqual((1, 8), (tokens[1].line, tokens[1].column))
        self.assertEqual((2, 4), (tokens[3].line, tokens[3].column))
        self.assertEqual((2, 8), (tokens[5].line, tokens[5].column))

    def test_single_eof(self):
        should_pass = ["", "   \n\n", "Imprimir(1);"]
        for case in should_pass:
            tokens = tokenize(case)
            self.assertEqual(TokenKind.EOF, tokens[-1].kind, case)
            self.assertEqual(1, sum(token.kind is TokenKind.EOF for token in tokens), case)

    def test_token_limit(self):
        limits = Limits(max_tokens=4)
        self.assertEqual(4, len(Lexer("a b c", limits).tokenize()))
        self.assertRaises(CapacityError, Lexer("a b c d", limits).tokenize)

    def test_lexeme_limit(self):
        limits = Limits(max_lexeme=5)
        self.assertEqual("abcde", Lexer("abcde", limits).tokenize()[0].lexeme)

        should_raise = ["abcdef", "123456", "\"abcdef\""]
        for case in should_raise:
            self.assertRaises(CapacityError, Lexer(case, limits).tokenize)

    def test_token_is_immutable(self):
        token = Token(TokenKind.NUM, "1", 1, 1)
        with self.assertRaises(AttributeError):
            token.lexeme = "2"


class DumpSectionsTestCase(unittest.TestCase):

    def test_sections(self):
        dump = dump_sections(tokenize("Entero a = 10; Imprimir(\"hi\"); a = a ^ 2;"))
        expected = (
            "-- Reserved words --\n"
            "INT\tEntero\n"
            "PRINT\tImprimir\n"
            "\n"
            "-- Identifiers --\n"
            "IDENT\ta\n"
            "IDENT\ta\n"
            "IDENT\ta\n"
            "\n"
            "-- Numbers --\n"
            "NUM\t10\n"
            "NUM\t2\n"
            "\n"
            "-- Strings --\n"
            "STRING\thi\n"
            "\n"
            "-- Operators --\n"
            "ASSIGN\t=\n"
            "ASSIGN\t=\n"
            "POW\t^\n"
            "\n"
            "-- Symbols --\n"
            "SEMI\t;\n"
            "LPAREN\t(\n"
            "RPAREN\t)\n"
            "SEMI\t;\n"
            "SEMI\t;\n"
        )
        self.assertEqual(expected, dump)


if __name__ == '__main__':
    unittest.main()
