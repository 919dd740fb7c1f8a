"""Lexical analysis for the gama language: turns source text into an append-only list of Tokens, terminated by exactly
one end-of-input token.

Tokens can be loosely defined as follows:

```
<reserved>   ::= "Entero" | "Caracter" | "Flotante"                                     ; type keywords
               | "var" | "const" | "items" | "item"                                     ; reserved, unused
               | "Imprimir" | "Leer" | "Suma" | "Si" | "Sino" | "Mientras"
               | "Switch" | "Caso" | "Predeterminado" | "Romper"                        ; case-insensitive
<ident>      ::= <letter> (<letter> | <digit>)*     ; any letter run that is not a reserved word
<number>     ::= <digit>+                           ; no sign, no fraction
<string>     ::= '"' <char>* '"'                    ; no escapes, cannot span lines
<symbol>     ::= "," | ";" | "(" | ")" | "{" | "}" | ":"
<operator>   ::= "+" | "-" | "*" | "/" | "%" | "^" | "=" | "==" | "!=" | "<" | "<=" | ">" | ">="
```

Letters and digits are ASCII only. Any other character becomes an UNKNOWN token, which is only an error once the
parser finds it somewhere it expects something else.
"""

import string
from dataclasses import dataclass
from enum import Enum

from gama.lang.error import CapacityError, LexicalError
from gama.lang.limits import Limits


class TokenKind(Enum):
    """Closed set of token kinds. Values are the spelling used in diagnostics."""
    # type keywords
    INT = "Entero"
    CHAR = "Caracter"
    FLOAT = "Flotante"

    # reserved words without a statement
    VAR = "var"
    CONST = "const"
    ITEMS = "items"
    ITEM = "item"

    # control keywords
    PRINT = "Imprimir"
    READ = "Leer"
    SUM = "Suma"
    IF = "Si"
    ELSE = "Sino"
    WHILE = "Mientras"
    SWITCH = "Switch"
    CASE = "Caso"
    DEFAULT = "Predeterminado"
    BREAK = "Romper"

    IDENT = "identifier"
    NUM = "number"
    STRING = "string"

    COMMA = "','"
    SEMI = "';'"
    LPAREN = "'('"
    RPAREN = "')'"
    LBRACE = "'{'"
    RBRACE = "'}'"
    COLON = "':'"

    PLUS = "'+'"
    MINUS = "'-'"
    MULT = "'*'"
    DIV = "'/'"
    MOD = "'%'"
    POW = "'^'"
    ASSIGN = "'='"
    EQ = "'=='"
    NEQ = "'!='"
    LT = "'<'"
    LE = "'<='"
    GT = "'>'"
    GE = "'>='"

    EOF = "end of input"
    UNKNOWN = "unknown character"

    @property
    def is_type(self):
        return self in TYPE_KEYWORDS

    @property
    def is_reserved(self):
        return self in KEYWORDS.values()

    @property
    def is_operator(self):
        return self in OPERATORS.values() or self in (TokenKind.ASSIGN, TokenKind.EQ, TokenKind.NEQ, TokenKind.LT,
                                                      TokenKind.LE, TokenKind.GT, TokenKind.GE)

    @property
    def is_symbol(self):
        return self in PUNCTUATION.values()


TYPE_KEYWORDS = (TokenKind.INT, TokenKind.CHAR, TokenKind.FLOAT)

# reserved, so never identifiers, but no statement starts with them
UNUSED_KEYWORDS = (TokenKind.VAR, TokenKind.CONST, TokenKind.ITEMS, TokenKind.ITEM)

KEYWORDS = {kind.value.lower(): kind for kind in TYPE_KEYWORDS + UNUSED_KEYWORDS + (
    TokenKind.PRINT, TokenKind.READ, TokenKind.SUM, TokenKind.IF, TokenKind.ELSE, TokenKind.WHILE, TokenKind.SWITCH,
    TokenKind.CASE, TokenKind.DEFAULT, TokenKind.BREAK,
)}

PUNCTUATION = {
    ",": TokenKind.COMMA,
    ";": TokenKind.SEMI,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    ":": TokenKind.COLON,
}

OPERATORS = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.MULT,
    "/": TokenKind.DIV,
    "%": TokenKind.MOD,
    "^": TokenKind.POW,
}

# first char: (kind alone, kind when followed by '=')
COMPARISONS = {
    "=": (TokenKind.ASSIGN, TokenKind.EQ),
    "!": (TokenKind.UNKNOWN, TokenKind.NEQ),
    "<": (TokenKind.LT, TokenKind.LE),
    ">": (TokenKind.GT, TokenKind.GE),
}


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    lexeme: str
    line: int
    column: int
    width: int = None  # characters taken in the source, when not len(lexeme)

    @property
    def span(self):
        return self.width if self.width is not None else len(self.lexeme)

    def __str__(self):
        return self.lexeme


class Lexer:
    """Single pass over the source text. Call tokenize once; the produced list is never modified afterwards."""
    WHITESPACE = " \t\r\n\f\v"
    LETTERS = string.ascii_letters
    DIGITS = string.digits
    EOF_LEXEME = "EOF"

    def __init__(self, source, limits=None):
        self.source = source
        self.limits = limits if limits is not None else Limits()

        self.tokens = []
        self.pos = 0
        self.line = 1
        self.line_start = 0  # index of first char of current line, used for columns

    def tokenize(self):
        """Returns list of Tokens for self.source, ending with a single EOF token."""
        while True:
            self._skip_whitespace()
            if self.pos >= len(self.source):
                break
            self._next_token()

        self._add(TokenKind.EOF, Lexer.EOF_LEXEME, self.pos)
        return self.tokens

    def _skip_whitespace(self):
        while self.pos < len(self.source) and self.source[self.pos] in Lexer.WHITESPACE:
            if self.source[self.pos] == "\n":
                self.line += 1
                self.line_start = self.pos + 1
            self.pos += 1

    def _add(self, kind, lexeme, start, width=None):
        if len(self.tokens) >= self.limits.max_tokens:
            raise CapacityError("too many tokens (limit is {})", str(self.limits.max_tokens), diagnosis=False)
        token = Token(kind, lexeme, self.line, start - self.line_start + 1, width)

        if len(lexeme) > self.limits.max_lexeme:
            msg = "{} is longer than {} characters"
            raise CapacityError(msg, (kind.value, str(self.limits.max_lexeme)), token=token)

        self.tokens.append(token)
        return token

    def _run(self, chars):
        """Advances over the longest run of chars and returns it."""
        start = self.pos
        while self.pos < len(self.source) and self.source[self.pos] in chars:
            self.pos += 1
        return self.source[start:self.pos]

    def _next_token(self):
        start = self.pos
        char = self.source[self.pos]

        if char in Lexer.LETTERS:
            word = self._run(Lexer.LETTERS + Lexer.DIGITS)
            self._add(KEYWORDS.get(word.lower(), TokenKind.IDENT), word, start)

        elif char in Lexer.DIGITS:
            self._add(TokenKind.NUM, self._run(Lexer.DIGITS), start)

        elif char == "\"":
            end = self.pos + 1
            while end < len(self.source) and self.source[end] not in "\"\n":
                end += 1
            if end >= len(self.source) or self.source[end] != "\"":
                token = Token(TokenKind.STRING, self.source[start:end], self.line, start - self.line_start + 1)
                raise LexicalError("unterminated string starting on line {}", str(self.line), token=token)
            self.pos = end + 1
            self._add(TokenKind.STRING, self.source[start + 1:end], start, self.pos - start)

        elif char in COMPARISONS:
            alone, with_eq = COMPARISONS[char]
            if self.source.startswith("=", self.pos + 1):
                self.pos += 2
                self._add(with_eq, char + "=", start)
            else:
                self.pos += 1
                self._add(alone, char, start)

        else:
            self.pos += 1
            kind = PUNCTUATION.get(char) or OPERATORS.get(char) or TokenKind.UNKNOWN
            self._add(kind, char, start)


def tokenize(source, limits=None):
    """Shortcut for Lexer(source, limits).tokenize()."""
    return Lexer(source, limits).tokenize()


def dump_sections(tokens):
    """Returns the classified token listing: reserved words, identifiers, numbers, strings, operators and symbols, one
    'KIND<tab>lexeme' line per token, in source order within each section.
    """
    sections = [
        ("Reserved words", lambda kind: kind.is_reserved),
        ("Identifiers", lambda kind: kind is TokenKind.IDENT),
        ("Numbers", lambda kind: kind is TokenKind.NUM),
        ("Strings", lambda kind: kind is TokenKind.STRING),
        ("Operators", lambda kind: kind.is_operator),
        ("Symbols", lambda kind: kind.is_symbol),
    ]

    lines = []
    for title, belongs in sections:
        if lines:
            lines.append("")
        lines.append(f"-- {title} --")
        lines.extend(f"{token.kind.name}\t{token.lexeme}" for token in tokens if belongs(token.kind))
    return "\n".join(lines) + "\n"
