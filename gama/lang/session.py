"""Session control for the gama language. A Session owns everything one run needs (source, tokens, symbol table,
I/O streams, limits) and wires lexer, cursor and interpreter together, either for a whole file or, in command-line
mode, one chunk of source at a time.
"""

import sys

from gama.core.console import Console
from gama.core.cursor import Cursor
from gama.core.statement import Interpreter
from gama.lang.error import GenericException
from gama.lang.lexical import Lexer, TokenKind, dump_sections
from gama.lang.limits import Limits
from gama.lang.symtab import SymbolTable


class Session:
    """Governs a gama session. Never reused across programs, except in command-line mode where the symbol table is
    kept between lines on purpose.
    """
    SH_FILE = "<in>"  # command-line interpreter filename
    STDIN = "-"       # read the program from the stdin stream
    OK = "OK"

    def __init__(self, error_handler, path, stdin=None, stdout=None, limits=None, cmd_line=False):
        self.error_handler = error_handler
        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.limits = limits if limits is not None else Limits()

        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout

        self.symtab = SymbolTable(self.limits)
        self.console = Console(self.stdin, self.stdout)
        self.interpreter = Interpreter(self.symtab, self.console, error_handler)

        self.tokens = None  # set once the source has been tokenized
        self.result = None  # OK, or the message of the error that stopped the run

        if self.cmd_line:
            self.error_handler.fatal = False
            self.source = ""

        elif path == Session.SH_FILE:
            raise GenericException("'<in>' is a reserved filename", diagnosis=False)

        elif path == Session.STDIN:
            self.source = self.stdin.read()

        else:
            try:
                with open(path, "r") as file:
                    self.source = file.read()
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

        self.error_handler.register_file(path, self.source)

    def tokenize(self):
        """Tokenizes the whole source, once."""
        if self.tokens is None:
            self.tokens = Lexer(self.source, self.limits).tokenize()
        return self.tokens

    def run(self):
        """Runs the program from its first token and prints OK if it reaches the end of input."""
        try:
            self.interpreter.program(Cursor(self.tokenize()))
        except GenericException as error:
            self.result = error.plain
            raise

        self.result = Session.OK
        self.stdout.write(f"{Session.OK}\n")
        self.stdout.flush()

    @staticmethod
    def preprocess_line(line, pending="", limits=None):
        """Joins pending and line. Returns the joined source and whether or not it still has unclosed parentheses or
        braces (in which case the shell should ask for a continuation line). Brackets inside strings don't count.
        """
        line = f"{pending}\n{line}" if pending else line
        try:
            kinds = [token.kind for token in Lexer(line, limits).tokenize()]
        except GenericException:
            return line, False  # complete as far as the shell is concerned, running it reports the error

        opened = kinds.count(TokenKind.LPAREN) + kinds.count(TokenKind.LBRACE)
        closed = kinds.count(TokenKind.RPAREN) + kinds.count(TokenKind.RBRACE)
        return line, opened > closed

    def add(self, source):
        """Tokenizes and executes one chunk of source against this session's symbol table. Command-line mode only."""
        assert self.cmd_line, "add is only available in command-line mode"

        self.source = source
        self.error_handler.register_file(self.path, source)

        tokens = Lexer(source, self.limits).tokenize()
        self.interpreter.program(Cursor(tokens))

    def dump_tokens(self, path):
        """Writes source code, classified tokens, parser result and program output to path. If path can't be written,
        that is an error after a successful run, and only a warning after a failed one (whose error is what matters).
        """
        try:
            with open(path, "w") as file:
                file.write("=== Source code ===\n")
                file.write(self.source if self.source.endswith("\n") else self.source + "\n")
                file.write("\n=== Lexer ===\n")
                file.write(dump_sections(self.tokens or []))
                file.write(f"\n=== Parser ===\n{self.result}\n")
                file.write("\n=== Execution ===\n")
                file.writelines(f"{line}\n" for line in self.console.transcript)
        except OSError:
            if self.result == Session.OK:
                raise GenericException("'{}' could not be written", path, diagnosis=False)
            self.error_handler.warn("'{}' could not be written", path, diagnosis=False)
