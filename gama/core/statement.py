"""Statement interpreter: recursive descent over the token list, executing each statement as it is recognized.

```
<program>     ::= <stmt>* EOF
<stmt>        ::= <decl_stmt> | <print_stmt> | <sum_stmt> | <read_stmt> | <assign_stmt>
                | <if_stmt> | <while_stmt> | <switch_stmt> | <block_stmt>

<decl_stmt>   ::= <type> <var_decl> ( "," <var_decl> )* ";"
<var_decl>    ::= IDENT [ "=" <expr> ]
<print_stmt>  ::= "Imprimir" "(" ( STRING | <expr> ) ")" ";"
                | "Imprimir" "{" ( STRING | <expr> ) "}" ";"
<sum_stmt>    ::= "Suma" <expr> ";"
<read_stmt>   ::= "Leer" "(" IDENT ")" ";"
<assign_stmt> ::= IDENT "=" <expr> ";"
<if_stmt>     ::= "Si" "(" <expr> ")" <stmt> [ "Sino" <stmt> ]
<while_stmt>  ::= "Mientras" "(" <expr> ")" <stmt>
<switch_stmt> ::= "Switch" "(" <expr> ")" "{" <case>* [ <default> ] "}"
<case>        ::= "Caso" [ "-" ] NUM ":" <stmt> [ "Romper" ";" ]
<default>     ::= "Predeterminado" ":" <stmt> [ "Romper" ";" ]
<block_stmt>  ::= "{" <stmt>* "}"
```

Each statement method takes a Mode. In EXECUTE mode the statement has its effects; in SKIP mode exactly the same
tokens are consumed with no effect at all, which is how untaken branches and switch arms are passed over. Both modes
go through the same methods, so what gets skipped is always what would have been executed.
"""

from gama.core.cursor import Mode
from gama.core.expression import Evaluator, wrap
from gama.lang.error import GamaSyntaxError
from gama.lang.lexical import TYPE_KEYWORDS, TokenKind


class Interpreter:
    """Runs statements against one symbol table and one console. Holds no position of its own: the cursor is passed
    to every method.
    """

    def __init__(self, symtab, console, error_handler=None):
        self.symtab = symtab
        self.console = console
        self.error_handler = error_handler  # only used for warnings
        self.evaluator = Evaluator(symtab)

        self._warned = set()  # names already warned about, so loops don't repeat warnings

        self.statements = {kind: self.declaration for kind in TYPE_KEYWORDS}
        self.statements.update({
            TokenKind.PRINT: self.print_stmt,
            TokenKind.SUM: self.sum_stmt,
            TokenKind.READ: self.read_stmt,
            TokenKind.IDENT: self.assignment,
            TokenKind.IF: self.if_stmt,
            TokenKind.WHILE: self.while_stmt,
            TokenKind.SWITCH: self.switch_stmt,
            TokenKind.LBRACE: self.block,
        })

    def program(self, cursor):
        """Executes every statement up to the end of input."""
        while not cursor.at(TokenKind.EOF):
            self.statement(cursor, Mode.EXECUTE)
        cursor.expect(TokenKind.EOF)

    def statement(self, cursor, mode):
        """Dispatches on the first token of the statement."""
        method = self.statements.get(cursor.current.kind)
        if method is None:
            raise GamaSyntaxError("unexpected {} at start of statement", repr(cursor.current.lexeme),
                                  token=cursor.current)
        method(cursor, mode)

    def expression(self, cursor, mode):
        return self.evaluator.evaluate(cursor, mode)

    def declaration(self, cursor, mode):
        cursor.expect(*TYPE_KEYWORDS)

        while True:
            name = cursor.expect(TokenKind.IDENT)
            if mode is Mode.EXECUTE:
                self._declare(name)

            if cursor.accept(TokenKind.ASSIGN):
                value = self.expression(cursor, mode)
                if mode is Mode.EXECUTE:
                    self.symtab.set(name.lexeme, value, name)

            if not cursor.accept(TokenKind.COMMA):
                break

        cursor.expect(TokenKind.SEMI)

    def _declare(self, name):
        if name.lexeme in self.symtab and name.lexeme not in self._warned and self.error_handler is not None:
            self._warned.add(name.lexeme)
            self.error_handler.warn("variable '{}' is declared more than once", name.lexeme, token=name)
        self.symtab.undefine(name.lexeme, name)

    def print_stmt(self, cursor, mode):
        cursor.expect(TokenKind.PRINT)
        opener = cursor.expect(TokenKind.LPAREN, TokenKind.LBRACE)

        string = cursor.accept(TokenKind.STRING)
        if string is None:
            value = self.expression(cursor, mode)

        cursor.expect(TokenKind.RPAREN if opener.kind is TokenKind.LPAREN else TokenKind.RBRACE)
        cursor.expect(TokenKind.SEMI)

        if mode is Mode.EXECUTE:
            self.console.write_line(string.lexeme if string is not None else str(value))

    def sum_stmt(self, cursor, mode):
        cursor.expect(TokenKind.SUM)
        value = self.expression(cursor, mode)
        cursor.expect(TokenKind.SEMI)

        if mode is Mode.EXECUTE:
            self.console.write_line(str(value))

    def read_stmt(self, cursor, mode):
        keyword = cursor.expect(TokenKind.READ)
        cursor.expect(TokenKind.LPAREN)
        name = cursor.expect(TokenKind.IDENT)
        cursor.expect(TokenKind.RPAREN)
        cursor.expect(TokenKind.SEMI)

        if mode is Mode.EXECUTE:
            self.symtab.set(name.lexeme, self.console.read_int(keyword), name)

    def assignment(self, cursor, mode):
        name = cursor.expect(TokenKind.IDENT)
        cursor.expect(TokenKind.ASSIGN)
        value = self.expression(cursor, mode)
        cursor.expect(TokenKind.SEMI)

        if mode is Mode.EXECUTE:
            self.symtab.set(name.lexeme, value, name)

    def if_stmt(self, cursor, mode):
        cursor.expect(TokenKind.IF)
        cursor.expect(TokenKind.LPAREN)
        condition = self.expression(cursor, mode)
        cursor.expect(TokenKind.RPAREN)

        taken = mode is Mode.EXECUTE and condition != 0
        self.statement(cursor, Mode.EXECUTE if taken else Mode.SKIP)

        if cursor.accept(TokenKind.ELSE):
            taken = mode is Mode.EXECUTE and condition == 0
            self.statement(cursor, Mode.EXECUTE if taken else Mode.SKIP)

    def while_stmt(self, cursor, mode):
        """The condition and the body are passed over once on cursor. Further iterations replay both from the
        positions recorded on the way, each on a fresh cursor, so cursor itself ends up right after the body however
        the loop exits.
        """
        cursor.expect(TokenKind.WHILE)
        cursor.expect(TokenKind.LPAREN)
        condition_start = cursor.mark()
        condition = self.expression(cursor, mode)
        cursor.expect(TokenKind.RPAREN)

        if mode is Mode.SKIP or condition == 0:
            self.statement(cursor, Mode.SKIP)
            return

        body_start = cursor.mark()
        self.statement(cursor, Mode.EXECUTE)
        body_end = cursor.mark()

        while True:
            replay = cursor.replay(condition_start)
            condition = self.expression(replay, Mode.EXECUTE)
            replay.expect(TokenKind.RPAREN)
            replay.finish(body_start)
            if condition == 0:
                break

            replay = cursor.replay(body_start)
            self.statement(replay, Mode.EXECUTE)
            replay.finish(body_end)

    def switch_stmt(self, cursor, mode):
        cursor.expect(TokenKind.SWITCH)
        cursor.expect(TokenKind.LPAREN)
        selector = self.expression(cursor, mode)
        cursor.expect(TokenKind.RPAREN)
        cursor.expect(TokenKind.LBRACE)

        matched = False  # an arm has been executed
        stopped = mode is Mode.SKIP  # no further arm may run

        while cursor.accept(TokenKind.CASE):
            literal = self._case_literal(cursor)
            cursor.expect(TokenKind.COLON)

            run = not stopped and not matched and literal == selector
            self.statement(cursor, Mode.EXECUTE if run else Mode.SKIP)
            matched = matched or run

            if cursor.accept(TokenKind.BREAK):
                cursor.expect(TokenKind.SEMI)
                stopped = stopped or run

        if cursor.accept(TokenKind.DEFAULT):
            cursor.expect(TokenKind.COLON)
            run = not stopped and not matched
            self.statement(cursor, Mode.EXECUTE if run else Mode.SKIP)

            if cursor.accept(TokenKind.BREAK):
                cursor.expect(TokenKind.SEMI)

        cursor.expect(TokenKind.RBRACE)

    @staticmethod
    def _case_literal(cursor):
        negative = cursor.accept(TokenKind.MINUS) is not None
        value = int(cursor.expect(TokenKind.NUM).lexeme)
        return wrap(-value if negative else value)

    def block(self, cursor, mode):
        cursor.expect(TokenKind.LBRACE)
        while not cursor.at(TokenKind.RBRACE, TokenKind.EOF):
            self.statement(cursor, mode)
        cursor.expect(TokenKind.RBRACE)
