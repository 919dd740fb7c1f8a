"""Expression evaluation. Expressions are evaluated while they are parsed: nothing but the resulting integer is kept.

```
<expr>           ::= <relational>
<relational>     ::= <additive> ( ( "==" | "!=" | "<" | "<=" | ">" | ">=" ) <additive> )*
<additive>       ::= <multiplicative> ( ( "+" | "-" ) <multiplicative> )*
<multiplicative> ::= <power> ( ( "*" | "/" | "%" ) <power> )*
<power>          ::= <unary> ( "^" <unary> )*
<unary>          ::= [ "-" ] <primary>
<primary>        ::= "(" <expr> ")" | NUM | IDENT
```

Every level associates to the left, '^' included: 2 ^ 3 ^ 2 == (2 ^ 3) ^ 2 == 64. Relational operators yield 0 or 1.
Values are 32-bit signed integers; division and modulo truncate toward zero.

In SKIP mode the same tokens are consumed but nothing is computed and no variable is looked up; the result is None.
"""

import operator

from gama.core.cursor import Mode
from gama.lang.error import GamaSyntaxError, ZeroDivision
from gama.lang.lexical import TokenKind

INT_BITS = 32


def wrap(value):
    """Wraps value to a signed INT_BITS-bit integer."""
    half = 1 << (INT_BITS - 1)
    return (value + half) % (1 << INT_BITS) - half


def divide(left, right, token=None):
    if right == 0:
        raise ZeroDivision("division", token)
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def modulo(left, right, token=None):
    if right == 0:
        raise ZeroDivision("modulo", token)
    return left - right * divide(left, right)


def power(base, exponent, token=None):
    """base ** exponent, truncated to an integer."""
    if exponent >= 0:
        return pow(base, exponent, 1 << INT_BITS)
    # negative exponent: 1 / base ** -exponent
    if base == 0:
        raise ZeroDivision("division", token)
    if base == 1:
        return 1
    if base == -1:
        return -1 if exponent % 2 else 1
    return 0


RELATIONAL = {
    TokenKind.EQ: operator.eq,
    TokenKind.NEQ: operator.ne,
    TokenKind.LT: operator.lt,
    TokenKind.LE: operator.le,
    TokenKind.GT: operator.gt,
    TokenKind.GE: operator.ge,
}

ADDITIVE = {
    TokenKind.PLUS: lambda left, right, token: left + right,
    TokenKind.MINUS: lambda left, right, token: left - right,
}

MULTIPLICATIVE = {
    TokenKind.MULT: lambda left, right, token: left * right,
    TokenKind.DIV: divide,
    TokenKind.MOD: modulo,
}


class Evaluator:
    """Recursive-descent evaluator, one method per precedence level, tightest binding last."""

    def __init__(self, symtab):
        self.symtab = symtab

    def evaluate(self, cursor, mode=Mode.EXECUTE):
        """Consumes one <expr> from cursor. Returns its value, or None in SKIP mode."""
        return self.relational(cursor, mode)

    def relational(self, cursor, mode):
        left = self.additive(cursor, mode)
        while cursor.at(*RELATIONAL):
            op = cursor.advance()
            right = self.additive(cursor, mode)
            if mode is Mode.EXECUTE:
                left = int(RELATIONAL[op.kind](left, right))
        return left

    def additive(self, cursor, mode):
        return self._binary(cursor, mode, ADDITIVE, self.multiplicative)

    def multiplicative(self, cursor, mode):
        return self._binary(cursor, mode, MULTIPLICATIVE, self.power)

    def power(self, cursor, mode):
        left = self.unary(cursor, mode)
        while cursor.at(TokenKind.POW):
            op = cursor.advance()
            right = self.unary(cursor, mode)
            if mode is Mode.EXECUTE:
                left = wrap(power(left, right, op))
        return left

    def unary(self, cursor, mode):
        if cursor.accept(TokenKind.MINUS):
            value = self.primary(cursor, mode)
            return wrap(-value) if mode is Mode.EXECUTE else None
        return self.primary(cursor, mode)

    def primary(self, cursor, mode):
        if cursor.accept(TokenKind.LPAREN):
            value = self.evaluate(cursor, mode)
            cursor.expect(TokenKind.RPAREN)
            return value

        token = cursor.current
        if token.kind is TokenKind.NUM:
            cursor.advance()
            return wrap(int(token.lexeme)) if mode is Mode.EXECUTE else None

        if token.kind is TokenKind.IDENT:
            cursor.advance()
            return self.symtab.get(token.lexeme, token) if mode is Mode.EXECUTE else None

        raise GamaSyntaxError.expected(token, TokenKind.NUM.value, TokenKind.IDENT.value, TokenKind.LPAREN.value)

    def _binary(self, cursor, mode, operators, operand):
        """Left-associative loop shared by the additive and multiplicative levels."""
        left = operand(cursor, mode)
        while cursor.at(*operators):
            op = cursor.advance()
            right = operand(cursor, mode)
            if mode is Mode.EXECUTE:
                left = wrap(operators[op.kind](left, right, op))
        return left
