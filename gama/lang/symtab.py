"""Flat symbol table: variable name -> integer value plus a 'defined' flag. All declared types share one integer cell.
Symbols live as long as the table does.
"""

from dataclasses import dataclass

from gama.lang.error import CapacityError, UndeclaredVariable, UninitializedVariable
from gama.lang.limits import Limits


@dataclass
class Symbol:
    name: str
    value: int = 0
    defined: bool = False


class SymbolTable:

    def __init__(self, limits=None):
        self.limits = limits if limits is not None else Limits()
        self.symbols = []  # list of Symbols, in order of declaration
        self._index = {}   # dict of name: index in self.symbols

    def lookup(self, name):
        """Returns index of name, or None if it was never declared."""
        return self._index.get(name)

    def declare(self, name, token=None):
        """Returns index of name, creating it (value 0, undefined) if needed. Idempotent."""
        idx = self.lookup(name)
        if idx is not None:
            return idx

        if len(self.symbols) >= self.limits.max_vars:
            raise CapacityError("too many variables (limit is {})", str(self.limits.max_vars), token=token)

        self.symbols.append(Symbol(name))
        self._index[name] = len(self.symbols) - 1
        return self._index[name]

    def undefine(self, name, token=None):
        """Declares name and marks it as not yet assigned, as a declaration without initializer does."""
        symbol = self.symbols[self.declare(name, token)]
        symbol.defined = False
        return symbol

    def set(self, name, value, token=None):
        """Stores value in name (declaring it if needed) and marks it defined."""
        symbol = self.symbols[self.declare(name, token)]
        symbol.value = value
        symbol.defined = True

    def get(self, name, token=None):
        """Returns value of name. Raises UndeclaredVariable or UninitializedVariable."""
        idx = self.lookup(name)
        if idx is None:
            raise UndeclaredVariable(name, token)

        symbol = self.symbols[idx]
        if not symbol.defined:
            raise UninitializedVariable(name, token)
        return symbol.value

    def snapshot(self):
        """dict of name: value (None if undefined), in declaration order."""
        return {symbol.name: symbol.value if symbol.defined else None for symbol in self.symbols}

    def __contains__(self, name):
        return name in self._index

    def __iter__(self):
        return iter(self.symbols)

    def __len__(self):
        return len(self.symbols)
