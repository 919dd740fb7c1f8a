"""Program I/O: line-oriented output and whitespace-delimited integer input for Leer."""

import re
from collections import deque

from gama.core.expression import wrap
from gama.lang.error import InputError


class Console:
    INTEGER = re.compile(r"[+-]?[0-9]+")

    def __init__(self, stdin, stdout):
        self.stdin = stdin
        self.stdout = stdout

        self.transcript = []    # every line written, used for the token dump
        self._pending = deque()  # words read from stdin but not yet consumed

    def write_line(self, text):
        self.transcript.append(text)
        self.stdout.write(f"{text}\n")
        self.stdout.flush()

    def read_int(self, token=None):
        """Returns the next whitespace-delimited integer of stdin. Blocks until a line is available."""
        while not self._pending:
            line = self.stdin.readline()
            if not line:
                raise InputError("expected an integer to read, got end of input", token=token)
            self._pending.extend(line.split())

        word = self._pending.popleft()
        if not Console.INTEGER.fullmatch(word):
            raise InputError("expected an integer to read, got '{}'", word, token=token)
        return wrap(int(word))
