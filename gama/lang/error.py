"""Error handling for the gama language. Only GenericExceptions should be encountered during running: if another type
of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Every GenericException belongs to one of four categories (lexical, syntax, capacity, runtime). All of them are fatal
when running a file; in command-line mode the error is reported and the shell keeps going.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw a gama error/warning. exprs are formatted
    into msg ('{}' placeholders) and highlighted. token, if given, is the token the error points at.
    """
    category = "error"

    def __init__(self, msg, exprs=None, token=None, diagnosis=True, internal=False):
        if exprs is None:
            exprs = ()
        if isinstance(exprs, str):
            exprs = (exprs,)

        self.plain = msg.format(*exprs)  # uncolored, used for dumps and tests
        self.msg = msg.format(*(colored(str(expr), attrs=["bold"]) for expr in exprs))  # color expr snippets

        self.token = token
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.plain)

    @property
    def line(self):
        return self.token.line if self.token is not None else None

    @property
    def column(self):
        return self.token.column if self.token is not None else None


class LexicalError(GenericException):
    """Raised while splitting source text into tokens."""
    category = "lexical error"


class GamaSyntaxError(GenericException):
    """The token under the cursor is not one the grammar allows at this point."""
    category = "syntax error"

    @classmethod
    def expected(cls, token, *descriptions):
        """Builds 'expected X or Y, got Z' from the offending token."""
        wanted = " or ".join(descriptions)
        return cls("expected {}, got {}", (wanted, repr(token.lexeme)), token=token)


class CapacityError(GenericException):
    """A static limit (tokens, lexeme length, variables) was exceeded."""
    category = "capacity error"


class GamaRuntimeError(GenericException):
    category = "runtime error"


class UndeclaredVariable(GamaRuntimeError):

    def __init__(self, name, token=None):
        super().__init__("variable '{}' was never declared", name, token=token)
        self.name = name


class UninitializedVariable(GamaRuntimeError):

    def __init__(self, name, token=None):
        super().__init__("variable '{}' is used before a value was assigned to it", name, token=token)
        self.name = name


class ZeroDivision(GamaRuntimeError):

    def __init__(self, operation, token=None):
        super().__init__("{} by zero", operation, token=token)
        self.operation = operation


class InputError(GamaRuntimeError):
    """Leer could not get an integer from the input stream."""


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom gama errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True, stream=None):
        self.fatal = fatal
        self.stream = stream  # defaults to sys.stderr at the time of writing
        self.sources = {}     # dict of path: source lines, insertion-ordered
        self.path = None      # file currently being interpreted

    def register_file(self, path, source=""):
        """Registers path (and its source text) so diagnostics can quote the offending line."""
        self.sources[path] = source.splitlines()
        self.path = path

    def _write(self, text):
        print(text, file=self.stream if self.stream is not None else sys.stderr)

    def _location(self, error):
        """Returns 'path:line:col: ' for error, or as much of it as is known."""
        location = f"{self.path}:" if self.path else ""
        if error.line is not None:
            location += f"{error.line}:{error.column}:"
        return location + " " if location else ""

    def diagnose(self, error, warning=False):
        """Returns the source line error points at, with the offending lexeme highlighted and underlined."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR
        lines = self.sources.get(self.path, [])
        if error.line is None or not 0 < error.line <= len(lines):
            return None

        line = lines[error.line - 1]
        start = error.column - 1
        end = start + max(error.token.span, 1)

        diagnosis = "  " + line[:start]
        diagnosis += colored(line[start:end], color, attrs=["bold"])
        diagnosis += line[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += colored("^" + "~" * (end - start - 1), color, attrs=["bold"])

        return diagnosis

    def warn(self, *args, **kwargs):
        """Generates and prints a runtime warning message based on args."""
        error = GenericException(*args, **kwargs)

        warning_msg = colored(self._location(error), attrs=["bold"])
        warning_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg
        self._write(warning_msg)

        if error.diagnosis:
            diagnosis = self.diagnose(error, warning=True)
            if diagnosis:
                self._write(diagnosis)

    def throw(self, error):
        """Prints error (a GenericException) with its location and, unless running in command-line mode, exits with
        status 1.
        """
        error_msg = colored(self._location(error), attrs=["bold"])

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored(f"{error.category}: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        self._write(error_msg)

        if not error.internal and error.diagnosis:
            diagnosis = self.diagnose(error)
            if diagnosis:
                self._write(diagnosis)

        if self.fatal:
            sys.exit(1)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt", diagnosis=False))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("statements nested too deeply: maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
