"""Static capacity limits of a gama run. Overridable from the command line (see main.py)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Limits:
    max_tokens: int = 2048  # end-of-input token included
    max_lexeme: int = 127   # characters per identifier, number or string
    max_vars: int = 256     # distinct variable names

    def __post_init__(self):
        for name in ("max_tokens", "max_lexeme", "max_vars"):
            assert getattr(self, name) > 0, f"{name} must be positive"
