"""
Errors
======
Everything polycipher raises derives from PolycipherError. Validation
failures also derive from ValueError and native-library failures from
RuntimeError, so callers that only know the builtin types still catch them.
"""


class PolycipherError(Exception):
    """Base class for every polycipher failure."""


class InvalidKey(PolycipherError, ValueError):
    """Key is empty, out of range, or malformed for its cipher variant."""


class UnsupportedCharacter(PolycipherError, ValueError):
    """Input holds a character outside the handled ASCII set."""

    def __init__(self, char: str, position: int = -1):
        self.char = char
        self.position = position
        where = f" at position {position}" if position >= 0 else ""
        super().__init__(f"Unsupported character {char!r}{where}.")


class EstimationAmbiguous(PolycipherError):
    """
    Several key lengths scored almost equally.

    Informational only: the estimator attaches it to its result and the
    driver resolves it by preferring the shortest well-scoring key.
    """

    def __init__(self, lengths):
        self.lengths = tuple(lengths)
        super().__init__(f"Ambiguous key length, candidates: {self.lengths}")


class NativeLibraryError(PolycipherError, RuntimeError):
    """The native cipher library is missing or returned nothing."""
