"""
Keys
====
A repeating key comes in two shapes:

    NumericKey(3)        -- one shift applied to every letter (period 1)
    TextualKey("rust")   -- one shift per keyword letter, a=0 .. z=25

Both resolve every position to a shift in [0, 25] and repeat with a
period equal to their own length.
"""

from dataclasses import dataclass
from typing import Tuple, Union

from .alphabet import ALPHABET, ALPHABET_SIZE, letter_index
from .errors import InvalidKey


@dataclass(frozen=True)
class NumericKey:
    """Single integer shift, equivalent to a one-letter keyword."""

    shift: int

    def __post_init__(self):
        if isinstance(self.shift, bool) or not isinstance(self.shift, int):
            raise InvalidKey(f"Numeric key must be an integer, got {self.shift!r}.")
        if not 0 <= self.shift < ALPHABET_SIZE:
            raise InvalidKey(f"Numeric key must be in 0..25, got {self.shift}.")

    @property
    def shifts(self) -> Tuple[int, ...]:
        return (self.shift,)

    @property
    def period(self) -> int:
        return 1

    def shift_at(self, index: int) -> int:
        return self.shift

    def __str__(self):
        return str(self.shift)


@dataclass(frozen=True)
class TextualKey:
    """Keyword key. Stored lowercase; position i shifts by keyword[i] - 'a'."""

    keyword: str

    def __post_init__(self):
        if not isinstance(self.keyword, str) or not self.keyword:
            raise InvalidKey("Keyword key must be a non-empty string.")
        if any(letter_index(c) is None for c in self.keyword):
            raise InvalidKey(f"Keyword key must be ASCII letters only, got {self.keyword!r}.")
        object.__setattr__(self, "keyword", self.keyword.lower())

    @property
    def shifts(self) -> Tuple[int, ...]:
        return tuple(letter_index(c) for c in self.keyword)

    @property
    def period(self) -> int:
        return len(self.keyword)

    def shift_at(self, index: int) -> int:
        return letter_index(self.keyword[index % len(self.keyword)])

    @classmethod
    def from_shifts(cls, shifts) -> "TextualKey":
        return cls("".join(ALPHABET[s % ALPHABET_SIZE] for s in shifts))

    def __str__(self):
        return self.keyword


Key = Union[NumericKey, TextualKey]


def parse_key(value) -> Key:
    """
    Build a key from user input.

    Integers and digit strings become NumericKey, letter strings become
    TextualKey. Keys that are already built pass straight through.
    """
    if isinstance(value, (NumericKey, TextualKey)):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return NumericKey(value)
    if isinstance(value, str):
        text = value.strip()
        if text.isascii() and text.isdigit():
            return NumericKey(int(text))
        return TextualKey(text)
    raise InvalidKey(f"Unsupported key type: {type(value).__name__}.")
