"""
CSF error types.

Every failure raised while decoding carries enough context (offset,
expected vs. actual) to locate the problem in a malformed file.
"""

from typing import Sequence


class CsfError(Exception):
    """Base class for all CSF errors."""


class CsfFormatError(CsfError, ValueError):
    """A section did not start with the expected identifier."""

    def __init__(self, expected: Sequence[str], actual: bytes, offset: int, section: str = "section"):
        self.expected = list(expected)
        self.actual = actual
        self.offset = offset
        self.section = section
        wanted = ", ".join(f"'{e}'" for e in self.expected)
        got = actual.decode('latin-1')
        super().__init__(
            f"not a valid {section} start, want [{wanted}], got '{got}' at {offset:#x}"
        )


class CsfTruncatedError(CsfError, EOFError):
    """Fewer bytes were available than a declared length."""

    def __init__(self, offset: int, wanted: int, got: int):
        self.offset = offset
        self.wanted = wanted
        self.got = got
        super().__init__(
            f"not enough data at {offset:#x}, want {wanted} bytes, got {got}"
        )


class CsfLimitError(CsfError):
    """Decoding exceeded the entry safety bound."""

    def __init__(self, limit: int, offset: int):
        self.limit = limit
        self.offset = offset
        super().__init__(f"too many strings, more than {limit} entries (at {offset:#x})")


class CsfEncodingError(CsfError, ValueError):
    """A buffer could not be decoded as UTF-16."""
