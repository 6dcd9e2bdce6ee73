"""
Error taxonomy for the theory engine.

Every failure raised by the library derives from TheoryError, which is a
ValueError so callers that already guard parsing with ``except ValueError``
keep working.
"""


class TheoryError(ValueError):
    """Base class for all music theory errors."""


class ParseError(TheoryError):
    """Malformed textual input (pitch, note, interval or chord text)."""


class InvalidArgument(TheoryError):
    """A constructor or operation received a wrong-typed or out-of-range value."""


class InvalidOperation(TheoryError):
    """An operation has no defined result for its operands."""


__all__ = [
    "TheoryError",
    "ParseError",
    "InvalidArgument",
    "InvalidOperation",
]
