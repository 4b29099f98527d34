"""Error taxonomy for greetline.

Every failure carries a stable ``code`` and the process ``exit_code`` the CLI
uses for it, so the boundary can report ``code: message`` without inspecting
exception types one by one.
"""

from __future__ import annotations


class GreetlineError(Exception):
    """Base class for all greetline failures."""

    code = "GREETLINE_ERROR"
    exit_code = 1

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InputExhausted(GreetlineError):
    """The input stream ended before the required number of entries arrived."""

    code = "INPUT_EXHAUSTED"
    exit_code = 1

    def __init__(self, expected: int, collected: int) -> None:
        super().__init__(
            f"expected {expected} entries but the input ended after {collected}"
        )
        self.expected = expected
        self.collected = collected


class EntryTooLong(GreetlineError):
    """An entry exceeded the configured maximum length."""

    code = "ENTRY_TOO_LONG"
    exit_code = 3

    def __init__(self, index: int, length: int, max_length: int) -> None:
        super().__init__(
            f"entry {index + 1} is {length} characters long (limit {max_length})"
        )
        self.index = index
        self.length = length
        self.max_length = max_length


class PreconditionViolation(GreetlineError):
    """An internal invariant was broken. Indicates a bug, not bad input."""

    code = "PRECONDITION_VIOLATION"
    exit_code = 70
