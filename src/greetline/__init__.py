"""greetline package initialization."""

from .collector import (
    END_OF_STREAM,
    EndOfStream,
    Entry,
    EntrySequence,
    Line,
    StreamLineReader,
    collect,
)
from .core import default_template, greet, render
from .errors import EntryTooLong, GreetlineError, InputExhausted, PreconditionViolation

__all__ = [
    "collect",
    "render",
    "greet",
    "default_template",
    "Entry",
    "EntrySequence",
    "Line",
    "EndOfStream",
    "END_OF_STREAM",
    "StreamLineReader",
    "GreetlineError",
    "InputExhausted",
    "EntryTooLong",
    "PreconditionViolation",
    "__version__",
]
__version__ = "0.1.0"
