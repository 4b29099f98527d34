"""Line-oriented input collection.

The collector prompts on an output sink, reads one line per prompt from a line
reader and keeps the text with its line terminator removed. It stops once the
target number of entries is reached, or fails if the input ends first.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Iterator, List, Protocol, TextIO, Union

from .errors import EntryTooLong, InputExhausted, PreconditionViolation

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "Please enter a name:"
DEFAULT_MAX_LENGTH = 99


@dataclass(frozen=True)
class Line:
    """One raw line as read from the source, terminator included if present."""

    text: str


@dataclass(frozen=True)
class EndOfStream:
    """Marker returned once the source has no more lines."""


END_OF_STREAM = EndOfStream()

ReadResult = Union[Line, EndOfStream]


class LineReader(Protocol):
    def read_line(self) -> ReadResult: ...


class StreamLineReader:
    """Adapt a text stream (``sys.stdin``, ``io.StringIO``...) to :class:`LineReader`."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def read_line(self) -> ReadResult:
        raw = self._stream.readline()
        # readline() only returns "" at end of stream; a blank line is "\n"
        if raw == "":
            return END_OF_STREAM
        return Line(raw)


@dataclass(frozen=True)
class Entry:
    """A single collected entry.

    Attributes:
        index: 0-based position of the entry in its sequence.
        text: The entry text, without its line terminator.
    """

    index: int
    text: str


class EntrySequence:
    """An ordered collection of :class:`Entry` objects with a fixed target size.

    The sequence never grows past ``target``; it is complete when it holds
    exactly ``target`` entries.
    """

    def __init__(self, target: int) -> None:
        if target < 1:
            raise PreconditionViolation(f"entry count must be at least 1, got {target}")
        self.target = target
        self._entries: List[Entry] = []

    @classmethod
    def of(cls, *texts: str) -> "EntrySequence":
        """Build a complete sequence from literal texts."""

        seq = cls(len(texts))
        for text in texts:
            seq.append(text)
        return seq

    def append(self, text: str) -> Entry:
        if self.is_complete:
            raise PreconditionViolation(
                f"sequence already holds its {self.target} entries"
            )
        entry = Entry(index=len(self._entries), text=text)
        self._entries.append(entry)
        return entry

    @property
    def is_complete(self) -> bool:
        return len(self._entries) == self.target

    def texts(self) -> list[str]:
        return [e.text for e in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> Entry:
        return self._entries[index]

    def __repr__(self) -> str:
        return f"EntrySequence(target={self.target}, texts={self.texts()!r})"


def strip_terminator(text: str) -> str:
    """Remove one trailing line terminator (``\\n``, ``\\r\\n`` or ``\\r``)."""

    if text.endswith("\r\n"):
        return text[:-2]
    if text.endswith("\n") or text.endswith("\r"):
        return text[:-1]
    return text


def _as_reader(source: LineReader | TextIO) -> LineReader:
    if hasattr(source, "read_line"):
        return source  # type: ignore[return-value]
    return StreamLineReader(source)  # type: ignore[arg-type]


def collect(
    n: int,
    source: LineReader | TextIO,
    sink: TextIO,
    prompt: str = DEFAULT_PROMPT,
    max_length: int | None = DEFAULT_MAX_LENGTH,
) -> EntrySequence:
    """Collect exactly ``n`` entries from ``source``.

    One prompt line is written to ``sink`` before each read.

    Args:
        n: Number of entries to collect; must be at least 1.
        source: A :class:`LineReader`, or a text stream to wrap in one.
        sink: Where prompts are written.
        prompt: Prompt text, written followed by a newline.
        max_length: Upper bound on entry length, or ``None`` for no bound.

    Returns:
        A complete :class:`EntrySequence`.

    Raises:
        InputExhausted: The source ended before ``n`` entries were read.
        EntryTooLong: A stripped line was longer than ``max_length``.
        PreconditionViolation: ``n`` is less than 1.
    """

    entries = EntrySequence(n)
    reader = _as_reader(source)

    while not entries.is_complete:
        sink.write(prompt + "\n")
        sink.flush()

        result = reader.read_line()
        if isinstance(result, EndOfStream):
            logger.info(
                json.dumps({"event": "input_exhausted", "expected": n, "collected": len(entries)})
            )
            raise InputExhausted(expected=n, collected=len(entries))

        text = strip_terminator(result.text)
        if max_length is not None and len(text) > max_length:
            raise EntryTooLong(index=len(entries), length=len(text), max_length=max_length)

        entry = entries.append(text)
        logger.debug(json.dumps({"event": "entry_collected", "index": entry.index, "length": len(text)}))

    logger.info(json.dumps({"event": "collection_complete", "count": len(entries)}))
    return entries
