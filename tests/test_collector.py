from __future__ import annotations

import io

import pytest

from greetline import (
    END_OF_STREAM,
    EntrySequence,
    EntryTooLong,
    InputExhausted,
    Line,
    PreconditionViolation,
    StreamLineReader,
    collect,
)
from greetline.collector import ReadResult, strip_terminator


class ScriptedReader:
    """Line reader that replays fixed lines and counts reads."""

    def __init__(self, *lines: str) -> None:
        self._lines = list(lines)
        self.reads = 0

    def read_line(self) -> ReadResult:
        self.reads += 1
        if not self._lines:
            return END_OF_STREAM
        return Line(self._lines.pop(0))


def test_collect_returns_exactly_n_stripped_entries() -> None:
    sink = io.StringIO()
    entries = collect(2, io.StringIO("Alice\nBob\n"), sink)

    assert len(entries) == 2
    assert entries.is_complete
    assert entries.texts() == ["Alice", "Bob"]
    assert [e.index for e in entries] == [0, 1]


def test_collect_writes_one_prompt_per_entry() -> None:
    sink = io.StringIO()
    collect(3, io.StringIO("a\nb\nc\n"), sink, prompt="Name?")

    assert sink.getvalue() == "Name?\nName?\nName?\n"


def test_collect_stops_reading_at_target() -> None:
    reader = ScriptedReader("one\n", "two\n", "three\n")
    entries = collect(2, reader, io.StringIO())

    assert entries.texts() == ["one", "two"]
    assert reader.reads == 2


@pytest.mark.parametrize(
    "text",
    ["Alice", "", "  Alice  ", "tab\there", "{0} braces", "Zoë 名前", "trailing space "],
)
def test_line_roundtrip_preserves_text(text: str) -> None:
    entries = collect(1, io.StringIO(text + "\n"), io.StringIO())
    assert entries[0].text == text


def test_empty_line_is_a_valid_entry() -> None:
    entries = collect(2, io.StringIO("\nBob\n"), io.StringIO())
    assert entries.texts() == ["", "Bob"]


def test_crlf_and_missing_final_terminator() -> None:
    entries = collect(2, io.StringIO("Alice\r\nBob"), io.StringIO())
    assert entries.texts() == ["Alice", "Bob"]


def test_only_one_terminator_is_stripped() -> None:
    assert strip_terminator("a\n") == "a"
    assert strip_terminator("a\r\n") == "a"
    assert strip_terminator("a\r") == "a"
    assert strip_terminator("a") == "a"
    assert strip_terminator("a\n\n") == "a\n"


def test_input_exhausted_before_target() -> None:
    sink = io.StringIO()
    with pytest.raises(InputExhausted) as excinfo:
        collect(2, io.StringIO("Alice\n"), sink)

    assert excinfo.value.expected == 2
    assert excinfo.value.collected == 1
    assert excinfo.value.code == "INPUT_EXHAUSTED"
    assert excinfo.value.exit_code != 0
    # the second prompt was written before the failed read
    assert sink.getvalue().count("\n") == 2


def test_input_exhausted_on_empty_stream() -> None:
    with pytest.raises(InputExhausted) as excinfo:
        collect(1, io.StringIO(""), io.StringIO())
    assert excinfo.value.collected == 0


def test_entry_too_long_is_rejected_not_truncated() -> None:
    with pytest.raises(EntryTooLong) as excinfo:
        collect(2, io.StringIO("ok\n" + "x" * 11 + "\n"), io.StringIO(), max_length=10)

    assert excinfo.value.index == 1
    assert excinfo.value.length == 11
    assert excinfo.value.max_length == 10


def test_entry_at_bound_is_accepted_and_terminator_not_counted() -> None:
    entries = collect(1, io.StringIO("x" * 10 + "\r\n"), io.StringIO(), max_length=10)
    assert entries[0].text == "x" * 10


def test_unbounded_accepts_long_lines() -> None:
    long_text = "y" * 5000
    entries = collect(1, io.StringIO(long_text + "\n"), io.StringIO(), max_length=None)
    assert entries[0].text == long_text


def test_collect_rejects_non_positive_count() -> None:
    with pytest.raises(PreconditionViolation):
        collect(0, io.StringIO("a\n"), io.StringIO())


def test_stream_line_reader_distinguishes_blank_line_from_end() -> None:
    reader = StreamLineReader(io.StringIO("\n"))
    assert reader.read_line() == Line("\n")
    assert reader.read_line() == END_OF_STREAM


def test_entry_sequence_never_exceeds_target() -> None:
    seq = EntrySequence(1)
    seq.append("only")
    with pytest.raises(PreconditionViolation):
        seq.append("extra")
    assert len(seq) == 1


def test_entry_sequence_of_builds_complete_sequence() -> None:
    seq = EntrySequence.of("a", "b")
    assert seq.target == 2
    assert seq.is_complete
    assert seq[1].text == "b"
