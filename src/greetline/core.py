"""Core functionality for greetline: turning collected entries into a greeting."""

from __future__ import annotations

import json
import logging
from string import Formatter

from .collector import EntrySequence
from .errors import PreconditionViolation

logger = logging.getLogger(__name__)


def greet(name: str) -> str:
    """Return a friendly greeting for the given name."""

    return f"Hello, {name}!"


def default_template(n: int) -> str:
    """Return the built-in template for ``n`` entries.

    ``Hello, {0}!`` for one entry, ``Hello, {0} and {1}`` for two, and a comma
    separated list ending in ``and`` beyond that.
    """

    if n < 1:
        raise PreconditionViolation(f"entry count must be at least 1, got {n}")
    if n == 1:
        return greet("{0}")
    fields = [f"{{{i}}}" for i in range(n)]
    return "Hello, " + ", ".join(fields[:-1]) + " and " + fields[-1]


def template_fields(template: str) -> set[int]:
    """Return the positional field indexes referenced by ``template``.

    Raises:
        ValueError: The template is malformed, or uses named or automatic fields.
    """

    indexes: set[int] = set()
    for _, field_name, _, _ in Formatter().parse(template):
        if field_name is None:
            continue
        if not field_name.isdigit():
            raise ValueError(f"template field {{{field_name}}} must be a numeric index")
        indexes.add(int(field_name))
    return indexes


def check_template(template: str, n: int) -> None:
    """Raise ``ValueError`` unless ``template`` can be filled with ``n`` entries.

    Only positional fields below ``n`` are allowed, and every format spec must
    apply to plain text.
    """

    out_of_range = sorted(i for i in template_fields(template) if i >= n)
    if out_of_range:
        raise ValueError(
            f"template references field(s) {out_of_range} but only {n} entries are collected"
        )
    try:
        template.format(*[""] * n)
    except (ValueError, IndexError, KeyError) as exc:
        raise ValueError(f"template cannot be formatted with text entries: {exc}") from exc


def render(entries: EntrySequence, template: str | None = None) -> str:
    """Substitute the entries, in order, into ``template``.

    Entry text is inserted verbatim. Calling this twice with the same
    sequence returns the same string.

    Raises:
        PreconditionViolation: ``entries`` is incomplete, or ``template`` does
            not fit the number of entries.
    """

    if not entries.is_complete:
        raise PreconditionViolation(
            f"render needs {entries.target} entries, got {len(entries)}"
        )

    if template is None:
        template = default_template(entries.target)
    try:
        check_template(template, entries.target)
        output = template.format(*entries.texts())
    except (ValueError, IndexError) as exc:
        raise PreconditionViolation(f"unusable template {template!r}: {exc}") from exc

    logger.debug(json.dumps({"event": "greeting_rendered", "entries": entries.target, "length": len(output)}))
    return output
