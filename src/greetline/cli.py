"""Command line entry point: ``greetline`` / ``python -m greetline``."""

from __future__ import annotations

import argparse
import io
import json
import logging
import sys
from typing import List, Optional, TextIO

from pydantic import ValidationError

from . import __version__
from .collector import DEFAULT_MAX_LENGTH, DEFAULT_PROMPT, collect
from .config import GreetConfig, env_log_level
from .core import render
from .errors import GreetlineError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 2
PROG = "greetline"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Read names from standard input, one per line, and print a greeting.",
    )
    parser.add_argument("-n", "--count", type=int, default=2, help="Number of entries to read (default: 2)")
    parser.add_argument("--prompt", default=DEFAULT_PROMPT, help="Prompt written before each read")
    bound = parser.add_mutually_exclusive_group()
    bound.add_argument(
        "--max-length",
        type=int,
        default=DEFAULT_MAX_LENGTH,
        help=f"Reject entries longer than this (default: {DEFAULT_MAX_LENGTH})",
    )
    bound.add_argument("--unbounded", action="store_true", help="Do not limit entry length")
    parser.add_argument("--template", default=None, help="Greeting template using {0}, {1}, ... fields")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level for stderr (default: $GREETLINE_LOG_LEVEL or WARNING)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(level: str, stream: TextIO) -> None:
    """Send log records to ``stream`` (stderr), leaving stdout for the greeting."""

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s %(message)s"))
    root = logging.getLogger(PROG)
    root.handlers[:] = [handler]
    root.setLevel(level)
    root.propagate = False


def _passthrough(stream: TextIO) -> TextIO:
    """Carry undecodable bytes through as surrogates instead of failing mid-read."""

    if isinstance(stream, io.TextIOWrapper):
        stream.reconfigure(errors="surrogateescape")
    return stream


def _report(stderr: TextIO, code: str, message: str) -> None:
    stderr.write(f"{PROG}: {code}: {message}\n")
    stderr.flush()


def main(
    argv: Optional[List[str]] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    """Run one collect-then-render pass and return the process exit code."""

    if stdin is None:
        stdin = _passthrough(sys.stdin)
    if stdout is None:
        stdout = _passthrough(sys.stdout)
    stderr = stderr if stderr is not None else sys.stderr

    args = build_parser().parse_args(argv)

    try:
        config = GreetConfig(
            count=args.count,
            prompt=args.prompt,
            max_length=None if args.unbounded else args.max_length,
            template=args.template,
            log_level=(args.log_level or env_log_level()).upper(),
        )
    except ValidationError as exc:
        for err in exc.errors():
            where = ".".join(str(p) for p in err["loc"]) or "config"
            _report(stderr, "INVALID_CONFIG", f"{where}: {err['msg']}")
        return EXIT_USAGE

    configure_logging(config.log_level, stderr)
    logger.debug(json.dumps({"event": "run_started", "count": config.count, "max_length": config.max_length}))

    try:
        entries = collect(
            config.count,
            stdin,
            stdout,
            prompt=config.prompt,
            max_length=config.max_length,
        )
        greeting = render(entries, config.resolved_template)
    except GreetlineError as exc:
        logger.info(json.dumps({"event": "run_failed", "code": exc.code}))
        _report(stderr, exc.code, exc.message)
        return exc.exit_code

    stdout.write(greeting + "\n")
    stdout.flush()
    logger.info(json.dumps({"event": "run_completed", "count": config.count}))
    return EXIT_OK


def run() -> None:
    """Console-script wrapper around :func:`main`."""

    sys.exit(main())


if __name__ == "__main__":
    run()
