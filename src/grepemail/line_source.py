"""Reading input lines from files or standard input."""

import logging
import sys
from typing import Callable, Iterator, List, Optional, TextIO

from .models import Line

logger = logging.getLogger(__name__)

WarningSink = Callable[[str], None]


def _strip_newline(text: str) -> str:
    return text[:-1] if text.endswith("\n") else text


def _default_stdin() -> TextIO:
    stdin = sys.stdin
    # Decode like files: UTF-8, undecodable bytes replaced
    if hasattr(stdin, "reconfigure"):
        stdin.reconfigure(encoding="utf-8", errors="replace")
    return stdin


def read_lines(
    files: Optional[List[str]] = None,
    stdin: Optional[TextIO] = None,
    warn: Optional[WarningSink] = None,
    opened: Optional[Callable[[Optional[str]], None]] = None,
) -> Iterator[Line]:
    """
    Yield lines from the given files in order, or from standard input.

    Lines are labelled with their file name when more than one file is
    given, and numbered from 1 within each file. Files that cannot be
    opened are reported to ``warn`` and skipped.

    Args:
        files: Paths to read. Empty or None reads standard input.
        stdin: Stream to use as standard input. Defaults to sys.stdin,
            decoded as UTF-8 with undecodable bytes replaced.
        warn: Callable receiving warning messages. Defaults to logging them.
        opened: Callable receiving the label of each file as it is opened,
            including files that turn out to be empty.

    Yields:
        Line objects with the trailing newline removed.
    """
    if warn is None:
        warn = logger.warning

    if not files:
        for lineno, text in enumerate(stdin if stdin is not None else _default_stdin(), 1):
            yield Line(_strip_newline(text), lineno=lineno)
        return

    show_label = len(files) > 1
    for path in files:
        logger.debug(f"Opening {path} ...")
        try:
            f = open(path, "r", encoding="utf-8", errors="replace")
        except OSError as e:
            warn(f"Can't open '{path}': {e.strerror or e}, skipped")
            continue

        label = path if show_label else None
        if opened is not None:
            opened(label)
        with f:
            for lineno, text in enumerate(f, 1):
                yield Line(_strip_newline(text), label, lineno)
