"""Line selection and output for grep-like filters."""

import logging
import sys
from typing import Iterable, List, Optional, TextIO, Tuple

from .matcher import LinePredicate
from .models import GrepOptions, Line

logger = logging.getLogger(__name__)


class Colors:
    """ANSI escape sequences used for highlighting."""
    MATCH = "\033[1;31m"
    LABEL = "\033[35m"
    LINE_NUMBER = "\033[32m"
    SEPARATOR = "\033[36m"
    RESET = "\033[0m"


def use_color(options: GrepOptions, out: TextIO) -> bool:
    """Whether output to ``out`` should be highlighted."""
    if options.color == "always":
        return True
    if options.color == "never":
        return False
    isatty = getattr(out, "isatty", None)
    return bool(isatty and isatty())


def highlight(text: str, spans: List[Tuple[int, int]]) -> str:
    """Wrap the given (start, end) spans of ``text`` in the match color."""
    if not spans:
        return text
    parts = []
    pos = 0
    for start, end in sorted(spans):
        parts.append(text[pos:start])
        parts.append(f"{Colors.MATCH}{text[start:end]}{Colors.RESET}")
        pos = end
    parts.append(text[pos:])
    return "".join(parts)


def _prefix(label: Optional[str], lineno: Optional[int], color: bool) -> str:
    parts = []
    if label is not None:
        parts.append(f"{Colors.LABEL}{label}{Colors.RESET}" if color else label)
    if lineno is not None:
        parts.append(f"{Colors.LINE_NUMBER}{lineno}{Colors.RESET}" if color else str(lineno))
    sep = f"{Colors.SEPARATOR}:{Colors.RESET}" if color else ":"
    return "".join(part + sep for part in parts)


def _count_rows(
    sections: List[List], opened: Optional[List[Optional[str]]]
) -> List[List]:
    """Pair each opened file with the count of its section, 0 if it had no lines."""
    if opened is None:
        return sections
    rows = []
    remaining = iter(sections)
    pending = next(remaining, None)
    for label in opened:
        if pending is not None and pending[0] == label:
            rows.append(pending)
            pending = next(remaining, None)
        else:
            rows.append([label, 0])
    return rows


def grep(
    source: Iterable[Line],
    predicate: LinePredicate,
    options: Optional[GrepOptions] = None,
    out: Optional[TextIO] = None,
    opened: Optional[List[Optional[str]]] = None,
) -> int:
    """
    Print the lines from ``source`` selected by ``predicate``.

    Args:
        source: Lines to filter, pulled one at a time.
        predicate: Callable deciding whether a line's text matches.
        options: Output options. Defaults to GrepOptions().
        out: Stream to print to. Defaults to sys.stdout.
        opened: Labels of the files the source opened, in order, filled in
            while it is read. With ``count``, files that had no lines are
            reported with a count of 0.

    Returns:
        Exit code: 0 if any line was selected, 1 otherwise.
    """
    options = options or GrepOptions()
    out = out or sys.stdout
    color = use_color(options, out)

    # One [label, selected count] section per file read
    sections: List[List] = []
    total = 0
    lineno = 0

    for line in source:
        if not sections or line.label != sections[-1][0] or line.lineno == 1:
            sections.append([line.label, 0])
            lineno = 0
        lineno = line.lineno if line.lineno is not None else lineno + 1

        result = predicate(line.text)
        if bool(result) == options.invert_match:
            continue

        total += 1
        sections[-1][1] += 1
        if options.quiet:
            break
        if options.count:
            continue

        text = line.text
        if color and not options.invert_match:
            text = highlight(text, getattr(result, "spans", None) or [])
        prefix = _prefix(line.label, lineno if options.line_number else None, color)
        out.write(f"{prefix}{text}\n")

    if options.count and not options.quiet:
        rows = _count_rows(sections, opened)
        if any(label is not None for label, _ in rows):
            for label, count in rows:
                out.write(f"{_prefix(label, None, color)}{count}\n")
        else:
            out.write(f"{total}\n")

    logger.debug(f"Selected {total} line(s)")
    return 0 if total else 1
