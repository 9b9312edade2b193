"""Ledger file loader: turns database text into edge records.

File layout::

    <N>
    <id> <timestamp> [<target> ...]     (N rows)

A target equal to the row's own id is a self-reference; that edge does not
exist and is dropped.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Iterator

from dag_stats.errors import DatabaseError
from dag_stats.models import EdgeRecord

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"[0-9]+")
_MAX_ECHO = 20  # longest field value quoted back in an error message


def load_records(path: Path | str) -> list[EdgeRecord]:
    """Read and parse a ledger file."""
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as fh:
            return parse_records(fh)
    except OSError as e:
        raise DatabaseError(f"unable to read {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise DatabaseError(f"unable to read {path}: not valid UTF-8 text ({e.reason})") from e


def parse_records(lines: Iterable[str]) -> list[EdgeRecord]:
    """Parse ledger lines (header included) into edge records."""
    numbered = enumerate(lines, start=1)
    expected = _parse_header(numbered)

    records = [parse_row(line, line_number) for line_number, line in numbered]
    if len(records) != expected:
        raise DatabaseError(
            f"the number of vertices ({len(records)}) isn't equal to the number declared: {expected}"
        )
    return records


def parse_row(line: str, line_number: int | None = None) -> EdgeRecord:
    """Parse a single ``<id> <timestamp> [<target> ...]`` row."""
    chunks = line.split()
    if len(chunks) < 2:
        raise DatabaseError(f"the row has too few items: {len(chunks)} of at least 2", line_number)

    source = _parse_int(chunks[0], "vertex ID", line_number, minimum=1)
    timestamp = _parse_int(chunks[1], "timestamp", line_number, minimum=0)

    targets: list[int] = []
    for chunk in chunks[2:]:
        target = _parse_int(chunk, "target ID", line_number, minimum=1)
        if target == source:
            logger.debug("dropping self-reference of vertex %d", source)
            continue
        targets.append(target)

    return EdgeRecord(source=source, targets=targets, timestamp=timestamp)


def _parse_header(numbered: Iterator[tuple[int, str]]) -> int:
    try:
        line_number, first_line = next(numbered)
    except StopIteration:
        raise DatabaseError("end of file: missing the number of vertices") from None

    # The header is a whole line of an arbitrary file; never quote it back
    expected = _parse_int(first_line.strip(), "number of vertices", line_number, minimum=0, echo=False)
    logger.debug("Extracted number of vertices in graph: %d", expected)
    return expected


def _parse_int(
    value: str,
    what: str,
    line_number: int | None,
    minimum: int,
    echo: bool = True,
) -> int:
    # ASCII digits only; int() alone also takes signs, underscores and other scripts
    if not _DIGITS.fullmatch(value):
        shown = f": {_excerpt(value)}" if echo else ""
        raise DatabaseError(f"unable to parse the {what}{shown}", line_number)
    number = int(value)
    if number < minimum:
        raise DatabaseError(f"unable to parse the {what}: {number} is below {minimum}", line_number)
    return number


def _excerpt(value: str) -> str:
    if len(value) > _MAX_ECHO:
        value = value[:_MAX_ECHO] + "..."
    return repr(value)
