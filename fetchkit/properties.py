"""Extraction of ``key = value`` style properties from text and files."""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

_BLANK = " \t"
_QUOTES = "\"'"


@dataclass
class PropQuery:
    """A key prefix to search for and the value found for it so far.

    Queries whose value is already non-empty are not searched again.
    """

    start: str
    value: str = ""


def parse_prop_line(line: str, start: str) -> str | None:
    """Return the value of ``line`` if it begins with ``start``, else None.

    Any run of blanks in ``start`` matches any run of blanks (even none) in
    the line. Values may be quoted; a prefix ending in ``>`` reads up to the
    next ``<``. Trailing spaces of the value are dropped.
    """
    if not line or line[0] == "\0":
        return None

    length = len(line)
    pos = 0
    while pos < length and line[pos] in _BLANK:
        pos += 1

    index = 0
    start_length = len(start)
    while index < start_length:
        if start[index] in _BLANK:
            while index < start_length and start[index] in _BLANK:
                index += 1
            while pos < length and line[pos] in _BLANK:
                pos += 1
            continue
        if pos >= length or line[pos] != start[index] or line[pos] == "\0":
            return None
        pos += 1
        index += 1

    end = "\n"
    if pos > 0 and line[pos - 1] == ">":
        end = "<"

    while pos < length and line[pos] in _BLANK:
        pos += 1

    if pos < length and line[pos] in _QUOTES:
        end = line[pos]
        pos += 1

    stop = pos
    while stop < length and line[stop] not in (end, "\n", "\0"):
        stop += 1

    return line[pos:stop].rstrip(" ")


def parse_prop_lines(lines: str, start: str) -> str | None:
    """Return the value from the first line of ``lines`` that matches."""
    for line in lines.split("\n"):
        value = parse_prop_line(line, start)
        if value is not None:
            return value
    return None


def _all_set(queries: Iterable[PropQuery]) -> bool:
    return all(query.value for query in queries)


def parse_prop_file_values(filename: str | os.PathLike[str], queries: Sequence[PropQuery]) -> bool:
    """Fill the empty queries from ``filename``; the last matching line wins.

    Returns True if the file could be read, or if every query already had
    a value (in which case the file is not touched).
    """
    pending = [query for query in queries if not query.value]
    if not pending:
        return True

    try:
        handle = open(filename, encoding="utf-8", errors="replace", newline="")
    except OSError:
        return False

    with handle:
        for line in handle:
            for query in pending:
                value = parse_prop_line(line, query.start)
                if value is not None:
                    query.value = value
    return True


def parse_prop_file(filename: str | os.PathLike[str], start: str) -> str:
    """Value of the last line of ``filename`` starting with ``start``, or ""."""
    query = PropQuery(start)
    parse_prop_file_values(filename, [query])
    return query.value


def parse_prop_file_home_values(home: str, relative_file: str, queries: Sequence[PropQuery]) -> bool:
    """Like :func:`parse_prop_file_values` for a file below ``home``."""
    return parse_prop_file_values(f"{home}/{relative_file}", queries)


def parse_prop_file_config_values(
    config_dirs: Iterable[str], relative_file: str, queries: Sequence[PropQuery]
) -> bool:
    """Search ``relative_file`` in each config dir until every query is set.

    Returns True if the file was found in at least one of the directories.
    """
    separator = "" if relative_file.startswith("/") else "/"
    found = False
    for base_dir in config_dirs:
        if parse_prop_file_values(f"{base_dir}{separator}{relative_file}", queries):
            found = True
        if _all_set(queries):
            break
    return found