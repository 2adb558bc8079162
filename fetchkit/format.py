"""Placeholder-based format strings used to render module output."""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

RESET = "\033[0m"

_ERROR_KEYS = frozenset({"e", "error", "0"})
_INDEX = re.compile(r"\s*\+?(\d+)")


def format_arg(value: Any) -> str:
    """Render one format argument as text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return "%g" % value
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    raise TypeError(f"unsupported format argument type: {type(value).__name__}")


def arg_is_set(value: Any) -> bool:
    """Tell whether an argument counts as set for conditional placeholders.

    Numbers must be positive and strings non-empty; lists and None never count.
    """
    if value is None or isinstance(value, (list, tuple)):
        return False
    if isinstance(value, (int, float)):
        return value > 0
    if isinstance(value, str):
        return value != ""
    return False


def _argument_index(value: str, count: int) -> int | None:
    """Zero-based index named by a placeholder, or None when it is invalid."""
    if value.startswith("-"):
        return None
    match = _INDEX.match(value)
    if match is None:
        return None
    number = int(match.group(1))
    if number < 1 or number > count:
        return None
    return number - 1


def _skip_past(format_string: str, start: int, terminator: str) -> int:
    found = format_string.find(terminator, start)
    if found == -1:
        found = len(format_string)
    return found + len(terminator) - 1


def parse_format_string(
    format_string: str, error: str | None, arguments: Sequence[Any]
) -> str:
    """Expand placeholders in ``format_string`` with ``arguments``.

    Supports ``{}``, ``{n}``, ``{{``, ``{e}``, ``{-}``, ``{?n}..{?}``,
    ``{/n}..{/}`` and ``{#code}..{#}``. Trailing spaces are removed and a
    reset sequence is appended.
    """
    args = list(arguments)
    out: list[str] = []
    counter = 0
    open_ifs = open_not_ifs = open_colors = 0
    length = len(format_string)
    has_error = bool(error)

    def append_empty(placeholder: str) -> None:
        nonlocal counter
        if counter >= len(args):
            out.append(placeholder)
        else:
            out.append(format_arg(args[counter]))
            counter += 1

    def append_invalid(prefix: str, value: str, pos: int) -> None:
        out.append(prefix + value)
        if pos < length:
            out.append("}")

    i = 0
    while i < length:
        char = format_string[i]
        if char != "{":
            out.append(char)
            i += 1
            continue

        if i == length - 1:
            append_empty("{")
            i += 1
            continue

        i += 1
        char = format_string[i]
        if char == "{":
            out.append("{")
            i += 1
            continue
        if char == "}":
            append_empty("{}")
            i += 1
            continue

        end = format_string.find("}", i)
        if end == -1:
            end = length
        value = format_string[i:end]
        i = end

        if value.lower() in _ERROR_KEYS:
            out.append(error or "")
        elif value == "-":
            break
        elif value == "?":
            if open_ifs:
                open_ifs -= 1
            else:
                append_invalid("{", value, i)
        elif value == "/":
            if open_not_ifs:
                open_not_ifs -= 1
            else:
                append_invalid("{", value, i)
        elif value == "#":
            if open_colors:
                out.append(RESET)
                open_colors -= 1
            else:
                append_invalid("{", value, i)
        elif value[0] == "?":
            condition = value[1:]
            if condition.lower() in _ERROR_KEYS and has_error:
                open_ifs += 1
            else:
                index = _argument_index(condition, len(args))
                if index is None:
                    append_invalid("{?", condition, i)
                elif arg_is_set(args[index]):
                    open_ifs += 1
                else:
                    i = _skip_past(format_string, i, "{?}")
        elif value[0] == "/":
            condition = value[1:]
            if condition.lower() in _ERROR_KEYS and not has_error:
                open_not_ifs += 1
            else:
                index = _argument_index(condition, len(args))
                if index is None:
                    append_invalid("{/", condition, i)
                elif not arg_is_set(args[index]):
                    open_not_ifs += 1
                else:
                    i = _skip_past(format_string, i, "{/}")
        elif value[0] == "#":
            open_colors += 1
            out.append("\033[" + value[1:] + "m")
        else:
            index = _argument_index(value, len(args))
            if index is None:
                append_invalid("{", value, i)
            else:
                out.append(format_arg(args[index]))

        i += 1

    return "".join(out).rstrip(" ") + RESET