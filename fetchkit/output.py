"""Module output: keys, format strings, errors and the value cache."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import IO, Any, TextIO

from fetchkit.fileio import read_file_content, write_file_content
from fetchkit.format import RESET, format_arg, parse_format_string
from fetchkit.instance import Instance

VALUE_EXTENSION = "ffcv"
SPLIT_EXTENSION = "ffcs"
VERSION_FILE = "cacheversion.ffv"
ERROR_MODIFIER = "\033[1;31m"


def validate_cache(cache_dir: str, version: str, recache: bool = False) -> bool:
    """Tell whether the cache must be rebuilt.

    A cache written by another version is invalid; the current version is
    then recorded in ``cache_dir``.
    """
    if recache:
        return True
    path = cache_dir + VERSION_FILE
    if read_file_content(path) == version:
        return False
    write_file_content(path, version)
    return True


def color_code(value: str) -> str:
    """Terminal escape sequence selecting the colour ``value``."""
    return "\033[" + value + "m"


def _cache_path(cache_dir: str, module_name: str, extension: str) -> str:
    return f"{cache_dir}{module_name}.{extension}"


def _open_or_none(path: str) -> IO[str] | None:
    try:
        return open(path, "w", encoding="utf-8", newline="")
    except OSError:
        return None


class CacheWriter:
    """Open cache files of one module: whole values and split arguments."""

    def __init__(self, cache_dir: str, module_name: str) -> None:
        self.value_file = _open_or_none(_cache_path(cache_dir, module_name, VALUE_EXTENSION))
        self.split_file = _open_or_none(_cache_path(cache_dir, module_name, SPLIT_EXTENSION))

    def write(self, value: str, arguments: Sequence[Any]) -> None:
        """Append one value and its format arguments, each ended by a NUL."""
        if self.value_file is not None:
            self.value_file.write(value + "\0")
        if self.split_file is not None:
            for argument in arguments:
                self.split_file.write(format_arg(argument) + "\0")

    def close(self) -> None:
        """Close whichever files were opened."""
        for handle in (self.value_file, self.split_file):
            if handle is not None:
                handle.close()

    def __enter__(self) -> CacheWriter:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class Printer:
    """Writes module lines for one instance to a text stream."""

    def __init__(self, instance: Instance, stream: TextIO | None = None) -> None:
        self.instance = instance
        self.stream = stream if stream is not None else sys.stdout

    def _print_key(self, module_name: str, module_index: int, key_format: str | None) -> None:
        if key_format:
            key = parse_format_string(key_format, None, [module_index])
        elif module_index == 0:
            key = module_name
        else:
            key = f"{module_name} {module_index}"
        self.stream.write(key + self.instance.config.separator)

    def _print_line(self, text: str) -> None:
        self.stream.write(text + "\n")

    def print_error(
        self,
        module_name: str,
        module_index: int,
        key_format: str | None,
        format_string: str | None,
        num_args: int,
        message: str,
    ) -> None:
        """Report a failed module, if errors are to be shown."""
        if not self.instance.config.show_errors:
            return
        if not format_string:
            self._print_key(module_name, module_index, key_format)
            self._print_line(ERROR_MODIFIER + message + RESET)
            return
        self.print_format_string(
            module_name, module_index, key_format, format_string, message, [None] * num_args
        )

    def print_format_string(
        self,
        module_name: str,
        module_index: int,
        key_format: str | None,
        format_string: str,
        error: str | None,
        arguments: Sequence[Any],
    ) -> None:
        """Print the key followed by the expanded format string."""
        text = parse_format_string(format_string, error, arguments)
        if text:
            self._print_key(module_name, module_index, key_format)
            self._print_line(text)

    def open_cache(self, module_name: str) -> CacheWriter:
        """Start a fresh cache for ``module_name``."""
        return CacheWriter(self.instance.state.cache_dir, module_name)

    def _read_cache(self, module_name: str, extension: str) -> str:
        path = _cache_path(self.instance.state.cache_dir, module_name, extension)
        return (read_file_content(path) or "").rstrip("\0")

    def print_from_cache(
        self,
        module_name: str,
        key_format: str | None,
        format_string: str | None,
        num_args: int,
    ) -> bool:
        """Print cached output of a module; False if nothing could be used."""
        if self.instance.config.recache:
            return False
        if not format_string:
            return self._print_cached_values(module_name, key_format)
        return self._print_cached_format(module_name, key_format, format_string, num_args)

    def _print_cached_values(self, module_name: str, key_format: str | None) -> bool:
        content = self._read_cache(module_name, VALUE_EXTENSION)
        if not content:
            return False
        entries = content.split("\0")
        single = len(entries) == 1
        for number, entry in enumerate(entries, 1):
            self._print_key(module_name, 0 if single else number, key_format)
            self._print_line(entry)
        return True

    def _print_cached_format(
        self, module_name: str, key_format: str | None, format_string: str, num_args: int
    ) -> bool:
        content = self._read_cache(module_name, SPLIT_EXTENSION)
        if not content or num_args <= 0:
            return False
        entries = content.split("\0")
        single = len(entries) == num_args
        chunks = zip(*[iter(entries)] * num_args)
        printed = 0
        for number, chunk in enumerate(chunks, 1):
            self.print_format_string(
                module_name, 0 if single else number, key_format, format_string, None, chunk
            )
            printed = number
        return printed > 0

    def print_and_append_to_cache(
        self,
        module_name: str,
        module_index: int,
        key_format: str | None,
        cache: CacheWriter,
        value: str,
        format_string: str | None,
        arguments: Sequence[Any],
    ) -> None:
        """Print one module line and record it in ``cache``."""
        if not format_string:
            self._print_key(module_name, module_index, key_format)
            self._print_line(value)
        else:
            self.print_format_string(
                module_name, module_index, key_format, format_string, None, arguments
            )
        cache.write(value, arguments)

    def print_and_write_to_cache(
        self,
        module_name: str,
        key_format: str | None,
        value: str,
        format_string: str | None,
        arguments: Sequence[Any],
    ) -> None:
        """Print a single-line module and replace its cache with it."""
        with self.open_cache(module_name) as cache:
            self.print_and_append_to_cache(
                module_name, 0, key_format, cache, value, format_string, arguments
            )