"""File, descriptor and terminal helpers."""

from __future__ import annotations

import os
import select
import stat
import sys
from collections.abc import Iterator
from contextlib import contextmanager

try:
    import termios
except ImportError:  # not available on every platform
    termios = None  # type: ignore[assignment]

_FILE_MODE = 0o644
_DIR_MODE = 0o744
_RESPONSE_SIZE = 511


def _open_for_writing(path: str | os.PathLike[str]) -> int:
    return os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, _FILE_MODE)


def write_file_content(path: str | os.PathLike[str], content: str | bytes) -> bool:
    """Write ``content`` to ``path``, creating missing parent folders.

    Returns False if the file could not be written.
    """
    data = content.encode("utf-8") if isinstance(content, str) else bytes(content)
    try:
        fd = _open_for_writing(path)
    except OSError:
        parent = os.path.dirname(os.fspath(path))
        try:
            if parent:
                os.makedirs(parent, mode=_DIR_MODE, exist_ok=True)
            fd = _open_for_writing(path)
        except OSError:
            return False

    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
    except OSError:
        return False
    return True


def read_file_content(path: str | os.PathLike[str]) -> str | None:
    """Contents of ``path`` without trailing newlines and spaces.

    Returns None if the file cannot be opened.
    """
    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError:
        return None
    return data.decode("utf-8", errors="replace").rstrip("\n").rstrip(" ")


def file_exists(path: str | os.PathLike[str], mode: int) -> bool:
    """True if ``path`` exists and its file type equals ``mode`` (e.g. S_IFREG)."""
    try:
        info = os.stat(path)
    except OSError:
        return False
    return stat.S_IFMT(info.st_mode) == mode


def _flush_std_streams() -> None:
    for stream in (sys.stdout, sys.stderr):
        try:
            stream.flush()
        except (AttributeError, OSError, ValueError):
            pass


@contextmanager
def suppressed_output() -> Iterator[None]:
    """Send everything written to file descriptors 1 and 2 to the null device."""
    _flush_std_streams()
    saved_out = os.dup(1)
    saved_err = os.dup(2)
    null = os.open(os.devnull, os.O_WRONLY)
    try:
        os.dup2(null, 1)
        os.dup2(null, 2)
        yield
    finally:
        _flush_std_streams()
        os.dup2(saved_out, 1)
        os.dup2(saved_err, 2)
        for fd in (saved_out, saved_err, null):
            os.close(fd)


def terminal_response(request: str, timeout: float = 0.035) -> str | None:
    """Write ``request`` to the terminal and read its immediate reply.

    Echo and canonical mode are switched off while waiting up to ``timeout``
    seconds. Returns None when stdin is not a terminal or nothing arrives.
    """
    if termios is None:
        return None
    try:
        fd = sys.stdin.fileno()
        old = termios.tcgetattr(fd)
    except (AttributeError, OSError, ValueError, termios.error):
        return None

    new = list(old)
    new[3] = new[3] & ~(termios.ICANON | termios.ECHO)
    try:
        termios.tcsetattr(fd, termios.TCSANOW, new)
    except termios.error:
        return None

    try:
        sys.stdout.write(request)
        sys.stdout.flush()
        ready, _, _ = select.select([fd], [], [], timeout)
        if not ready:
            return None
        data = os.read(fd, _RESPONSE_SIZE)
    except OSError:
        return None
    finally:
        termios.tcsetattr(fd, termios.TCSANOW, old)

    if not data:
        return None
    return data.decode("utf-8", errors="replace")