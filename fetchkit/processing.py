"""Running helper programs and collecting their output."""

from __future__ import annotations

import subprocess
from collections.abc import Sequence


def process_stdout(argv: Sequence[str]) -> str:
    """Run ``argv`` and return its standard output.

    Standard error is discarded; trailing newlines and then trailing spaces
    are removed. Returns "" if the program cannot be started.
    """
    args = list(argv)
    if not args:
        raise ValueError("argv must name a program")
    try:
        completed = subprocess.run(
            args,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError:
        return ""
    return completed.stdout.decode("utf-8", errors="replace").rstrip("\n").rstrip(" ")