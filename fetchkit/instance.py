"""Program configuration, per-run state and console setup."""

from __future__ import annotations

import os
import platform
import signal
import sys
import threading
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TextIO

from fetchkit import fileio
from fetchkit.format import RESET

try:
    import pwd
except ImportError:  # not available on every platform
    pwd = None  # type: ignore[assignment]

CACHE_SUBDIR = "fetchkit/"

_HIDE_CURSOR = "\033[?25l"
_SHOW_CURSOR = "\033[?25h"
_DISABLE_LINEWRAP = "\033[?7l"
_ENABLE_LINEWRAP = "\033[?7h"
_EXIT_SIGNALS = ("SIGINT", "SIGTERM", "SIGQUIT")


@dataclass
class Config:
    """User settings; module formats, keys and library paths are keyed by name."""

    logo_source: str = ""
    logo_type: str = "auto"
    logo_colors: list[str] = field(default_factory=list)
    logo_width: int = 65
    logo_height: int = 0
    logo_padding_left: int = 0
    logo_padding_right: int = 4
    logo_print_remaining: bool = True

    main_color: str = ""
    separator: str = ": "

    show_errors: bool = False
    recache: bool = False
    cache_save: bool = True
    allow_slow_operations: bool = False
    disable_linewrap: bool = True
    hide_cursor: bool = True

    formats: dict[str, str] = field(default_factory=dict)
    keys: dict[str, str] = field(default_factory=dict)
    libraries: dict[str, str] = field(default_factory=dict)

    disk_folders: str = ""
    battery_dir: str = ""
    separator_string: str = ""

    local_ip_show_ipv4: bool = True
    local_ip_show_ipv6: bool = False
    local_ip_show_loop: bool = False

    public_ip_timeout: int = 0

    os_file: str = ""
    player_name: str = ""


@dataclass
class State:
    """Facts about the running system gathered once at start-up."""

    home: str
    config_dirs: list[str]
    cache_dir: str
    sysname: str = ""
    machine: str = ""
    logo_width: int = 0
    logo_height: int = 0
    keys_height: int = 0


@dataclass
class Instance:
    """Configuration and state of one run."""

    config: Config
    state: State


def config_dirs(env: Mapping[str, str], home: str, root: str = "") -> list[str]:
    """Directories searched for configuration files, most specific first.

    Every directory appears once; trailing slashes of environment entries
    are removed.
    """
    dirs: list[str] = []

    def add(directory: str) -> None:
        if directory not in dirs:
            dirs.append(directory)

    xdg_config_home = env.get("XDG_CONFIG_HOME")
    if xdg_config_home is not None:
        dirs.append(xdg_config_home.rstrip("/"))

    add(home + "/.config")
    add(home)

    parts = (env.get("XDG_CONFIG_DIRS") or "").split(":")
    if parts[-1] == "":
        parts.pop()
    for part in parts:
        add(part.rstrip("/"))

    add(root + "/etc/xdg")
    add(root + "/etc")
    return dirs


def _make_dir(path: str, mode: int) -> None:
    try:
        os.mkdir(path, mode)
    except OSError:
        pass


def cache_dir(env: Mapping[str, str], home: str) -> str:
    """Create (if needed) and return the cache directory, ending in a slash."""
    base = env.get("XDG_CACHE_HOME") or ""
    if not base:
        base = home + "/.cache/"
    elif not base.endswith("/"):
        base += "/"

    _make_dir(base, 0o755)
    path = base + CACHE_SUBDIR
    _make_dir(path, 0o744)
    return path


def _user_home() -> str:
    if pwd is not None:
        try:
            return pwd.getpwuid(os.getuid()).pw_dir
        except (KeyError, AttributeError):
            pass
    return os.path.expanduser("~")


def create_instance(env: Mapping[str, str] | None = None, home: str | None = None) -> Instance:
    """An instance with default configuration and freshly detected state."""
    if env is None:
        env = os.environ
    if home is None:
        home = _user_home()
    uname = platform.uname()
    state = State(
        home=home,
        config_dirs=config_dirs(env, home),
        cache_dir=cache_dir(env, home),
        sysname=uname.system,
        machine=uname.machine,
    )
    return Instance(config=Config(), state=state)


def _install_exit_handlers(handler: Callable[[int, object], None]) -> dict[int, object]:
    previous: dict[int, object] = {}
    if threading.current_thread() is not threading.main_thread():
        return previous
    for name in _EXIT_SIGNALS:
        signum = getattr(signal, name, None)
        if signum is None:
            continue
        previous[signum] = signal.signal(signum, handler)
    return previous


def _restore_handlers(previous: dict[int, object]) -> None:
    for signum, handler in previous.items():
        signal.signal(signum, handler)  # type: ignore[arg-type]


@contextmanager
def console_session(config: Config, stream: TextIO | None = None) -> Iterator[TextIO]:
    """Prepare the terminal for output and restore it afterwards.

    Interrupt and termination signals end the program with status 0 after
    the terminal has been restored.
    """
    out = stream if stream is not None else sys.stdout

    def exit_on_signal(signum: int, frame: object) -> None:
        raise SystemExit(0)

    previous = _install_exit_handlers(exit_on_signal)
    try:
        out.write(RESET)
        if config.hide_cursor:
            out.write(_HIDE_CURSOR)
        if config.disable_linewrap:
            out.write(_DISABLE_LINEWRAP)
        yield out
    finally:
        if config.disable_linewrap:
            out.write(_ENABLE_LINEWRAP)
        if config.hide_cursor:
            out.write(_SHOW_CURSOR)
        out.flush()
        _restore_handlers(previous)


def list_features() -> list[str]:
    """Optional platform facilities available to this installation."""
    features = []
    if fileio.termios is not None:
        features.append("termios")
    if pwd is not None:
        features.append("pwd")
    if hasattr(signal, "SIGQUIT"):
        features.append("sigquit")
    return features