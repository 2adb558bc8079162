"""Window manager and desktop environment detection."""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping

from fetchkit import displayserver
from fetchkit.displayserver import (
    PROTOCOL_TTY,
    PROTOCOL_X11,
    DisplayServerResult,
    detect_wayland,
    parse_drm,
)
from fetchkit.fileio import read_file_content
from fetchkit.instance import Instance
from fetchkit.parsing import parse_semver, str_set
from fetchkit.processing import process_stdout
from fetchkit.properties import (
    PropQuery,
    parse_prop_file,
    parse_prop_file_config_values,
    parse_prop_file_values,
    parse_prop_lines,
)

USR_DIR = "/usr"
PROC_DIR = "/proc"

_DESKTOP_VARIABLES = (
    "XDG_CURRENT_DESKTOP",
    "XDG_SESSION_DESKTOP",
    "CURRENT_DESKTOP",
    "SESSION_DESKTOP",
    "DESKTOP_SESSION",
)

_WM_PRETTY_NAMES = {
    "kwin_wayland": "KWin",
    "kwin_x11": "KWin",
    "kwin": "KWin",
    "sway": "Sway",
    "weston": "Weston",
    "wayfire": "Wayfire",
    "openbox": "Openbox",
    "xfwm4": "Xfwm4",
    "marco": "Marco",
    "xmonad": "XMonad",
    "gnome-session-binary": "Mutter",
    "mutter": "Mutter",
    "cinnamon-session": "Muffin",
    "muffin": "Muffin",
}

# Window managers whose pretty name is their process name
_WM_PLAIN_NAMES = frozenset({"dwm", "bspwm", "tinywm"})


def desktop_from_env(env: Mapping[str, str] | None = None) -> str | None:
    """The desktop named by the environment, or None if nothing hints at one."""
    if env is None:
        env = os.environ

    for name in _DESKTOP_VARIABLES:
        value = env.get(name)
        if str_set(value):
            return value

    if any(name in env for name in ("KDE_FULL_SESSION", "KDE_SESSION_UID", "KDE_SESSION_VERSION")):
        return "KDE"
    if "GNOME_DESKTOP_SESSION_ID" in env:
        return "Gnome"
    if "MATE_DESKTOP_SESSION_ID" in env:
        return "Mate"
    if "TDE_FULL_SESSION" in env:
        return "Trinity"
    return None


def _apply_pretty_name_if_wm(result: DisplayServerResult, process_name: str | None) -> None:
    if not str_set(process_name):
        return
    assert process_name is not None

    lowered = process_name.lower()
    if lowered in _WM_PRETTY_NAMES:
        result.wm_pretty_name = _WM_PRETTY_NAMES[lowered]
    elif lowered in _WM_PLAIN_NAMES:
        result.wm_pretty_name = process_name

    if result.wm_pretty_name and not result.wm_process_name:
        result.wm_process_name = process_name


def _apply_better_wm(result: DisplayServerResult, process_name: str | None) -> None:
    if not str_set(process_name):
        return
    assert process_name is not None

    _apply_pretty_name_if_wm(result, process_name)
    result.wm_process_name = process_name
    if not result.wm_pretty_name:
        result.wm_pretty_name = result.wm_process_name


def _after_first(text: str, char: str) -> str:
    return text.partition(char)[2] if char in text else text


def _before_first(text: str, char: str) -> str:
    return text.partition(char)[0]


def _get_kde(instance: Instance, result: DisplayServerResult, env: Mapping[str, str]) -> None:
    result.de_process_name = "plasmashell"
    result.de_pretty_name = "KDE Plasma"
    result.de_version = parse_prop_file(
        f"{USR_DIR}/share/xsessions/plasma.desktop", "X-KDE-PluginInfo-Version ="
    )
    _apply_better_wm(result, env.get("KDEWM"))


def _get_gnome(instance: Instance, result: DisplayServerResult, env: Mapping[str, str]) -> None:
    result.de_process_name = "gnome-shell"
    result.de_pretty_name = "GNOME"
    result.de_version = parse_prop_file(
        f"{USR_DIR}/share/gnome-shell/org.gnome.Extensions", "version :"
    )


def _get_cinnamon(instance: Instance, result: DisplayServerResult, env: Mapping[str, str]) -> None:
    result.de_process_name = "cinnamon"
    result.de_pretty_name = "Cinnamon"
    result.de_version = parse_prop_file(
        f"{USR_DIR}/share/applications/cinnamon.desktop", "X-GNOME-Bugzilla-Version ="
    )


def _get_mate(instance: Instance, result: DisplayServerResult, env: Mapping[str, str]) -> None:
    result.de_process_name = "mate-session"
    result.de_pretty_name = "MATE"

    major, minor, micro = PropQuery("<platform>"), PropQuery("<minor>"), PropQuery("<micro>")
    parse_prop_file_values(
        f"{USR_DIR}/share/mate-about/mate-version.xml", [major, minor, micro]
    )
    result.de_version = parse_semver(major.value, minor.value, micro.value)

    if not result.de_version and instance.config.allow_slow_operations:
        output = process_stdout(["mate-session", "--version"])
        result.de_version = _after_first(output, " ").strip(" ")


def _get_xfce4(instance: Instance, result: DisplayServerResult, env: Mapping[str, str]) -> None:
    result.de_process_name = "xfce4-session"
    result.de_pretty_name = "Xfce4"
    result.de_version = parse_prop_file(
        f"{USR_DIR}/share/gtk-doc/html/libxfce4ui/index.html",
        '<div><p class="releaseinfo">Version',
    )

    if not result.de_version and instance.config.allow_slow_operations:
        output = process_stdout(["xfce4-session", "--version"])
        result.de_version = _after_first(_before_first(output, "("), " ").strip(" ")


def _get_lxqt(instance: Instance, result: DisplayServerResult, env: Mapping[str, str]) -> None:
    result.de_process_name = "lxqt-session"
    result.de_pretty_name = "LXQt"
    result.de_version = parse_prop_file(f"{USR_DIR}/lib/pkgconfig/lxqt.pc", "Version:")

    if not result.de_version:
        result.de_version = parse_prop_file(
            f"{USR_DIR}/share/cmake/lxqt/lxqt-config.cmake", "set ( LXQT_VERSION"
        )
    if not result.de_version:
        result.de_version = parse_prop_file(
            f"{USR_DIR}/share/cmake/lxqt/lxqt-config-version.cmake", "set ( PACKAGE_VERSION"
        )

    if not result.de_version and instance.config.allow_slow_operations:
        output = process_stdout(["lxqt-session", "-v"])
        result.de_version = parse_prop_lines(output, "liblxqt") or ""

    query = PropQuery("window_manager =")
    parse_prop_file_config_values(instance.state.config_dirs, "lxqt/session.conf", [query])
    _apply_better_wm(result, query.value)


_DesktopHandler = Callable[[Instance, DisplayServerResult, Mapping[str, str]], None]

_DESKTOPS: dict[str, _DesktopHandler] = {}
for _names, _handler in (
    (("kde", "plasma", "plasmashell", "plasmawayland"), _get_kde),
    (("gnome", "ubuntu:gnome", "ubuntu", "gnome-shell"), _get_gnome),
    (("x-cinnamon", "cinnamon"), _get_cinnamon),
    (("xfce", "x-xfce", "xfce4", "x-xfce4", "xfce4-session"), _get_xfce4),
    (("mate", "x-mate", "mate-session"), _get_mate),
    (("lxqt", "x-lxqt", "lxqt-session"), _get_lxqt),
):
    for _name in _names:
        _DESKTOPS[_name] = _handler


def _apply_pretty_name_if_de(
    instance: Instance, result: DisplayServerResult, name: str | None, env: Mapping[str, str]
) -> None:
    if not str_set(name):
        return
    assert name is not None
    handler = _DESKTOPS.get(name.lower())
    if handler is not None:
        handler(instance, result, env)


def _protocol_from_env(result: DisplayServerResult, env: Mapping[str, str]) -> None:
    session_type = env.get("XDG_SESSION_TYPE")
    if str_set(session_type):
        assert session_type is not None
        lowered = session_type.lower()
        if lowered == "x11":
            result.wm_protocol_name = PROTOCOL_X11
        elif lowered == "tty":
            result.wm_protocol_name = PROTOCOL_TTY
        else:
            result.wm_protocol_name = session_type
        return

    if str_set(env.get("DISPLAY")):
        result.wm_protocol_name = PROTOCOL_X11
        return

    if str_set(env.get("TERM")):
        result.wm_protocol_name = PROTOCOL_TTY


def _scan_processes(instance: Instance, result: DisplayServerResult, env: Mapping[str, str]) -> None:
    try:
        entries = sorted(os.listdir(PROC_DIR))
    except OSError:
        return

    user_id = str(os.getuid())

    for entry in entries:
        folder = os.path.join(PROC_DIR, entry)
        if not entry[:1].isdigit() or not os.path.isdir(folder):
            continue

        # Only processes owned by the current user count
        if read_file_content(os.path.join(folder, "loginuid")) != user_id:
            continue

        command = read_file_content(os.path.join(folder, "cmdline")) or ""
        process_name = command.split("\0", 1)[0].rsplit("/", 1)[-1]

        if not result.de_pretty_name:
            _apply_pretty_name_if_de(instance, result, process_name, env)
        if not result.wm_pretty_name:
            _apply_pretty_name_if_wm(result, process_name)

        if result.de_pretty_name and result.wm_pretty_name:
            break


def detect_wmde(
    instance: Instance, result: DisplayServerResult, env: Mapping[str, str] | None = None
) -> None:
    """Fill in missing protocol, window manager and desktop environment fields.

    Uses the environment first and falls back to scanning the user's processes.
    Nothing is detected in a TTY session.
    """
    if env is None:
        env = os.environ

    if not result.wm_protocol_name:
        _protocol_from_env(result, env)

    if result.wm_protocol_name.lower() == PROTOCOL_TTY.lower():
        return

    desktop = desktop_from_env(env)

    if result.wm_process_name:
        _apply_pretty_name_if_wm(result, result.wm_process_name)
        if not result.wm_pretty_name:
            result.wm_pretty_name = result.wm_process_name
    else:
        _apply_pretty_name_if_wm(result, desktop)

    _apply_pretty_name_if_de(instance, result, desktop, env)

    if result.de_pretty_name and result.wm_pretty_name:
        return

    _scan_processes(instance, result, env)

    if (result.wm_pretty_name and result.de_pretty_name) or not str_set(desktop):
        return
    assert desktop is not None
    lowered = desktop.lower()

    if not result.wm_pretty_name and not result.de_pretty_name:
        result.wm_process_name = desktop
        result.wm_pretty_name = desktop
    elif (
        not result.wm_pretty_name
        and result.de_process_name.lower() != lowered
        and result.de_pretty_name.lower() != lowered
    ):
        result.wm_process_name = desktop
        result.wm_pretty_name = desktop
    elif (
        not result.de_pretty_name
        and result.wm_process_name.lower() != lowered
        and result.wm_pretty_name.lower() != lowered
    ):
        result.de_process_name = desktop
        result.de_pretty_name = desktop


def connect_display_server(
    instance: Instance, env: Mapping[str, str] | None = None
) -> DisplayServerResult:
    """Detect the session protocol, resolutions, window manager and desktop."""
    if env is None:
        env = os.environ
    result = DisplayServerResult()
    detect_wayland(result, env)
    if not result.resolutions:
        parse_drm(result, displayserver.DRM_DIR)
    detect_wmde(instance, result, env)
    return result