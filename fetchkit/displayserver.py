"""Display server results, resolutions and session protocol detection."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field

PROTOCOL_WAYLAND = "Wayland"
PROTOCOL_X11 = "X11"
PROTOCOL_TTY = "TTY"

DRM_DIR = "/sys/class/drm"

_MODE = re.compile(r"\s*([+-]?\d+)x([+-]?\d+)")


def parse_refresh_rate(refresh_rate: int) -> int:
    """Round a refresh rate in Hz to the nearest multiple of 5; 145 becomes 144.

    Non-positive rates give 0.
    """
    if refresh_rate <= 0:
        return 0
    remainder = refresh_rate % 5
    if remainder >= 3:
        refresh_rate += 5 - remainder
    else:
        refresh_rate -= remainder
    # All other typical refresh rates are divisible by 5
    if refresh_rate == 145:
        refresh_rate = 144
    return refresh_rate


@dataclass(frozen=True)
class Resolution:
    """One monitor mode; a refresh rate of 0 means unknown."""

    width: int
    height: int
    refresh_rate: int = 0


@dataclass
class DisplayServerResult:
    """Window manager, desktop environment and monitor resolutions."""

    wm_process_name: str = ""
    wm_pretty_name: str = ""
    wm_protocol_name: str = ""
    de_process_name: str = ""
    de_pretty_name: str = ""
    de_version: str = ""
    resolutions: list[Resolution] = field(default_factory=list)

    def append_resolution(self, width: int, height: int, refresh_rate: int) -> bool:
        """Record a resolution unless a side is 0; tell whether it was added."""
        if width == 0 or height == 0:
            return False
        self.resolutions.append(Resolution(width, height, refresh_rate))
        return True


def parse_drm(result: DisplayServerResult, drm_dir: str = DRM_DIR) -> None:
    """Add the first mode of every DRM connector below ``drm_dir``."""
    try:
        entries = sorted(os.listdir(drm_dir))
    except OSError:
        return

    for entry in entries:
        try:
            with open(os.path.join(drm_dir, entry, "modes"), encoding="utf-8", errors="replace") as handle:
                content = handle.read()
        except OSError:
            continue
        match = _MODE.match(content)
        if match is None:
            continue
        width, height = int(match.group(1)), int(match.group(2))
        if width <= 0 or height <= 0:
            continue
        result.resolutions.append(Resolution(width, height, 0))


def detect_wayland(result: DisplayServerResult, env: Mapping[str, str] | None = None) -> bool:
    """Mark the session as Wayland if the environment indicates one.

    Returns True if the protocol name was set.
    """
    if env is None:
        env = os.environ

    # Wayland requires this to be set
    if env.get("XDG_RUNTIME_DIR") is None:
        return False

    session_type = env.get("XDG_SESSION_TYPE")
    if session_type is not None and session_type.lower() != "wayland":
        return False

    if (
        session_type is None
        and env.get("WAYLAND_DISPLAY") is None
        and env.get("WAYLAND_SOCKET") is None
    ):
        return False

    result.wm_protocol_name = PROTOCOL_WAYLAND
    return True