"""GTK theme, icon, font and cursor settings from GTK configuration files."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from fetchkit.instance import Instance
from fetchkit.properties import PropQuery, parse_prop_file_values

# Key prefix in GTK settings files and the result field it fills.
_SETTINGS_KEYS = (
    ("gtk-theme-name =", "theme"),
    ("gtk-icon-theme-name =", "icons"),
    ("gtk-font-name =", "font"),
    ("gtk-cursor-theme-name =", "cursor"),
    ("gtk-cursor-theme-size =", "cursor_size"),
)

# Files searched below every config directory, in order.
_CONFIG_FILES = (
    "/gtk-{version}.0/settings.ini",
    "/gtk-{version}.0/gtkrc",
    "/gtkrc-{version}.0",
    "/.gtkrc-{version}.0",
)


@dataclass
class GTKResult:
    """Settings of one GTK major version."""

    theme: str = ""
    icons: str = ""
    font: str = ""
    cursor: str = ""
    cursor_size: str = ""

    def complete(self) -> bool:
        """True once theme, icons and font are all known."""
        return bool(self.theme and self.icons and self.font)


def _read_settings_file(path: str, result: GTKResult) -> None:
    queries = [PropQuery(start, getattr(result, attr)) for start, attr in _SETTINGS_KEYS]
    parse_prop_file_values(path, queries)
    for (_, attr), query in zip(_SETTINGS_KEYS, queries):
        setattr(result, attr, query.value)


def _read_config_dir(config_dir: str, version: str, result: GTKResult) -> None:
    config_dir = config_dir.strip(" ")
    if not config_dir:
        return
    for pattern in _CONFIG_FILES:
        _read_settings_file(config_dir + pattern.format(version=version), result)
        if result.complete():
            return


def detect_gtk(
    instance: Instance, version: int | str, env: Mapping[str, str] | None = None
) -> GTKResult:
    """Settings of GTK ``version`` (2, 3 or 4).

    Files listed in ``GTK<version>_RC_FILES`` are read first, then the usual
    files below each config directory, until theme, icons and font are known.
    Values found earlier are never overwritten.
    """
    if env is None:
        env = os.environ
    version = str(version)
    result = GTKResult()

    rc_files = (env.get(f"GTK{version}_RC_FILES") or "").split(":")
    if rc_files[-1] == "":
        rc_files.pop()
    for path in rc_files:
        _read_settings_file(path, result)
        if result.complete():
            return result

    for config_dir in instance.state.config_dirs:
        _read_config_dir(config_dir, version, result)
        if result.complete():
            break
    return result