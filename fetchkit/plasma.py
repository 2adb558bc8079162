"""KDE Plasma theme settings read from kdeglobals."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum

from fetchkit.displayserver import DisplayServerResult
from fetchkit.instance import Instance
from fetchkit.properties import parse_prop_line


class _Category(Enum):
    GENERAL = "general"
    KDE = "kde"
    ICONS = "icons"
    OTHER = "other"


_CATEGORIES = {
    "general": _Category.GENERAL,
    "kde": _Category.KDE,
    "icons": _Category.ICONS,
}


@dataclass
class PlasmaResult:
    """Widget style, colour scheme, icon theme and font of a Plasma session."""

    widget_style: str = ""
    color_scheme: str = ""
    icons: str = ""
    font: str = ""

    def complete(self) -> bool:
        """True when every field has a value."""
        return bool(self.widget_style and self.color_scheme and self.icons and self.font)


def _section_name(line: str) -> str:
    return line[1:].split("]", 1)[0][:31]


def parse_kdeglobals(path: str | os.PathLike[str], result: PlasmaResult) -> bool:
    """Fill empty fields of ``result`` from a kdeglobals file.

    Returns False if the file cannot be opened.
    """
    try:
        handle = open(path, encoding="utf-8", errors="replace", newline="")
    except OSError:
        return False

    category = _Category.OTHER
    with handle:
        for line in handle:
            if line.startswith("["):
                category = _CATEGORIES.get(_section_name(line).lower(), _Category.OTHER)
                continue

            if category is _Category.KDE and not result.widget_style:
                result.widget_style = parse_prop_line(line, "widgetStyle =") or ""
            elif category is _Category.ICONS and not result.icons:
                result.icons = parse_prop_line(line, "Theme =") or ""
            elif category is _Category.GENERAL:
                if not result.color_scheme:
                    result.color_scheme = parse_prop_line(line, "ColorScheme =") or ""
                if not result.font:
                    result.font = parse_prop_line(line, "font =") or ""
                # Older Plasma versions spell the key with a capital letter
                if not result.font:
                    result.font = parse_prop_line(line, "Font =") or ""
    return True


def detect_plasma(
    instance: Instance, display_server: DisplayServerResult | None = None
) -> PlasmaResult:
    """Plasma settings, or an empty result if Plasma is not the desktop.

    Plasma leaves default values out of its config files, so they are filled
    in once a kdeglobals file has been found.
    """
    if display_server is None:
        from fetchkit.wmde import connect_display_server

        display_server = connect_display_server(instance)

    result = PlasmaResult()
    if display_server.de_process_name.lower() != "plasmashell":
        return result

    found = False
    for base_dir in instance.state.config_dirs:
        if parse_kdeglobals(f"{base_dir}/kdeglobals", result):
            found = True
        if result.complete():
            break

    if not found:
        return result

    result.widget_style = result.widget_style or "Breeze"
    result.color_scheme = result.color_scheme or "BreezeLight"
    result.icons = result.icons or "Breeze"
    result.font = result.font or "Noto Sans, 10"
    return result