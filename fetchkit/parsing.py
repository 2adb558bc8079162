"""Small helpers that assemble version and theme strings."""

from __future__ import annotations

_WHITESPACE = " \t\n\r"


def str_set(value: str | None) -> bool:
    """True if ``value`` holds any character besides whitespace."""
    if value is None:
        return False
    return any(char not in _WHITESPACE for char in value)


def parse_semver(major: str, minor: str, patch: str) -> str:
    """Join version parts, filling in missing leading parts."""
    if major:
        result = major
    elif minor or patch:
        result = "1"
    else:
        result = ""

    if not minor and not patch:
        return result

    result += "." + (minor if minor else "0")

    if not patch:
        return result
    return result + "." + patch


def _same(first: str, second: str) -> bool:
    return first.lower() == second.lower()


def parse_gtk(gtk2: str, gtk3: str, gtk4: str) -> str:
    """Describe GTK 2/3/4 theme values, merging equal ones."""
    if gtk2 and gtk3 and gtk4:
        if _same(gtk2, gtk3) and _same(gtk2, gtk4):
            return f"{gtk4} [GTK2/3/4]"
        if _same(gtk2, gtk3):
            return f"{gtk3} [GTK2/3], {gtk4} [GTK4]"
        if _same(gtk3, gtk4):
            return f"{gtk2} [GTK2], {gtk4} [GTK3/4]"
        return f"{gtk2} [GTK2], {gtk3} [GTK3], {gtk4} [GTK4]"
    if gtk2 and gtk3:
        if _same(gtk2, gtk3):
            return f"{gtk3} [GTK2/3]"
        return f"{gtk2} [GTK2], {gtk3} [GTK3]"
    if gtk3 and gtk4:
        if _same(gtk3, gtk4):
            return f"{gtk4} [GTK3/4]"
        return f"{gtk3} [GTK3], {gtk4} [GTK4]"
    if gtk2:
        return f"{gtk2} [GTK2]"
    if gtk3:
        return f"{gtk3} [GTK3]"
    if gtk4:
        return f"{gtk4} [GTK4]"
    return ""