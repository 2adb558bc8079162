"""Font descriptions read from Qt and Pango font strings."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

_FLOAT_PREFIX = re.compile(
    r"\s*[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)

_STYLE_PREFIXES = ("ultra", "extra", "semi", "demi")
_STYLE_WORDS = (
    "normal",
    "roman",
    "oblique",
    "italic",
    "thin",
    "light",
    "bold",
    "black",
    "condensed",
    "expanded",
)
_JOINING_PREFIXES = ("ultra ", "extra ", "semi ", "demi ")

_QT_SKIPPED_FIELDS = 8


@dataclass
class Font:
    """A font name with optional size and style words."""

    name: str = ""
    size: str = ""
    styles: list[str] = field(default_factory=list)

    @property
    def pretty(self) -> str:
        """Human readable form, e.g. ``Name (10pt, Bold)``."""
        if not self.size and not self.styles:
            return self.name
        parts = []
        if self.size:
            parts.append(self.size + "pt")
        parts.extend(self.styles)
        return f"{self.name or 'default'} ({', '.join(parts)})"

    def __str__(self) -> str:
        return self.pretty


def font_from_qt(data: str) -> Font:
    """Parse a QFont description string."""
    fields = data.split("\0", 1)[0].split(",", 2 + _QT_SKIPPED_FIELDS)
    name = fields[0].strip(" ")
    size = fields[1].strip(" ") if len(fields) > 1 else ""
    rest = fields[2 + _QT_SKIPPED_FIELDS] if len(fields) > 2 + _QT_SKIPPED_FIELDS else ""
    styles = [word for word in rest.split(" ") if word]
    return Font(name=name, size=size, styles=styles)


def _is_style_word(word: str) -> bool:
    lowered = word.lower()
    if lowered.startswith(_STYLE_PREFIXES):
        return True
    return any(style.startswith(lowered) for style in _STYLE_WORDS)


def _parse_pango_word(data: str, pos: int, font: Font, style_index: int | None) -> int:
    length = len(data)
    while pos < length and data[pos] in " \t,":
        pos += 1
    start = pos
    while pos < length and data[pos] not in " \t,`\\":
        pos += 1

    word = data[start:pos]
    if not word:
        return pos

    if pos == length or data[pos] in "`\\":
        candidate = word[:-2] if word.endswith("px") else word
        if _FLOAT_PREFIX.match(candidate):
            font.size = candidate
            return pos
        font.size = ""

    if _is_style_word(word):
        if style_index is None:
            font.styles.append("")
            style_index = len(font.styles) - 1
        font.styles[style_index] += word.replace("-", "")
        if data[start:].lower().startswith(_JOINING_PREFIXES):
            pos = _parse_pango_word(data, pos, font, style_index)
        return pos

    if style_index is not None:
        font.styles[style_index] += word.replace("-", "")
        return pos

    font.name = f"{font.name} {word}" if font.name else word
    return pos


def font_from_pango(data: str) -> Font:
    """Parse a Pango font description such as ``Sans Bold 12``."""
    data = data.split("\0", 1)[0]
    font = Font()
    pos = 0
    while pos < len(data) and data[pos] not in "`\\":
        pos = _parse_pango_word(data, pos, font, None)
    return font


def font_from_name(name: str) -> Font:
    """A font given only by name."""
    return Font(name=name)