"""Operating system identification from os-release style files."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from fetchkit.instance import Instance
from fetchkit.parsing import str_set
from fetchkit.properties import parse_prop_line

DEFAULT_RELEASE_FILES = (
    "/etc/os-release",
    "/usr/lib/os-release",
    "/etc/lsb-release",
)

# Key prefix and the result field it fills. Several keys may share a field;
# the last matching line of a file wins.
_RELEASE_KEYS = (
    ("NAME =", "name"),
    ("DISTRIB_DESCRIPTION =", "pretty_name"),
    ("PRETTY_NAME =", "pretty_name"),
    ("DISTRIB_ID =", "id"),
    ("ID =", "id"),
    ("ID_LIKE =", "id_like"),
    ("VARIANT =", "variant"),
    ("VARIANT_ID =", "variant_id"),
    ("DISTRIB_RELEASE =", "version"),
    ("VERSION =", "version"),
    ("VERSION_ID =", "version_id"),
    ("VERSION_CODENAME =", "codename"),
    ("BUILD_ID =", "build_id"),
)

# Substrings of XDG_CONFIG_DIRS and the flavour (name, id) they indicate.
_UBUNTU_FLAVOURS = (
    (("kde", "plasma"), "Kubuntu", "kubuntu"),
    (("xfce", "xubuntu"), "Xubuntu", "xubuntu"),
    (("lxde", "lubuntu"), "Lubuntu", "lubuntu"),
    (("budgie",), "Ubuntu Budgie", "ubuntu-budgie"),
    (("mate",), "Ubuntu MATE", "ubuntu-mate"),
    (("studio",), "Ubuntu Studio", "ubuntu-studio"),
)


@dataclass
class OSResult:
    """Identification of the running operating system."""

    system_name: str = ""
    name: str = ""
    pretty_name: str = ""
    id: str = ""
    id_like: str = ""
    variant: str = ""
    variant_id: str = ""
    version: str = ""
    version_id: str = ""
    codename: str = ""
    build_id: str = ""
    architecture: str = ""


def _parse_release_file(path: str | os.PathLike[str], result: OSResult) -> None:
    if result.name and result.pretty_name:
        return

    pending = [(key, attr) for key, attr in _RELEASE_KEYS if not getattr(result, attr)]
    if not pending:
        return

    try:
        handle = open(path, encoding="utf-8", errors="replace", newline="")
    except OSError:
        return

    with handle:
        for line in handle:
            for key, attr in pending:
                value = parse_prop_line(line, key)
                if value is not None:
                    setattr(result, attr, value)


def ubuntu_flavour(result: OSResult, xdg_config_dirs: str | None) -> None:
    """Refine an Ubuntu result into its flavour, judged by XDG_CONFIG_DIRS."""
    if not str_set(xdg_config_dirs):
        return
    assert xdg_config_dirs is not None
    for markers, name, flavour_id in _UBUNTU_FLAVOURS:
        if any(marker in xdg_config_dirs for marker in markers):
            result.name = name
            result.pretty_name = name
            result.id = flavour_id
            result.id_like = "ubuntu"
            return


def detect_os(instance: Instance, env: Mapping[str, str] | None = None) -> OSResult:
    """Identify the operating system.

    The configured os file is read if set, otherwise the usual release files
    in turn until both name and pretty name are known.
    """
    if env is None:
        env = os.environ

    result = OSResult(
        system_name=instance.state.sysname,
        architecture=instance.state.machine,
    )

    if instance.config.os_file:
        _parse_release_file(instance.config.os_file, result)
    else:
        for path in DEFAULT_RELEASE_FILES:
            _parse_release_file(path, result)

    if result.id.lower() == "ubuntu":
        ubuntu_flavour(result, env.get("XDG_CONFIG_DIRS"))

    return result