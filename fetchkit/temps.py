"""Temperature sensors exposed by the hardware monitoring sysfs class."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass

from fetchkit.fileio import read_file_content

_TEMP_FILE = re.compile(r"temp[0-9]_input")


@dataclass
class TempValue:
    """One sensor: its driver name, device class and raw reading."""

    name: str = ""
    device_class: str = ""
    value: str = ""


def _parse_hwmon_dir(directory: str) -> TempValue | None:
    try:
        entries = sorted(os.listdir(directory))
    except OSError:
        return None

    sensor = TempValue()
    for entry in entries:
        if _TEMP_FILE.match(entry):
            sensor.value = read_file_content(os.path.join(directory, entry)) or ""
            break

    if not sensor.value:
        return None

    sensor.name = read_file_content(os.path.join(directory, "name")) or ""
    sensor.device_class = read_file_content(os.path.join(directory, "device", "class")) or ""

    if sensor.name or sensor.device_class:
        return sensor
    return None


def detect_temps(base_dir: str = "/sys/class/hwmon") -> list[TempValue]:
    """Read the first temperature input of every hwmon device below ``base_dir``."""
    try:
        entries = sorted(os.listdir(base_dir))
    except OSError:
        return []

    sensors = []
    for entry in entries:
        if entry.startswith("."):
            continue
        sensor = _parse_hwmon_dir(os.path.join(base_dir, entry))
        if sensor is not None:
            sensors.append(sensor)
    return sensors