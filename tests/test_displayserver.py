import pytest

from fetchkit.displayserver import (
    PROTOCOL_WAYLAND,
    DisplayServerResult,
    Resolution,
    detect_wayland,
    parse_drm,
    parse_refresh_rate,
)


@pytest.mark.parametrize("rate", [0, -1, -60])
def test_refresh_rate_non_positive(rate):
    assert parse_refresh_rate(rate) == 0


@pytest.mark.parametrize("rate", [60, 75, 120, 240])
def test_refresh_rate_multiple_of_five_unchanged(rate):
    assert parse_refresh_rate(rate) == rate


def test_refresh_rate_144_special_case():
    assert parse_refresh_rate(145) == 144
    assert parse_refresh_rate(144) == 144


def test_refresh_rate_invariants():
    for rate in range(1, 400):
        rounded = parse_refresh_rate(rate)
        assert rounded % 5 == 0 or rounded == 144
        assert abs(rounded - rate) <= 3


def test_append_resolution_accepts_valid():
    result = DisplayServerResult()
    assert result.append_resolution(1920, 1080, 60) is True
    assert result.resolutions == [Resolution(1920, 1080, 60)]


@pytest.mark.parametrize("width, height", [(0, 1080), (1920, 0), (0, 0)])
def test_append_resolution_rejects_zero(width, height):
    result = DisplayServerResult()
    assert result.append_resolution(width, height, 60) is False
    assert result.resolutions == []


def test_parse_drm(tmp_path):
    connected = tmp_path / "card0-HDMI-A-1"
    connected.mkdir()
    (connected / "modes").write_text("1920x1080\n1280x720\n")
    empty = tmp_path / "card0-DP-1"
    empty.mkdir()
    (empty / "modes").write_text("")
    zero = tmp_path / "card0-DP-2"
    zero.mkdir()
    (zero / "modes").write_text("0x0\n")
    (tmp_path / "card0").mkdir()
    (tmp_path / "version").write_text("drm 1.1.0\n")

    result = DisplayServerResult()
    parse_drm(result, str(tmp_path))
    assert result.resolutions == [Resolution(1920, 1080, 0)]


def test_parse_drm_missing_dir(tmp_path):
    result = DisplayServerResult()
    parse_drm(result, str(tmp_path / "absent"))
    assert result.resolutions == []


@pytest.mark.parametrize(
    "env",
    [
        {"XDG_RUNTIME_DIR": "/run/user/1000", "XDG_SESSION_TYPE": "wayland"},
        {"XDG_RUNTIME_DIR": "/run/user/1000", "XDG_SESSION_TYPE": "Wayland"},
        {"XDG_RUNTIME_DIR": "/run/user/1000", "WAYLAND_DISPLAY": "wayland-0"},
        {"XDG_RUNTIME_DIR": "/run/user/1000", "WAYLAND_SOCKET": "3"},
    ],
)
def test_detect_wayland_positive(env):
    result = DisplayServerResult()
    assert detect_wayland(result, env) is True
    assert result.wm_protocol_name == PROTOCOL_WAYLAND


@pytest.mark.parametrize(
    "env",
    [
        {},
        {"XDG_SESSION_TYPE": "wayland", "WAYLAND_DISPLAY": "wayland-0"},
        {"XDG_RUNTIME_DIR": "/run/user/1000", "XDG_SESSION_TYPE": "x11", "WAYLAND_DISPLAY": "wayland-0"},
        {"XDG_RUNTIME_DIR": "/run/user/1000"},
    ],
)
def test_detect_wayland_negative(env):
    result = DisplayServerResult()
    assert detect_wayland(result, env) is False
    assert result.wm_protocol_name == ""