from fetchkit.displayserver import DisplayServerResult
from fetchkit.instance import Config, Instance, State
from fetchkit.plasma import PlasmaResult, detect_plasma, parse_kdeglobals


def make_instance(config_dirs):
    return Instance(
        config=Config(),
        state=State(home="/nonexistent", config_dirs=[str(d) for d in config_dirs], cache_dir="/nonexistent/"),
    )


PLASMA = DisplayServerResult(de_process_name="plasmashell", de_pretty_name="KDE Plasma")


def test_parse_kdeglobals_reads_all_sections(tmp_path):
    path = tmp_path / "kdeglobals"
    path.write_text(
        "[General]\nColorScheme=Nord\nfont=Hack,10\n"
        "[KDE]\nwidgetStyle=kvantum\n"
        "[Icons]\nTheme=Papirus\n"
    )
    result = PlasmaResult()
    assert parse_kdeglobals(path, result) is True
    assert result == PlasmaResult(widget_style="kvantum", color_scheme="Nord", icons="Papirus", font="Hack,10")


def test_parse_kdeglobals_missing_file(tmp_path):
    result = PlasmaResult()
    assert parse_kdeglobals(tmp_path / "missing", result) is False
    assert result == PlasmaResult()


def test_parse_kdeglobals_old_font_key(tmp_path):
    path = tmp_path / "kdeglobals"
    path.write_text("[General]\nFont=Cantarell,11\n")
    result = PlasmaResult()
    parse_kdeglobals(path, result)
    assert result.font == "Cantarell,11"


def test_parse_kdeglobals_ignores_other_sections(tmp_path):
    path = tmp_path / "kdeglobals"
    path.write_text("[Colors:View]\nTheme=Wrong\nwidgetStyle=Wrong\n[icons]\nTheme=Right\n")
    result = PlasmaResult()
    parse_kdeglobals(path, result)
    assert result.icons == "Right"
    assert result.widget_style == ""


def test_parse_kdeglobals_keeps_existing_values(tmp_path):
    path = tmp_path / "kdeglobals"
    path.write_text("[General]\nColorScheme=Other\n")
    result = PlasmaResult(color_scheme="Kept")
    parse_kdeglobals(path, result)
    assert result.color_scheme == "Kept"


def test_detect_plasma_other_desktop(tmp_path):
    (tmp_path / "kdeglobals").write_text("[General]\nColorScheme=Nord\n")
    other = DisplayServerResult(de_process_name="gnome-shell")
    assert detect_plasma(make_instance([tmp_path]), other) == PlasmaResult()


def test_detect_plasma_without_files(tmp_path):
    assert detect_plasma(make_instance([tmp_path]), PLASMA) == PlasmaResult()


def test_detect_plasma_fills_defaults(tmp_path):
    (tmp_path / "kdeglobals").write_text("[KDE]\nwidgetStyle=Oxygen\n")
    result = detect_plasma(make_instance([tmp_path]), PLASMA)
    assert result.widget_style == "Oxygen"
    assert result.color_scheme == "BreezeLight"
    assert result.icons == "Breeze"
    assert result.font == "Noto Sans, 10"


def test_detect_plasma_first_directory_wins(tmp_path):
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    (first / "kdeglobals").write_text("[General]\nColorScheme=FirstScheme\n")
    (second / "kdeglobals").write_text("[General]\nColorScheme=SecondScheme\n[Icons]\nTheme=SecondIcons\n")
    result = detect_plasma(make_instance([first, second]), PLASMA)
    assert result.color_scheme == "FirstScheme"
    assert result.icons == "SecondIcons"
    assert result.complete()