from fetchkit.properties import (
    PropQuery,
    parse_prop_file,
    parse_prop_file_config_values,
    parse_prop_file_home_values,
    parse_prop_file_values,
    parse_prop_line,
    parse_prop_lines,
)


def test_line_with_quoted_value():
    assert parse_prop_line('NAME="Arch Linux"\n', "NAME =") == "Arch Linux"


def test_line_with_single_quotes_and_spaces():
    assert parse_prop_line("  gtk-theme-name = 'Adwaita'\n", "gtk-theme-name =") == "Adwaita"


def test_line_trailing_spaces_removed():
    assert parse_prop_line("ID=arch   \n", "ID =") == "arch"


def test_line_xml_value_stops_at_tag():
    assert parse_prop_line("<platform>1</platform>\n", "<platform>") == "1"


def test_line_not_matching():
    assert parse_prop_line("VERSION_ID=1\n", "ID =") is None


def test_line_empty():
    assert parse_prop_line("", "ID =") is None


def test_line_prefix_longer_than_line():
    assert parse_prop_line("NAM", "NAME =") is None


def test_lines_finds_first_match():
    text = "foo=1\nbar = 2\nbar = 3\n"
    assert parse_prop_lines(text, "bar =") == "2"


def test_lines_no_match():
    assert parse_prop_lines("a=1\nb=2", "c =") is None


def test_file_last_occurrence_wins(tmp_path):
    path = tmp_path / "os-release"
    path.write_text('NAME="First"\nID=one\nNAME="Second"\n')
    assert parse_prop_file(path, "NAME =") == "Second"


def test_file_values_fill_queries(tmp_path):
    path = tmp_path / "os-release"
    path.write_text('NAME="Arch Linux"\nID=arch\nBUILD_ID=rolling\n')
    queries = [PropQuery("NAME ="), PropQuery("ID ="), PropQuery("VERSION_ID =")]
    assert parse_prop_file_values(path, queries) is True
    assert [query.value for query in queries] == ["Arch Linux", "arch", ""]


def test_file_values_keep_existing(tmp_path):
    path = tmp_path / "conf"
    path.write_text("ID=arch\n")
    query = PropQuery("ID =", "kept")
    assert parse_prop_file_values(path, [query]) is True
    assert query.value == "kept"


def test_file_values_all_set_skips_missing_file(tmp_path):
    query = PropQuery("ID =", "kept")
    assert parse_prop_file_values(tmp_path / "missing", [query]) is True


def test_file_values_missing_file(tmp_path):
    query = PropQuery("ID =")
    assert parse_prop_file_values(tmp_path / "missing", [query]) is False
    assert query.value == ""


def test_file_missing_returns_empty(tmp_path):
    assert parse_prop_file(tmp_path / "missing", "ID =") == ""


def test_home_values(tmp_path):
    (tmp_path / ".gtkrc-2.0").write_text('gtk-theme-name="Breeze"\n')
    query = PropQuery("gtk-theme-name =")
    assert parse_prop_file_home_values(str(tmp_path), ".gtkrc-2.0", [query]) is True
    assert query.value == "Breeze"


def test_config_values_stop_when_all_set(tmp_path):
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    (first / "app.conf").write_text("a = one\n")
    (second / "app.conf").write_text("a = two\nb = three\n")
    queries = [PropQuery("a ="), PropQuery("b =")]
    assert parse_prop_file_config_values([str(first), str(second)], "app.conf", queries)
    assert [query.value for query in queries] == ["one", "three"]


def test_config_values_first_dir_wins(tmp_path):
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    (first / "app.conf").write_text("a = one\n")
    (second / "app.conf").write_text("a = two\n")
    query = PropQuery("a =")
    assert parse_prop_file_config_values([str(first), str(second)], "/app.conf", [query])
    assert query.value == "one"


def test_config_values_nothing_found(tmp_path):
    query = PropQuery("a =")
    assert parse_prop_file_config_values([str(tmp_path)], "missing.conf", [query]) is False