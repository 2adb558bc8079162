import io

import pytest

from fetchkit.fileio import read_file_content
from fetchkit.format import RESET
from fetchkit.instance import create_instance
from fetchkit.output import (
    ERROR_MODIFIER,
    VERSION_FILE,
    CacheWriter,
    Printer,
    color_code,
    validate_cache,
)


@pytest.fixture
def instance(tmp_path):
    return create_instance({"XDG_CACHE_HOME": str(tmp_path)}, str(tmp_path))


def make_printer(instance):
    return Printer(instance, io.StringIO())


def test_color_code():
    assert color_code("1;31") == "\033[1;31m"


def test_validate_cache(tmp_path):
    cache = str(tmp_path) + "/"
    assert validate_cache(cache, "1.2.3") is True
    assert read_file_content(cache + VERSION_FILE) == "1.2.3"
    assert validate_cache(cache, "1.2.3") is False
    assert validate_cache(cache, "1.2.3", recache=True) is True
    assert validate_cache(cache, "2.0.0") is True


def test_value_cache_round_trip(instance):
    writer = make_printer(instance)
    writer.print_and_write_to_cache("Kernel", None, "6.1.0", None, [])
    reader = make_printer(instance)
    assert reader.print_from_cache("Kernel", None, None, 0) is True
    assert reader.stream.getvalue() == writer.stream.getvalue()
    assert writer.stream.getvalue() == "Kernel: 6.1.0\n"


def test_format_cache_round_trip(instance):
    writer = make_printer(instance)
    writer.print_and_write_to_cache("Host", None, "a 3", "{1} - {2}", ["a", 3])
    reader = make_printer(instance)
    assert reader.print_from_cache("Host", None, "{1} - {2}", 2) is True
    assert reader.stream.getvalue() == writer.stream.getvalue()
    assert "a - 3" in reader.stream.getvalue()


def test_incomplete_argument_group_is_dropped(instance):
    with CacheWriter(instance.state.cache_dir, "Gpu") as cache:
        cache.write("v", ["a", "b"])
    reader = make_printer(instance)
    assert reader.print_from_cache("Gpu", None, "{1}{2}{3}", 3) is False
    assert reader.stream.getvalue() == ""


def test_recache_ignores_cache(instance):
    make_printer(instance).print_and_write_to_cache("Os", None, "Linux", None, [])
    instance.config.recache = True
    reader = make_printer(instance)
    assert reader.print_from_cache("Os", None, None, 0) is False
    assert reader.stream.getvalue() == ""


def test_missing_cache(instance):
    reader = make_printer(instance)
    assert reader.print_from_cache("Nothing", None, None, 0) is False


def test_print_error_hidden_by_default(instance):
    printer = make_printer(instance)
    printer.print_error("Mod", 0, None, None, 0, "oops")
    assert printer.stream.getvalue() == ""


def test_print_error_plain(instance):
    instance.config.show_errors = True
    printer = make_printer(instance)
    printer.print_error("Mod", 0, None, None, 0, "oops")
    assert printer.stream.getvalue() == "Mod: " + ERROR_MODIFIER + "oops" + RESET + "\n"


def test_print_error_with_format(instance):
    instance.config.show_errors = True
    printer = make_printer(instance)
    printer.print_error("Mod", 0, None, "{e}!{?1}hidden{?}", 1, "oops")
    out = printer.stream.getvalue()
    assert out.startswith("Mod: ")
    assert "oops!" in out
    assert "hidden" not in out


def test_custom_key_format(instance):
    printer = make_printer(instance)
    printer.print_format_string("Mod", 2, "Slot {1}", "val", None, [])
    assert printer.stream.getvalue().startswith("Slot 2")
    assert printer.stream.getvalue().endswith(": val" + RESET + "\n")