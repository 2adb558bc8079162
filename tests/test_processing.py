import sys

import pytest

from fetchkit.processing import process_stdout


def test_captures_stdout():
    assert process_stdout([sys.executable, "-c", "print('hello')"]) == "hello"


def test_trims_trailing_newlines_and_spaces():
    code = "import sys; sys.stdout.write('value  \\n\\n')"
    assert process_stdout([sys.executable, "-c", code]) == "value"


def test_stderr_is_discarded():
    code = "import sys; sys.stderr.write('noise'); sys.stdout.write('out')"
    assert process_stdout([sys.executable, "-c", code]) == "out"


def test_failing_program_output_still_returned():
    code = "import sys; print('partial'); sys.exit(3)"
    assert process_stdout([sys.executable, "-c", code]) == "partial"


def test_missing_program(tmp_path):
    assert process_stdout([str(tmp_path / "no-such-program")]) == ""


def test_empty_argv():
    with pytest.raises(ValueError):
        process_stdout([])