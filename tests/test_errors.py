import pytest

from gradecalc.errors import (
    InvalidFileContentError,
    InvalidFilePathError,
    InvalidInputError,
)


def test_file_path_error_message():
    error = InvalidFilePathError("font missing")
    assert str(error) == "font missing"
    assert error.message == "font missing"


@pytest.mark.parametrize("color", [(255, 0, 0), (0, 255, 0)])
def test_input_error_carries_color(color):
    error = InvalidInputError(color)
    assert error.color == color


def test_file_content_error_carries_line():
    error = InvalidFileContentError("bad content", 12)
    assert error.line == 12
    assert str(error) == "bad content"


def test_file_content_error_keeps_message_and_line():
    error = InvalidFileContentError("broken", 3)
    assert isinstance(error, Exception)
    assert error.line == 3
    assert str(error) == "broken"