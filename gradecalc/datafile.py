"""Reading and updating the plain-text subject data file."""

from __future__ import annotations

import math
import re
from collections.abc import Iterable
from os import PathLike
from pathlib import Path
from typing import Callable, TypeVar, Union

from .errors import InvalidFileContentError, InvalidFilePathError
from .models import SERIES, Evaluation, Grading, Subject

PathType = Union[str, "PathLike[str]"]
T = TypeVar("T")

_CONTENT_MESSAGE = (
    "The subject data file is incomplete. If you edited it by hand, "
    "undo the changes."
)
_FONT_MESSAGE = "The text font could not be loaded. Check that it exists."
_DATA_MESSAGE = "The subject data file could not be found. Check that it exists."

_FINAL_PREFIX = "nota_finala_seria"
_FINAL_KEYS = tuple(f"{_FINAL_PREFIX}{series}: " for series in SERIES)
_RECORD_END = "-"
_LINES_PER_EVALUATION = 5
_NO_VALUE = -1

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _parse_int(text: str) -> int | None:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else None


def _parse_float(text: str) -> float | None:
    match = _FLOAT_PREFIX.match(text)
    if not match:
        return None
    value = float(match.group(1))
    return value if math.isfinite(value) else None


class _Reader:
    """Hands out lines one at a time while tracking the line number."""

    def __init__(self, lines: Iterable[str]) -> None:
        self._lines = iter(lines)
        self.number = 0

    def next(self) -> str | None:
        self.number += 1
        line = next(self._lines, None)
        return None if line is None else line.rstrip("\r\n")

    def require(self) -> str:
        line = self.next()
        return "" if line is None else line

    def error(self) -> InvalidFileContentError:
        return InvalidFileContentError(_CONTENT_MESSAGE, self.number)

    def value(self, line: str, keys: tuple[str, ...], parse: Callable[[str], T | None]) -> T:
        if not any(key in line for key in keys) or line.count(" ") != 1:
            raise self.error()
        result = parse(line[line.rfind(" "):])
        if result is None:
            raise self.error()
        return result

    def field(self, key: str, parse: Callable[[str], T | None]) -> T:
        return self.value(self.require(), (f"{key}: ",), parse)


def _parse_evaluation(reader: _Reader, kind: str) -> Evaluation:
    weight = reader.field("parte", _parse_float)
    if not 0 <= weight <= 10:
        raise reader.error()
    maximum = reader.field("max", _parse_float)
    if maximum < 0:
        raise reader.error()
    threshold = reader.field("prag", _parse_float)
    if threshold < 0:
        raise reader.error()
    grade = reader.field("nota", _parse_float)
    return Evaluation(kind, weight, maximum, threshold, None if grade == _NO_VALUE else grade)


def parse_subjects(lines: Iterable[str]) -> list[Subject]:
    """Parse subject records from the lines of a data file."""
    reader = _Reader(lines)
    subjects: list[Subject] = []
    while (name := reader.next()) is not None:
        credits = reader.field("credit", _parse_int)
        if not 2 <= credits <= 6:
            raise reader.error()
        year = reader.field("an", _parse_int)
        if not 1 <= year <= 3:
            raise reader.error()
        optional = bool(reader.field("optional", _parse_int))
        facultative = bool(reader.field("facultativ", _parse_int))

        gradings: list[Grading] = []
        line = reader.require()
        for _ in SERIES:
            final = int(reader.value(line, _FINAL_KEYS, _parse_float))
            evaluations: list[Evaluation] = []
            while True:
                next_line = reader.next()
                if next_line is None or "nota_finala" in next_line or next_line == _RECORD_END:
                    break
                evaluations.append(_parse_evaluation(reader, next_line))
            line = "" if next_line is None else next_line
            gradings.append(Grading(evaluations, None if final == _NO_VALUE else final))

        subjects.append(Subject(name, credits, gradings, year, optional, facultative))
    return subjects


def load_subjects(path: PathType) -> list[Subject]:
    """Read and parse the subject data file at ``path``."""
    try:
        with open(path, encoding="utf-8") as handle:
            return parse_subjects(handle)
    except OSError as exc:
        raise InvalidFilePathError(_DATA_MESSAGE) from exc


def check_files(font_path: PathType, data_path: PathType) -> None:
    """Raise InvalidFilePathError unless both files can be opened."""
    for path, message in ((font_path, _FONT_MESSAGE), (data_path, _DATA_MESSAGE)):
        try:
            with open(path, "rb"):
                pass
        except OSError as exc:
            raise InvalidFilePathError(message) from exc


def subjects_for_year(subjects: Iterable[Subject], year: int) -> list[Subject]:
    """Return the subjects taught in ``year``, in their original order."""
    return [subject for subject in subjects if subject.year == year]


def _read_lines(path: Path) -> list[str]:
    try:
        return path.read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        raise InvalidFilePathError(_DATA_MESSAGE) from exc


def _write_lines(path: Path, lines: list[str]) -> None:
    path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")


def _series_line(lines: list[str], subject_name: str, series: int) -> int:
    """Index of the final-grade line that opens ``series`` for the subject."""
    prefix = f"{_FINAL_PREFIX}{series}: "
    try:
        start = lines.index(subject_name)
    except ValueError:
        raise InvalidFileContentError(_CONTENT_MESSAGE, len(lines)) from None
    for index in range(start + 1, len(lines)):
        if lines[index] == _RECORD_END:
            break
        if lines[index].startswith(prefix):
            return index
    raise InvalidFileContentError(_CONTENT_MESSAGE, len(lines))


def _format_grade(grade: float | None) -> str:
    if grade is None:
        return str(_NO_VALUE)
    return f"{grade:f}"[:4]


def save_grade(
    path: PathType, subject: Subject, series: int, eval_index: int, grade: float | None
) -> None:
    """Write ``grade`` for one evaluation of ``subject`` back to the data file."""
    path = Path(path)
    # The file may have been edited while the program was running.
    load_subjects(path)
    evaluations = subject.grading(series).evaluations
    if not 0 <= eval_index < len(evaluations):
        raise IndexError(f"no evaluation {eval_index} for series {series}")

    lines = _read_lines(path)
    kind_index = _series_line(lines, subject.name, series) + 1 + eval_index * _LINES_PER_EVALUATION
    grade_index = kind_index + _LINES_PER_EVALUATION - 1
    if (
        grade_index >= len(lines)
        or lines[kind_index] != evaluations[eval_index].kind
        or not lines[grade_index].startswith("nota: ")
    ):
        raise InvalidFileContentError(_CONTENT_MESSAGE, min(kind_index, len(lines)) + 1)
    lines[grade_index] = f"nota: {_format_grade(grade)}"
    _write_lines(path, lines)


def save_final_grade(path: PathType, subject: Subject, series: int) -> None:
    """Write the subject's final grade for ``series`` back to the data file."""
    path = Path(path)
    lines = _read_lines(path)
    index = _series_line(lines, subject.name, series)
    final = subject.grading(series).final_grade
    value = _NO_VALUE if final is None else final
    lines[index] = f"{_FINAL_PREFIX}{series}: {value}"
    _write_lines(path, lines)