"""Second page: grade entry per subject and the running totals."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field

from .datafile import PathType, save_final_grade, save_grade
from .errors import InvalidInputError
from .models import Evaluation, Subject
from .widgets import (
    GREEN,
    MAGENTA,
    RED,
    YELLOW,
    Button,
    TextInput,
    TitleText,
    Widget,
    average_display,
    average_title,
    evaluation_title,
    final_grade_box,
    grade_input,
    save_button,
    subject_title,
)

INPUT_PROMPT = "> "
PASS_GRADE = 5
_POINTS_PER_CREDIT = 10

_LEFT = 5.0
_TOP = 5.0
_BAND_TOPS = {6: 325.0, 12: 645.0}
_COLUMN_STEP = 280.0
_LINE_STEP = 35.0
_FINAL_OFFSET = 235.0
_INPUT_OFFSET = 160.0
_SAVE_OFFSET = 240.0
_SIDE_X = 1700.0

_INSTRUCTIONS = (
    (230, 100, "Facultative subjects are not\ncounted in credits or\ncredit points.\n"
               "Credit points are used when\nreallocating funded places."),
    (335, 150, "The number left of an\nevaluation is how many\npoints it gives in the\n"
               "final grade.\nThe number on the right\nis the maximum score\nfor that evaluation."),
    (490, 360, "If the pass threshold of an\nevaluation is missed or the\nfinal grade of a subject\n"
               "is below 5, the subject\nis failed.\nIts name and the\nscholarship heading\n"
               "turn red.\nGrades can be replaced\nafter resits.\nIf a subject is still\n"
               "failed after resits, no\nscholarship can be won\nfor the next year.\n"
               "Credits of failed subjects\nare not counted in the\nfinal credits or the\n"
               "credit points."),
    (855, 120, "The criteria for passing\nthe academic year are\nset by the student\n"
               "regulations of the\nfaculty."),
)


def parse_grade_input(text: str) -> float:
    """Read the number typed in a grade field, raising InvalidInputError if bad."""
    value = text[len(INPUT_PROMPT):]
    if value.endswith("|"):
        value = value[:-1]
    if value.count(".") > 1 or value in ("", "."):
        raise InvalidInputError(RED)
    try:
        return float(value)
    except ValueError:
        raise InvalidInputError(RED) from None


@dataclass(eq=False)
class SubjectRow:
    """The widgets showing one subject and its evaluations."""

    subject: Subject
    title: TitleText
    final_box: Button
    labels: list[TitleText] = field(default_factory=list)
    inputs: list[TextInput] = field(default_factory=list)
    save_buttons: list[Button] = field(default_factory=list)

    @property
    def widgets(self) -> list[Widget]:
        result: list[Widget] = [self.title, self.final_box]
        for label, grade_field, save in zip(self.labels, self.inputs, self.save_buttons):
            result.extend((label, grade_field, save))
        return result


@dataclass
class Totals:
    """Scholarship average, credit points and credits over all rows."""

    average: float
    credit_points: int
    credits_obtained: int
    credits_total: int

    @property
    def average_text(self) -> str:
        if self.average == 10:
            return "10.00"
        return f"{self.average:f}"[:4]

    @property
    def points_text(self) -> str:
        return f"{self.credit_points}/{self.credits_total * _POINTS_PER_CREDIT}"

    @property
    def credits_text(self) -> str:
        return f"{self.credits_obtained}/{self.credits_total}"


def _describe(evaluation: Evaluation) -> str:
    return f"{evaluation.weight:f}"[:4] + " - " + evaluation.kind + " (" + f"{evaluation.maximum:f}"[:4] + ")"


def build_rows(
    subjects: Iterable[Subject],
    series: int,
    chosen: Iterable[Subject],
    scholarship_title: Widget,
) -> list[SubjectRow]:
    """Lay out a row for each compulsory subject and each chosen one."""
    chosen = list(chosen)
    rows: list[SubjectRow] = []
    x, y = _LEFT, _TOP
    for subject in subjects:
        if (subject.optional or subject.facultative) and subject not in chosen:
            continue
        if len(rows) in _BAND_TOPS:
            x, y = _LEFT, _BAND_TOPS[len(rows)]
        grading = subject.grading(series)
        final = grading.final_grade

        title = subject_title((x, y), subject.name)
        if final is not None and final < PASS_GRADE:
            title.change_color(RED)
            scholarship_title.change_color(RED)
        final_box = final_grade_box((x + _FINAL_OFFSET, y), "" if final is None else str(final))
        row = SubjectRow(subject, title, final_box)

        line_y = y
        for evaluation in grading.evaluations:
            line_y += _LINE_STEP
            label = evaluation_title((x, line_y), _describe(evaluation))
            text = INPUT_PROMPT
            if evaluation.grade is not None:
                text += f"{evaluation.grade:f}"[:5]
            grade_field = grade_input((x + _INPUT_OFFSET, line_y), text)
            if evaluation.below_threshold():
                title.change_color(RED)
                scholarship_title.change_color(RED)
            save = save_button((x + _SAVE_OFFSET, line_y), "OK")
            grade_field.clickable = True
            save.clickable = True
            row.labels.append(label)
            row.inputs.append(grade_field)
            row.save_buttons.append(save)

        rows.append(row)
        x += _COLUMN_STEP
    return rows


def compute_totals(rows: Iterable[SubjectRow], subjects: Iterable[Subject]) -> Totals:
    """Sum up the final grades shown in ``rows``."""
    rows = list(rows)
    by_name: dict[str, Subject] = {}
    for subject in subjects:
        by_name.setdefault(subject.name, subject)

    grade_sum = 0.0
    points = 0
    obtained = 0
    total = 0
    for row in rows:
        subject = by_name.get(row.title.text)
        credits = subject.credits if subject is not None else 0
        facultative = subject.facultative if subject is not None else False
        if row.final_box.text:
            grade = float(row.final_box.text)
            grade_sum += grade
            if not facultative:
                if row.title.color != RED:
                    points = int(points + grade * credits)
                    obtained += credits
                total += credits
        elif not facultative:
            total += credits

    average = grade_sum / len(rows) if rows else math.nan
    return Totals(average, points, obtained, total)


class GradePage:
    """Grade entry for the chosen subjects of one series, with summary boxes.

    When ``data_path`` is given, every accepted grade is written back to it.
    """

    def __init__(
        self,
        subjects: Iterable[Subject],
        series: int,
        chosen: Iterable[Subject],
        data_path: PathType | None = None,
    ) -> None:
        self.subjects = list(subjects)
        self.series = series
        self.data_path = data_path

        self.scholarship_title = average_title((_SIDE_X, 5), "SCHOLARSHIP")
        self.scholarship_value = average_display((_SIDE_X, 40), "")
        self.points_title = average_title((_SIDE_X, 80), "CREDIT POINTS")
        self.points_value = average_display((_SIDE_X, 115), "")
        self.credits_title = average_title((_SIDE_X, 155), "CREDITS")
        self.credits_value = average_display((_SIDE_X, 190), "")
        self.instructions = [
            TitleText((_SIDE_X, top), (195, height), 14, text, YELLOW)
            for top, height, text in _INSTRUCTIONS
        ]

        self.rows = build_rows(self.subjects, series, chosen, self.scholarship_title)
        self.totals = self.refresh_totals()

    @property
    def widgets(self) -> list[Widget]:
        """Every widget of the page, in display order."""
        result: list[Widget] = [
            self.scholarship_title,
            self.points_title,
            self.credits_title,
            self.scholarship_value,
            self.points_value,
            self.credits_value,
            *self.instructions,
        ]
        for row in self.rows:
            result.extend(row.widgets)
        return result

    def _mark_failed(self, row: SubjectRow) -> None:
        row.title.change_color(RED)
        self.scholarship_title.change_color(RED)

    def _mark_passed(self, row: SubjectRow) -> None:
        row.title.change_color(GREEN)
        if not any(other.title.color == RED for other in self.rows):
            self.scholarship_title.change_color(MAGENTA)

    def enter_grade(self, row: SubjectRow, index: int, grade: float) -> int | None:
        """Store ``grade`` for evaluation ``index`` of ``row``.

        Returns the subject's final grade once every evaluation is graded,
        otherwise None. Raises InvalidInputError if the grade exceeds the
        evaluation's maximum.
        """
        grading = row.subject.grading(self.series)
        evaluation = grading.evaluations[index]
        if grade > evaluation.maximum:
            raise InvalidInputError(RED)

        evaluation.grade = grade
        if self.data_path is not None:
            save_grade(self.data_path, row.subject, self.series, index, grade)

        threshold_failed = any(e.below_threshold() for e in grading.evaluations)
        if not threshold_failed:
            if row.title.color == RED:
                self._mark_passed(row)
        elif row.title.color == GREEN:
            self._mark_failed(row)

        if not grading.is_complete():
            return None

        final = grading.compute_final()
        if self.data_path is not None:
            save_final_grade(self.data_path, row.subject, self.series)

        if final < PASS_GRADE and row.title.color == GREEN:
            self._mark_failed(row)
        elif final >= PASS_GRADE and row.title.color == RED and not threshold_failed:
            self._mark_passed(row)
        row.final_box.text = str(final)
        self.refresh_totals()
        return final

    def save_clicked(self, row: SubjectRow, index: int, button: Button, now: float) -> bool:
        """Handle the save button of an evaluation; flash green or red."""
        button.pressed_color = GREEN
        try:
            grade = parse_grade_input(row.inputs[index].text)
            button.animate_click(now)
            self.enter_grade(row, index, grade)
        except InvalidInputError as error:
            button.pressed_color = error.color
            button.animate_click(now)
            return False
        return True

    def refresh_totals(self) -> Totals:
        """Recompute the totals and show them in the summary boxes."""
        totals = compute_totals(self.rows, self.subjects)
        self.scholarship_value.text = totals.average_text
        self.points_value.text = totals.points_text
        self.credits_value.text = totals.credits_text
        self.totals = totals
        return totals