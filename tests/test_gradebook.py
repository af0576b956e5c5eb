import pytest

from gradecalc.datafile import load_subjects
from gradecalc.errors import InvalidInputError
from gradecalc.gradebook import (
    GradePage,
    build_rows,
    compute_totals,
    parse_grade_input,
)
from gradecalc.models import Evaluation, Grading, Subject
from gradecalc.widgets import GREEN, MAGENTA, RED, average_title


def record(name, credits=5, year=1, optional=0, facultative=0,
           evaluations=(("Exam", 10, 10, 5),)):
    lines = [name, f"credit: {credits}", f"an: {year}",
             f"optional: {optional}", f"facultativ: {facultative}"]
    for series in (3, 4, 5):
        lines.append(f"nota_finala_seria{series}: -1")
        for kind, weight, maximum, threshold in evaluations:
            lines += [kind, f"parte: {weight}", f"max: {maximum}",
                      f"prag: {threshold}", "nota: -1"]
    lines.append("-")
    return lines


def write_data(tmp_path, *records):
    path = tmp_path / "subjects.txt"
    path.write_text("".join(line + "\n" for rec in records for line in rec), encoding="utf-8")
    return path, load_subjects(path)


def simple_subject(name, final=None, credits=4, facultative=False, optional=False):
    gradings = [Grading([], final) for _ in range(3)]
    return Subject(name, credits, gradings, 1, optional, facultative)


@pytest.mark.parametrize("text,expected", [("> 7.5", 7.5), ("> 8|", 8.0), ("> 10", 10.0)])
def test_parse_grade_input(text, expected):
    assert parse_grade_input(text) == expected


@pytest.mark.parametrize("text", ["> ", "> |", "> .", "> 1.2.3"])
def test_parse_grade_input_rejects(text):
    with pytest.raises(InvalidInputError) as info:
        parse_grade_input(text)
    assert info.value.color == RED


def test_build_rows_layout_and_filter():
    subjects = [simple_subject(f"S{i}") for i in range(7)]
    subjects.append(simple_subject("Opt", optional=True))
    heading = average_title((0, 0), "x")
    rows = build_rows(subjects, 3, [], heading)
    assert [row.subject.name for row in rows] == [f"S{i}" for i in range(7)]
    assert rows[0].final_box.position[0] - rows[0].title.position[0] == 235
    assert rows[1].title.position[0] - rows[0].title.position[0] == 280
    assert rows[6].title.position == (5.0, 325.0)

    chosen_rows = build_rows(subjects, 3, [subjects[-1]], heading)
    assert chosen_rows[-1].subject is subjects[-1]


def test_build_rows_marks_failed_final():
    heading = average_title((0, 0), "x")
    subjects = [simple_subject("Low", final=3), simple_subject("High", final=9)]
    rows = build_rows(subjects, 3, [], heading)
    assert rows[0].title.color == RED
    assert rows[1].title.color == GREEN
    assert heading.color == RED
    assert rows[1].final_box.text == "9"


def test_build_rows_evaluation_widgets():
    evaluation = Evaluation("Exam", 10.0, 10.0, 5.0, 7.0)
    subject = Subject("Algebra", 5, [Grading([evaluation]) for _ in range(3)], 1)
    rows = build_rows([subject], 3, [], average_title((0, 0), "x"))
    row = rows[0]
    assert row.labels[0].text == "10.0 - Exam (10.0)"
    assert row.inputs[0].text.startswith("> 7.0")
    assert row.inputs[0].clickable and row.save_buttons[0].clickable
    assert row.inputs[0].position[1] - row.title.position[1] == 35
    assert row.widgets[:2] == [row.title, row.final_box]


def test_compute_totals_excludes_facultative_and_failed():
    passed = simple_subject("A", final=8, credits=4)
    failed = simple_subject("B", final=3, credits=6)
    extra = simple_subject("C", final=10, credits=2, facultative=True)
    subjects = [passed, failed, extra]
    rows = build_rows(subjects, 3, [extra], average_title((0, 0), "x"))
    totals = compute_totals(rows, subjects)
    assert totals.credits_total == passed.credits + failed.credits
    assert totals.credits_obtained == passed.credits
    assert totals.credit_points == 8 * passed.credits
    assert totals.average == pytest.approx((8 + 3 + 10) / 3)
    assert totals.credits_text == f"{passed.credits}/{passed.credits + failed.credits}"


def test_totals_ten_average_text(tmp_path):
    path, subjects = write_data(tmp_path, record("Algebra"))
    page = GradePage(subjects, 3, [], path)
    assert page.enter_grade(page.rows[0], 0, 10.0) == 10
    assert page.scholarship_value.text == "10.00"


def test_enter_grade_persists_and_totals(tmp_path):
    path, subjects = write_data(tmp_path, record("Algebra"), record("Sport", 2, facultative=1))
    page = GradePage(subjects, 3, [subjects[1]], path)
    assert len(page.rows) == 2
    final = page.enter_grade(page.rows[0], 0, 8.0)
    assert final == 8
    assert page.rows[0].final_box.text == "8"
    assert page.points_value.text == "40/50"
    assert page.credits_value.text == "5/5"

    reloaded = load_subjects(path)
    assert reloaded[0].grading(3).evaluations[0].grade == 8.0
    assert reloaded[0].grading(3).final_grade == 8
    assert reloaded[0].grading(4).final_grade is None


def test_partial_grades_leave_final_empty(tmp_path):
    evals = (("Exam", 6, 10, 5), ("Lab", 4, 10, 5))
    path, subjects = write_data(tmp_path, record("Algebra", evaluations=evals))
    page = GradePage(subjects, 4, [], path)
    assert page.enter_grade(page.rows[0], 1, 9.0) is None
    assert page.rows[0].final_box.text == ""
    assert load_subjects(path)[0].grading(4).evaluations[1].grade == 9.0


def test_threshold_failure_and_recovery(tmp_path):
    evals = (("Exam", 6, 10, 5), ("Lab", 4, 10, 5))
    path, subjects = write_data(tmp_path, record("Algebra", evaluations=evals))
    page = GradePage(subjects, 3, [], path)
    row = page.rows[0]
    page.enter_grade(row, 0, 3.0)
    assert row.title.color == RED
    assert page.scholarship_title.color == RED
    page.enter_grade(row, 0, 6.0)
    assert row.title.color == GREEN
    assert page.scholarship_title.color == MAGENTA


def test_low_final_grade_fails_subject(tmp_path):
    path, subjects = write_data(tmp_path, record("Algebra", evaluations=(("Exam", 10, 10, 0),)))
    page = GradePage(subjects, 3, [], path)
    assert page.enter_grade(page.rows[0], 0, 2.0) == 2
    assert page.rows[0].title.color == RED
    assert page.totals.credits_obtained == 0


def test_grade_above_maximum_rejected(tmp_path):
    path, subjects = write_data(tmp_path, record("Algebra"))
    page = GradePage(subjects, 3, [], path)
    with pytest.raises(InvalidInputError):
        page.enter_grade(page.rows[0], 0, 11.0)
    assert subjects[0].grading(3).evaluations[0].grade is None


def test_save_clicked_valid_and_invalid(tmp_path):
    path, subjects = write_data(tmp_path, record("Algebra"))
    page = GradePage(subjects, 3, [], path)
    row = page.rows[0]
    button = row.save_buttons[0]

    row.inputs[0].text = "> 11"
    assert page.save_clicked(row, 0, button, 0.0) is False
    assert button.pressed_color == RED

    row.inputs[0].text = "> "
    assert page.save_clicked(row, 0, button, 1.0) is False
    assert button.pressed_color == RED

    row.inputs[0].text = "> 7|"
    assert page.save_clicked(row, 0, button, 2.0) is True
    assert button.pressed_color == GREEN
    button.update(3.0)
    assert button.fill == GREEN
    assert load_subjects(path)[0].grading(3).evaluations[0].grade == 7.0


def test_page_without_path_keeps_memory_only():
    evaluation = Evaluation("Exam", 10.0, 10.0, 5.0)
    subject = Subject("Algebra", 5, [Grading([evaluation]) for _ in range(3)], 1)
    page = GradePage([subject], 3, [])
    assert page.credits_value.text == "0/5"
    assert page.enter_grade(page.rows[0], 0, 9.0) == 9
    assert subject.grading(3).final_grade == 9
    assert page.scholarship_title in page.widgets