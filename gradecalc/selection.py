"""First page: the series choice and the optional / facultative subject picks."""

from __future__ import annotations

from collections.abc import Iterable

from .models import Subject
from .widgets import (
    CYAN,
    YELLOW,
    Button,
    TitleText,
    Widget,
    option_button,
    year_three_option_button,
)

FIRST_SEMESTER_OPTIONALS = 23
YEAR_THREE_OPTIONALS = 41
OPTIONALS_PER_SEMESTER = 3

_LIST_TOP = 330.0
_ROW_STEP = 75.0
_TITLE_STEP = 80.0
_Y3_ROW_STEP = 45.0
_Y3_COLUMN_STEP = 425.0
_Y3_BOTTOM = 950.0

_FACULTATIVE_PROMPT = "Choose the facultative subjects you want to attend"
_OPTIONAL_PROMPT = "Choose the optional subject you will attend"
_YEAR_THREE_PROMPT = (
    "Choose the optional subjects you will attend.\n"
    "Pick 3 for the first semester (first two columns) and 3 for the "
    "second semester (last two columns)."
)


def parse_series(text: str) -> tuple[int, int]:
    """Split a series label such as "13" into ``(year, series)``."""
    text = text.strip()
    if len(text) < 2 or not text[0].isdigit() or not text[-1].isdigit():
        raise ValueError(f"not a series label: {text!r}")
    return int(text[0]), int(text[-1])


class OptionPage:
    """Buttons for choosing the optional and facultative subjects of one year."""

    def __init__(self, subjects: Iterable[Subject], year: int) -> None:
        self.subjects = list(subjects)
        self.year = year
        self.facultative_title: TitleText | None = None
        self.optional_title: TitleText | None = None
        self.facultative_buttons: list[Button] = []
        self.optional_buttons: list[Button] = []
        self.selected_optionals: list[Subject] = []
        self.selected_facultatives: list[Subject] = []

        if year == 1:
            self._add_facultatives()
        elif year == 2:
            self._add_optionals(self._add_facultatives())
        elif year == 3:
            self._add_year_three_optionals()
        else:
            raise ValueError(f"no option page for year {year}")

    @property
    def widgets(self) -> list[Widget]:
        """Every widget of the page, in display order."""
        result: list[Widget] = []
        if self.facultative_title is not None:
            result.append(self.facultative_title)
            result.extend(self.facultative_buttons)
        if self.optional_title is not None:
            result.append(self.optional_title)
            result.extend(self.optional_buttons)
        return result

    def _add_facultatives(self) -> float:
        self.facultative_title = TitleText((0, 250), (1000, 75), 40, _FACULTATIVE_PROMPT, YELLOW)
        y = _LIST_TOP
        for subject in self.subjects:
            if subject.facultative:
                self.facultative_buttons.append(self._clickable(option_button((0, y), subject.name)))
                y += _ROW_STEP
        return y

    def _add_optionals(self, y: float) -> None:
        self.optional_title = TitleText((0, y), (1000, 75), 40, _OPTIONAL_PROMPT, YELLOW)
        y += _TITLE_STEP
        for subject in self.subjects:
            if subject.optional:
                self.optional_buttons.append(self._clickable(option_button((0, y), subject.name)))
                y += _ROW_STEP

    def _add_year_three_optionals(self) -> None:
        self.optional_title = TitleText((0, 250), (1700, 75), 30, _YEAR_THREE_PROMPT, YELLOW)
        x, y = 0.0, _LIST_TOP
        for subject in self.subjects:
            if not subject.optional:
                continue
            self.optional_buttons.append(
                self._clickable(year_three_option_button((x, y), subject.name))
            )
            y += _Y3_ROW_STEP
            if y > _Y3_BOTTOM or len(self.optional_buttons) == FIRST_SEMESTER_OPTIONALS:
                x += _Y3_COLUMN_STEP
                y = _LIST_TOP

    @staticmethod
    def _clickable(button: Button) -> Button:
        button.clickable = True
        return button

    def _subject_named(self, name: str) -> Subject | None:
        return next((subject for subject in self.subjects if subject.name == name), None)

    def select_optional(self, button: Button) -> list[Button]:
        """Record a click on an optional subject; return the buttons it disabled."""
        if button not in self.optional_buttons:
            raise ValueError(f"{button!r} is not an optional subject button")
        deactivated: list[Button] = []
        if self.year == 2:
            deactivated = [b for b in self.optional_buttons if b.clickable]
            for b in deactivated:
                b.clickable = False
            button.change_color(CYAN)
        elif self.year == 3:
            button.change_color(CYAN)
            button.clickable = False
            deactivated.append(button)
            index = self.optional_buttons.index(button)
            if index < FIRST_SEMESTER_OPTIONALS:
                group = self.optional_buttons[:FIRST_SEMESTER_OPTIONALS]
            else:
                group = self.optional_buttons[FIRST_SEMESTER_OPTIONALS:YEAR_THREE_OPTIONALS]
            if sum(not b.clickable for b in group) == OPTIONALS_PER_SEMESTER:
                for b in group:
                    if b.clickable:
                        b.clickable = False
                        deactivated.append(b)
        subject = self._subject_named(button.text)
        if subject is not None:
            self.selected_optionals.append(subject)
        return deactivated

    def select_facultative(self, button: Button) -> list[Button]:
        """Record a click on a facultative subject; return the buttons it disabled."""
        if button not in self.facultative_buttons:
            raise ValueError(f"{button!r} is not a facultative subject button")
        button.change_color(CYAN)
        button.clickable = False
        subject = self._subject_named(button.text)
        if subject is not None:
            self.selected_facultatives.append(subject)
        return [button]

    def selection_complete(self) -> bool:
        """True once no optional subject can still be picked."""
        return not any(button.clickable for button in self.optional_buttons)

    def chosen_subjects(self) -> list[Subject]:
        """Compulsory subjects plus the picked optional and facultative ones."""
        return [
            subject
            for subject in self.subjects
            if (subject.optional and subject in self.selected_optionals)
            or (subject.facultative and subject in self.selected_facultatives)
            or (not subject.optional and not subject.facultative)
        ]