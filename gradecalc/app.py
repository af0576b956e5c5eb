"""The application window: widget registry, input dispatch and page flow."""

from __future__ import annotations

import argparse
import time
from collections.abc import Iterable

from .datafile import PathType, check_files, load_subjects, subjects_for_year
from .errors import InvalidFileContentError, InvalidFilePathError
from .gradebook import GradePage
from .models import Subject
from .selection import OptionPage, parse_series
from .widgets import (
    BLACK,
    BLUE,
    GREEN,
    MAGENTA,
    RED,
    WHITE,
    YELLOW,
    Button,
    TextInput,
    TitleText,
    Widget,
    series_button,
)

WINDOW_SIZE = (1900, 980)
WINDOW_TITLE = "Grade calculator"
FRAME_RATE = 60
SERIES_LABELS = ("13", "14", "15", "23", "24", "25", "33", "34", "35")
DIGIT_KEYS = frozenset("0123456789.")
EMPTY_INPUTS = ("> ", "> |")

DEFAULT_DATA = "materii.txt"
DEFAULT_FONT = "Roboto-Black.ttf"


class Application:
    """Holds the widgets on screen and reacts to keys and clicks.

    Time is supplied through :meth:`update`; clicks and keys use the time
    of the most recent update.
    """

    def __init__(
        self,
        subjects: Iterable[Subject],
        data_path: PathType | None = None,
        font_path: PathType | None = None,
        now: float | None = None,
    ) -> None:
        self.subjects = list(subjects)
        self.data_path = data_path
        self.font_path = font_path
        self.now = time.monotonic() if now is None else now
        self.running = True

        self.objects: list[Widget] = []
        self.clickable_objects: list[Widget] = []
        self.active_input: TextInput | None = None
        self.clicked: Widget | None = None

        self.year: int | None = None
        self.series: int | None = None
        self.option_page: OptionPage | None = None
        self.grade_page: GradePage | None = None
        self.forward_button: Button | None = None

        self.title = TitleText(
            (0, 0), (1900, 135), 80, "Welcome", YELLOW, (RED, GREEN, BLUE)
        )
        self.title.animate_colors(self.now)
        self.add_object(self.title)

        self.series_prompt = TitleText((0, 155), (380, 85), 50, "Choose the series", YELLOW)
        self.add_object(self.series_prompt)

        self.series_buttons: list[Button] = []
        for offset, label in enumerate(SERIES_LABELS):
            button = series_button((400 + 100 * offset, 155), label)
            button.clickable = True
            self.series_buttons.append(button)
            self.add_object(button)

    # -- registry -----------------------------------------------------------

    def add_object(self, widget: Widget) -> None:
        """Show ``widget``; clickable widgets also receive clicks."""
        self.objects.append(widget)
        if widget.clickable:
            self.clickable_objects.append(widget)

    def remove_object(self, widget: Widget) -> None:
        """Stop showing ``widget`` and stop it receiving clicks."""
        self.objects = [w for w in self.objects if w is not widget]
        self.remove_clickable(widget)

    def remove_clickable(self, widget: Widget) -> None:
        """Keep showing ``widget`` but stop it receiving clicks."""
        self.clickable_objects = [w for w in self.clickable_objects if w is not widget]

    # -- input --------------------------------------------------------------

    def handle_key(self, key: str) -> None:
        """React to a key name such as "7", ".", "backspace" or "escape"."""
        if key == "escape":
            self.running = False
            return
        if self.active_input is None:
            return
        if len(key) == 1 and key in DIGIT_KEYS:
            self.active_input.push_character(key, self.now)
        elif key == "backspace" and self.active_input.text not in EMPTY_INPUTS:
            self.active_input.pop_character(self.now)

    def handle_click(self, x: float, y: float) -> Widget | None:
        """Dispatch a left click at ``(x, y)``; return the widget hit, if any."""
        target = next((w for w in self.clickable_objects if w.contains(x, y)), None)
        if target is None:
            return None
        self.clicked = target
        try:
            self._dispatch(target)
        finally:
            self.clicked = None
        return target

    def update(self, now: float) -> None:
        """Advance every widget's animation to ``now``."""
        self.now = now
        for widget in self.objects:
            widget.update(now)

    # -- page flow ----------------------------------------------------------

    def _dispatch(self, target: Widget) -> None:
        page = self.option_page
        if any(target is b for b in self.series_buttons):
            self._choose_series(target)
        elif page is not None and any(target is b for b in page.optional_buttons):
            for button in page.select_optional(target):
                self.remove_clickable(button)
        elif page is not None and any(target is b for b in page.facultative_buttons):
            for button in page.select_facultative(target):
                self.remove_clickable(button)
        elif self.forward_button is not None and target is self.forward_button:
            if page is not None and page.selection_complete():
                self._open_grade_page()
        elif self.grade_page is not None:
            self._grade_click(target)

    def _choose_series(self, button: Button) -> None:
        for series_btn in self.series_buttons:
            series_btn.clickable = False
            self.remove_clickable(series_btn)
        button.animate_click(self.now)

        self.forward_button = Button((1300, 155), (185, 85), 50, "Next", MAGENTA, RED)
        self.forward_button.clickable = True
        self.add_object(self.forward_button)

        self.year, self.series = parse_series(button.text)
        self.subjects = subjects_for_year(self.subjects, self.year)
        self.option_page = OptionPage(self.subjects, self.year)
        for widget in self.option_page.widgets:
            self.add_object(widget)

    def _open_grade_page(self) -> None:
        page = self.option_page
        chosen = page.chosen_subjects()
        first_page = [self.title, self.series_prompt, self.forward_button]
        first_page.extend(self.series_buttons)
        first_page.extend(page.widgets)
        for widget in first_page:
            self.remove_object(widget)
        self.forward_button = None
        self.series_buttons = []
        self.option_page = None

        self.grade_page = GradePage(self.subjects, self.series, chosen, self.data_path)
        for widget in self.grade_page.widgets:
            self.add_object(widget)

    def _grade_click(self, target: Widget) -> None:
        for row in self.grade_page.rows:
            if any(target is field for field in row.inputs):
                if self.active_input is not None:
                    self.active_input.stop_animation()
                target.animate_input(self.now)
                self.active_input = target
                return
            for index, save in enumerate(row.save_buttons):
                if save is target:
                    self.grade_page.save_clicked(row, index, save, self.now)
                    return

    # -- window -------------------------------------------------------------

    def run(self) -> None:
        """Open the window and run the event loop until it is closed."""
        import pygame

        pygame.init()
        try:
            screen = pygame.display.set_mode(WINDOW_SIZE)
            pygame.display.set_caption(WINDOW_TITLE)
            fonts: dict[int, pygame.font.Font] = {}
            clock = pygame.time.Clock()
            font_path = None if self.font_path is None else str(self.font_path)

            def font_for(size: int) -> pygame.font.Font:
                if size not in fonts:
                    fonts[size] = pygame.font.Font(font_path, size)
                return fonts[size]

            while self.running:
                self.update(time.monotonic())
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.running = False
                    elif event.type == pygame.KEYDOWN:
                        self.handle_key(pygame.key.name(event.key))
                    elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                        self.handle_click(*event.pos)
                if not self.running:
                    break
                screen.fill(WHITE)
                for widget in self.objects:
                    _draw(screen, widget, font_for(widget.font_size))
                pygame.display.flip()
                clock.tick(FRAME_RATE)
        finally:
            pygame.quit()


def _draw(screen, widget: Widget, font) -> None:
    x, y = widget.position
    width, height = widget.size
    screen.fill(widget.fill, (int(x), int(y), int(width), int(height)))
    surfaces = [font.render(line, True, BLACK) for line in widget.text.split("\n")]
    top = y + height / 2 - sum(s.get_height() for s in surfaces) / 2
    for surface in surfaces:
        if widget.anchor == "midleft":
            left = x + width / 20
        else:
            left = x + width / 2 - surface.get_width() / 2
        screen.blit(surface, (int(left), int(top)))
        top += surface.get_height()


def main(argv: list[str] | None = None) -> int:
    """Load the subject data and run the grade calculator window."""
    parser = argparse.ArgumentParser(description="University grade calculator.")
    parser.add_argument("--data", default=DEFAULT_DATA, help="subject data file")
    parser.add_argument("--font", default=DEFAULT_FONT, help="TrueType font file")
    args = parser.parse_args(argv)
    try:
        check_files(args.font, args.data)
        subjects = load_subjects(args.data)
        Application(subjects, data_path=args.data, font_path=args.font).run()
    except InvalidFilePathError as error:
        print(error.message)
    except InvalidFileContentError as error:
        print(f"Line {error.line}\n{error.message}")
    return 0