"""On-screen boxes: static labels, buttons, text inputs and animated titles.

Widgets hold only layout, text and colour state. Time is passed in
explicitly (seconds, any monotonic origin), so animations can be driven
by a real clock or stepped in tests. Widgets compare by identity.
"""

from __future__ import annotations

Color = tuple[int, int, int]
Vector = tuple[float, float]

BLACK: Color = (0, 0, 0)
WHITE: Color = (255, 255, 255)
RED: Color = (255, 0, 0)
GREEN: Color = (0, 255, 0)
BLUE: Color = (0, 0, 255)
YELLOW: Color = (255, 255, 0)
MAGENTA: Color = (255, 0, 255)
CYAN: Color = (0, 255, 255)

CURSOR = "|"
BUTTON_FLASH_SECONDS = 5.0
CURSOR_BLINK_SECONDS = 0.6
TITLE_PHASE_SECONDS = 5.0


class Widget:
    """A coloured rectangle with a line of text centred in it."""

    anchor = "center"

    def __init__(
        self,
        position: Vector,
        size: Vector,
        font_size: int,
        text: str,
        color: Color,
    ) -> None:
        self.position: Vector = (float(position[0]), float(position[1]))
        self.size: Vector = (float(size[0]), float(size[1]))
        self.font_size = font_size
        self.text = text
        self.color = color
        self.fill = color
        self.clickable = False
        self._clock: float | None = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.text!r} at {self.position})"

    def bounds(self) -> tuple[Vector, Vector]:
        """Return the top-left and bottom-right corners."""
        x, y = self.position
        width, height = self.size
        return (x, y), (x + width, y + height)

    def contains(self, x: float, y: float) -> bool:
        """True if the point lies inside the box, edges included."""
        (left, top), (right, bottom) = self.bounds()
        return left <= x <= right and top <= y <= bottom

    def change_color(self, color: Color) -> None:
        """Set both the resting colour and the colour currently shown."""
        self.color = color
        self.fill = color

    def update(self, now: float) -> None:
        """Advance any animation to time ``now``; plain widgets have none."""


class Button(Widget):
    """A clickable box that shows ``pressed_color`` for a while after a click."""

    def __init__(
        self,
        position: Vector,
        size: Vector,
        font_size: int,
        text: str,
        color: Color,
        pressed_color: Color,
    ) -> None:
        super().__init__(position, size, font_size, text, color)
        self.pressed_color = pressed_color

    def animate_click(self, now: float) -> None:
        """Start (or restart) the click flash at ``now``."""
        self._clock = now

    def update(self, now: float) -> None:
        if self._clock is None:
            return
        if now - self._clock < BUTTON_FLASH_SECONDS:
            self.fill = self.pressed_color
        else:
            self.fill = self.color


class TextInput(Widget):
    """An editable field of at most ``limit`` characters with a blinking cursor."""

    def __init__(
        self,
        position: Vector,
        size: Vector,
        font_size: int,
        text: str,
        color: Color,
        limit: int,
    ) -> None:
        super().__init__(position, size, font_size, text, color)
        self.limit = limit

    def update(self, now: float) -> None:
        if self._clock is None or now - self._clock <= CURSOR_BLINK_SECONDS:
            return
        self._clock = now
        if len(self.text) != self.limit:
            if self.text.endswith(CURSOR):
                self.text = self.text[:-1]
            else:
                self.text += CURSOR

    def push_character(self, character: str, now: float) -> None:
        """Append ``character`` unless the field is already full."""
        self.stop_animation()
        text = self.text + character
        if len(text) > self.limit:
            text = text[:-1]
        self.text = text
        self.animate_input(now)

    def pop_character(self, now: float) -> None:
        """Remove the last character."""
        self.stop_animation()
        self.text = self.text[:-1]
        self.animate_input(now)

    def animate_input(self, now: float) -> None:
        """Start (or restart) the cursor blink at ``now``."""
        self._clock = now

    def stop_animation(self) -> None:
        """Stop blinking and remove a visible cursor."""
        self._clock = None
        if self.text.endswith(CURSOR):
            self.text = self.text[:-1]


class TitleText(Widget):
    """A left-aligned label that can cycle through three colours."""

    anchor = "midleft"

    def __init__(
        self,
        position: Vector,
        size: Vector,
        font_size: int,
        text: str,
        color: Color,
        palette: tuple[Color, Color, Color] = (BLACK, BLACK, BLACK),
    ) -> None:
        super().__init__(position, size, font_size, text, color)
        self.palette = palette

    def animate_colors(self, now: float) -> None:
        """Start (or restart) the colour cycle at ``now``."""
        self._clock = now

    def update(self, now: float) -> None:
        if self._clock is None:
            return
        phase = int((now - self._clock) // TITLE_PHASE_SECONDS)
        if phase < 0:
            phase = 0
        if phase < len(self.palette):
            self.fill = self.palette[phase]
        elif phase == len(self.palette):
            self.fill = self.color
        else:
            self._clock = now
            self.fill = self.color


def series_button(position: Vector, text: str) -> Button:
    """Button for choosing a series such as "13"."""
    return Button(position, (85, 85), 50, text, GREEN, YELLOW)


def option_button(position: Vector, text: str) -> Button:
    """Button for an optional or facultative subject in years one and two."""
    return Button(position, (500, 70), 30, text, GREEN, YELLOW)


def year_three_option_button(position: Vector, text: str) -> Button:
    """Smaller button for a year-three optional subject."""
    return Button(position, (400, 40), 20, text, GREEN, YELLOW)


def save_button(position: Vector, text: str) -> Button:
    """Small button that saves the grade typed next to it."""
    return Button(position, (35, 35), 15, text, YELLOW, GREEN)


def final_grade_box(position: Vector, text: str) -> Button:
    """Box showing a subject's final grade."""
    return Button(position, (40, 35), 15, text, MAGENTA, MAGENTA)


def subject_title(position: Vector, text: str) -> TitleText:
    """Label with a subject's name."""
    return TitleText(position, (235, 35), 12, text, GREEN)


def evaluation_title(position: Vector, text: str) -> TitleText:
    """Label describing one evaluation of a subject."""
    return TitleText(position, (155, 35), 10, text, GREEN)


def average_title(position: Vector, text: str) -> TitleText:
    """Heading above one of the summary figures."""
    return TitleText(position, (195, 35), 20, text, MAGENTA)


def average_display(position: Vector, text: str) -> TitleText:
    """Box showing one of the summary figures."""
    return TitleText(position, (195, 35), 20, text, YELLOW)


def grade_input(position: Vector, text: str) -> TextInput:
    """Field where a grade is typed, limited to seven characters."""
    return TextInput(position, (75, 35), 15, text, GREEN, 7)