"""Subjects, their per-series grading schemes and evaluations."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

SERIES = (3, 4, 5)
MAX_FINAL_GRADE = 10


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


@dataclass
class Evaluation:
    """One graded component of a subject (exam, lab, project...).

    ``weight`` is how many points of the final grade it is worth and
    ``grade`` is the score obtained out of ``maximum``; ``None`` means
    the score has not been entered yet.
    """

    kind: str
    weight: float
    maximum: float
    threshold: float
    grade: float | None = None

    def below_threshold(self) -> bool:
        """True if a grade was entered and it is under the pass threshold."""
        return self.grade is not None and self.grade < self.threshold


@dataclass
class Grading:
    """The evaluations of a subject for one series, with its final grade."""

    evaluations: list[Evaluation] = field(default_factory=list)
    final_grade: int | None = None

    def is_complete(self) -> bool:
        """True once every evaluation has a grade."""
        return all(evaluation.grade is not None for evaluation in self.evaluations)

    def compute_final(self) -> int:
        """Compute, store and return the rounded final grade, capped at 10."""
        if not self.is_complete():
            raise ValueError("cannot compute a final grade before all grades are entered")
        total = sum(
            evaluation.weight * (evaluation.grade / evaluation.maximum)
            for evaluation in self.evaluations
        )
        self.final_grade = min(_round_half_away(total), MAX_FINAL_GRADE)
        return self.final_grade


@dataclass(eq=False)
class Subject:
    """A course; two subjects are the same when their names match."""

    name: str
    credits: int
    gradings: list[Grading]
    year: int
    optional: bool = False
    facultative: bool = False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Subject):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def grading(self, series: int) -> Grading:
        """Return the grading used by ``series`` (3, 4 or 5)."""
        index = series - SERIES[0]
        if not 0 <= index < len(self.gradings):
            raise IndexError(f"no grading for series {series}")
        return self.gradings[index]