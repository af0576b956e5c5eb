"""Grade calculator for university subjects: data file, grade logic and a pygame window."""

__version__ = "0.1.0"