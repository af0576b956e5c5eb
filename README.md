# gradecalc

A small desktop application, drawn with pygame, for keeping track of
university grades.

You pick your study series, choose your optional and facultative subjects,
and then enter the score you obtained at each evaluation. Once every
evaluation of a subject has a score, gradecalc computes the subject's final
grade (the weighted sum of the scores, rounded and capped at 10) and updates
three totals shown on the right of the window:

- **SCHOLARSHIP**: the average of the final grades shown, over all listed subjects;
- **CREDIT POINTS**: grade × credits summed over passed subjects, out of 10 × total credits;
- **CREDITS**: credits of passed subjects out of the total credits.

Facultative subjects do not count towards credits or credit points. A subject
title turns red when a score is below the pass threshold of one of its
evaluations or its final grade is below 5; the SCHOLARSHIP heading turns red
as long as any subject is red. Red subjects bring no credits or credit points.

Every score you save, and every final grade computed, is written back to the
subject data file, so your progress is kept between runs.

## Installation

```
pip install .
```

## Running

```
gradecalc [--data FILE] [--font FILE]
```

- `--data`: the subject data file (default `materii.txt` in the current directory);
- `--font`: the TrueType font used for all text (default `Roboto-Black.ttf`).

Both files must exist. If one cannot be opened, a message is printed and the
program ends; if the data file is malformed, the offending line number is
printed with the message.

The window opens on the series page. Click your series: the first digit is
the year, the last the series (for example `23` means year 2, series 3).
Then pick your subjects:

- year 1: any number of facultative subjects;
- year 2: any facultative subjects and exactly one optional subject;
- year 3: three optional subjects from the first 23 (first semester) and
  three from the rest (second semester).

Press **Next** once the optional choice is complete. On the grades page,
click an input box, type the score with the digit keys and `.`, use
Backspace to correct it, and press **OK** to save it. **OK** flashes green
when the score is accepted and red when it is rejected (empty, malformed, or
above the evaluation's maximum). Press Escape or close the window to quit.

## Data file

Subjects are read from a plain-text file. Each subject is a block of lines
with one grading scheme per series (3, 4 and 5), ending with a `-` line:

```
Subject name
credit: 5
an: 1
optional: 0
facultativ: 0
nota_finala_seria3: -1
Exam
parte: 6
max: 10
prag: 5
nota: -1
Lab
parte: 4
max: 10
prag: 0
nota: -1
nota_finala_seria4: -1
...
nota_finala_seria5: -1
...
-
```

`credit` must be between 2 and 6, `an` (year) between 1 and 3, `parte`
(points of the final grade) between 0 and 10, and `max` and `prag` (pass
threshold) not negative. A value of `-1` for `nota` or a final grade means
"not entered yet". Any other deviation raises
`gradecalc.errors.InvalidFileContentError` carrying the line number.

## Using the library

The pieces work without a window:

- `gradecalc.datafile`: `load_subjects`, `parse_subjects`, `subjects_for_year`,
  `save_grade`, `save_final_grade`, `check_files`;
- `gradecalc.models`: `Subject`, `Grading` (with `compute_final`) and `Evaluation`;
- `gradecalc.selection`: `parse_series` and `OptionPage`;
- `gradecalc.gradebook`: `GradePage`, `build_rows`, `compute_totals`,
  `parse_grade_input`;
- `gradecalc.app`: `Application`, which takes keys and clicks through
  `handle_key` and `handle_click` and time through `update`, and opens the
  window with `run`.

## Development

```
pip install .[test]
pytest
```