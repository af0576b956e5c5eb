[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gradecalc"
version = "0.1.0"
description = "Desktop grade calculator for university subjects: enter evaluation scores and see final grades, scholarship average, credit points and credits."
requires-python = ">=3.10"
keywords = ["grades", "calculator", "university", "credits", "scholarship", "pygame"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Intended Audience :: Education",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
gradecalc = "gradecalc.app:main"

[tool.hatch.build.targets.wheel]
packages = ["gradecalc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
