[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tuidict"
version = "0.1.0"
description = "Terminal dictionary browser for dictd-format dictionaries with a built-in downloader"
requires-python = ">=3.10"
keywords = ["dictionary", "dictd", "translation", "terminal", "curses", "tui"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console :: Curses",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Linguistic",
]
dependencies = [
    "requests",
    "platformdirs",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
tuidict = "tuidict.main:main"

[tool.hatch.build.targets.wheel]
packages = ["tuidict"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
