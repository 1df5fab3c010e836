[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xinukit"
version = "0.1.0"
description = "A small C-style runtime library: string routines, printf/scanf formatting, a seeded generator, quicksort, a simulated serial terminal driver and a device table"
requires-python = ">=3.10"
dependencies = []
keywords = ["libc", "printf", "scanf", "tty", "uart", "string", "embedded"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["xinukit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
