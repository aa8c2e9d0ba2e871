[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "arduserial"
version = "0.1.0"
description = "Talk to an Arduino over a serial line: a line-based calculator client and an LED blink/receive loop"
requires-python = ">=3.10"
dependencies = [
    "pyserial",
]
keywords = ["arduino", "serial", "uart", "calculator", "blink"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Terminals :: Serial",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
arduserial-calc = "arduserial.calculator:main"
arduserial-blink = "arduserial.blink:main"

[tool.hatch.build.targets.wheel]
packages = ["arduserial"]

[tool.pytest.ini_options]
addopts = "-ra"
