[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "escdrive"
version = "0.1.0"
description = "DShot frames, serial packet header fields, protocol register ids and fixed-point maths for a six-step brushless ESC"
requires-python = ">=3.10"
dependencies = []
keywords = ["esc", "dshot", "bldc", "motor-control", "fixed-point", "crc4", "cordic"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["escdrive"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
