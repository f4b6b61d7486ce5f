[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "yal"
version = "1.0.0"
description = "Type system, compile-time values and file helpers for the yal language compiler"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "types", "language", "type-checking"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["yal"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
