[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "shsyntax"
version = "0.1.0"
description = "Shell syntax tree nodes, source positions and brace expansion splitting"
requires-python = ">=3.10"
dependencies = []
keywords = ["shell", "bash", "posix", "mksh", "syntax", "ast", "brace-expansion"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["shsyntax"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"
