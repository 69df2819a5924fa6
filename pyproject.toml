[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pyminishell"
version = "0.1.0"
description = "A small interactive command shell with variable expansion, built-in commands and program execution"
requires-python = ">=3.10"
dependencies = []
keywords = ["shell", "command-line", "builtins", "repl", "environment"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: System Shells",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pyminishell = "pyminishell.shell:main"

[tool.hatch.build.targets.wheel]
packages = ["pyminishell"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
