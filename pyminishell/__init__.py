"""A small interactive command shell with variable expansion, built-in commands and program execution."""

__version__ = "0.1.0"