# src/moded/__init__.py
"""moded: a small modal text editor for the terminal."""

__version__ = "0.1.0"
