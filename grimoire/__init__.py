"""Utilities for file lists, text positions, templates, logging, date strings and language servers."""

__version__ = "0.1.0"