"""Cooklang recipe collections: configuration, command line, tag validation, recipe search and web server helpers."""

__version__ = "0.1.0"