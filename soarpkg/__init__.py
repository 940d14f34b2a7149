"""Configuration, query parsing, metadata storage and desktop integration for portable Linux packages."""

__version__ = "0.1.0"