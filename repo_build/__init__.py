"""Command wrappers for building, linting, formatting and testing TypeScript packages."""

__version__ = "0.1.0"
