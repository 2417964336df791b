"""TestGenius: adaptive browser action tools for AI-planned end-to-end tests."""

__version__ = "0.1.0"
