"""vocato: spaced-repetition vocabulary study engine."""

__version__ = "0.1.0"
