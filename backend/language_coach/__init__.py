"""Language coach backend: practice evaluation, vocabulary lookup and scene-aware translation."""

__version__ = "0.1.0"
