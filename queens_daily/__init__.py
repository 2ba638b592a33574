"""Daily Queens puzzle: seeded region generation, backtracking solver and a Flask API."""

__version__ = "1.0.0"
