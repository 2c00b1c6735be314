"""HTTP service serving health, user and member listings from an SQL database."""

__version__ = "0.1.0"