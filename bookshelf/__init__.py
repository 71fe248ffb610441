"""Bookshelf: personal book catalogue backed by SQLite and the NDL search API."""

__version__ = "0.1.0"
