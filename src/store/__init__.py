"""Storage layer for source and target block stores.

This module opens SQLite handles and owns every SQL statement.
Handles are always passed in explicitly so stores stay swappable.
"""
