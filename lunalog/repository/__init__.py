"""Repository layer: DB access helpers (SQLite).

Keep functions thin and focused, so the store facade avoids SQL strings.
"""
