"""Repository layer: DB access helpers (SQLite).

Keep functions thin and focused, so services avoid catalog lookups and row plumbing.
"""
