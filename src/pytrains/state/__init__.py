"""State/store layer.

This package is the single source of truth for the live train table: it
merges each poll into per-train state, keeps positional history, derives
speed when the feed omits it and evicts trains that disappear.
"""
