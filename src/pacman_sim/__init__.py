"""Deterministic Pac-Man-style simulation engine."""
