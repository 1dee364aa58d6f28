"""Game state, queries and persistence."""
