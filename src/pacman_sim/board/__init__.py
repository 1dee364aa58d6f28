"""Board, tiles and coordinate geometry."""
