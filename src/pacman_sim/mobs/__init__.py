"""Mobile units and their movement logic."""
