"""Issue tracker backend."""
