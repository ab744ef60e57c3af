"""Map capabilities and visibility computation."""
