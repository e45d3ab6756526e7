"""Application events."""
