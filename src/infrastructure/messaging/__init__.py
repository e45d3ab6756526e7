"""Outbound messaging."""
