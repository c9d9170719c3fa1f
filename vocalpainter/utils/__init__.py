"""File helpers for settings and exported memories."""
