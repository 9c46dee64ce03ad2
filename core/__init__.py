"""Process-wide setup helpers."""
