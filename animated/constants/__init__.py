"""Library-wide constants."""
