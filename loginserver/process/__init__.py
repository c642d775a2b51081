"""Pure functions that build or transform game data."""
