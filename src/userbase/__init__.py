"""userbase: user directory with soft delete and accent-insensitive search."""

__version__ = "0.1.0"
