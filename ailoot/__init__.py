"""AI-powered loot generator."""

__version__ = "1.0.0"
