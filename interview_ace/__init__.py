"""Interview Ace: AI mock interview coaching service."""

__version__ = "1.0.0"
