"""Chat helper bot: versioned tags and GitHub reference expansion."""

__version__ = "0.1.0"
