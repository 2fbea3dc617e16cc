"""trashcan: a freedesktop-style trash can for the command line."""

__version__ = "0.1.0"
