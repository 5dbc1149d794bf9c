"""A terminal diary that keeps one folder of text entries per day."""

__version__ = "0.1.0"