"""PatternHub - Design patterns learning hub with progress tracking."""

__version__ = "0.1.0"
