"""CleanStream - content-filter skip engine."""

__version__ = "1.0.0"
