"""prodmatrix — version-aware registry of software product metadata."""

__version__ = "0.1.0"
