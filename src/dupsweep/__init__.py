"""Find exact and near-duplicate files in a local directory tree."""

__version__ = "0.1.0"
