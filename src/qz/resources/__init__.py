"""Data files shipped with the package (the embedded default word list)."""
