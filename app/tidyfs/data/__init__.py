"""Bundled data files for tidyfs."""
