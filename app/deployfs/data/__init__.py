"""Bundled data files for deployfs."""
