"""Batch jobs over many media files."""
