"""Structural patterns and checksum validators for Mexican identifiers."""
