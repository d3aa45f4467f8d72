"""Conversion options files."""
