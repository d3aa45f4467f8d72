"""Conversion core: property tables, stop functions, filters and layers."""
