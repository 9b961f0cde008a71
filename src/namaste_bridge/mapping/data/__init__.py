"""Packaged NAMASTE reference datasets."""
