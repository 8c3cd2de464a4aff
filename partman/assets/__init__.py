"""Packaged configuration assets."""
