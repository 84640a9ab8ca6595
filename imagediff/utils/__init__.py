"""Helpers around the comparison core: loading images from disk."""
