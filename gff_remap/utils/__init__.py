"""Utility modules for the GFF coordinate remapper."""
