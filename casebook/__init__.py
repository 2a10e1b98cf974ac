"""Casebook: a personal catalog of curated design references."""
