"""Manifest discovery, extraction and merging."""
