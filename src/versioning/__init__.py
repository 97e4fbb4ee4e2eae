"""Semantic versions, requirements and latest-version checks."""
