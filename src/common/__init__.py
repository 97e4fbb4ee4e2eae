"""Shared helpers for logging and HTTP access."""
