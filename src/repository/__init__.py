"""Remote tag sources (git and hosting APIs)."""
