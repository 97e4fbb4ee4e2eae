"""Package.resolved lock file support."""
