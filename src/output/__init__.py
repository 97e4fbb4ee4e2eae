"""Console and JSON rendering."""
