"""Browser-driven UI tests and the framework they run on."""
