"""Package dependency graph for the target Go module."""
