"""Release decision and command preparation services."""
