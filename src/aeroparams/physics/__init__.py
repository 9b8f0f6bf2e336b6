"""Physics helpers."""
