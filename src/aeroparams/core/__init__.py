"""Core infrastructure: configuration, logging and resource paths."""
