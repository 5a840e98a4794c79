"""Core: runtime settings, logging and exceptions."""
