"""Shared errors, constants, configuration and logging for sol."""
