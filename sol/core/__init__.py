"""Core version management and archive handling for sol."""
