"""Version information for nuget-promote."""

__version__ = "1.0.0"
