"""vaultsweep - Find and remove unused files in a note vault."""

__version__ = "0.1.0"
