"""Command-line interface for vaultsweep."""
