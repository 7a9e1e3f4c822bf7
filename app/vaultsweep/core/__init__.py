"""Core services: paths, policy configuration, history and theme."""
