"""Core infrastructure: paths, errors, configuration, session and theme."""
