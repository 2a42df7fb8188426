"""CLI commands for filemanip.

This package contains all subcommand implementations.
"""
