"""CLI package for filemanip.

This package contains the Typer application and all subcommands.
"""
