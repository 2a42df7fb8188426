"""filemanip - reversible file manipulation for terminal file managers."""

__version__ = "0.1.0"
