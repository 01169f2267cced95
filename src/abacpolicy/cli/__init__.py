"""Command line interface for abacpolicy."""

from abacpolicy.cli.main import cli, main

__all__ = ["cli", "main"]
