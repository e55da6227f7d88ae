"""Command-line interface for the statement ledger."""

from .app import main

__all__ = ["main"]
