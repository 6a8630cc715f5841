"""
MailChain CLI Package

Typer-based command-line interface for running message pipelines.
"""

from mailchain import __version__

__all__ = ["__version__"]
