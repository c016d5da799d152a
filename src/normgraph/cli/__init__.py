"""
normgraph CLI - inspect and drive a cache snapshot from the shell.
"""

from .main import app, main

__all__ = ["app", "main"]
