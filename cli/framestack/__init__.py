"""Typer entry point for the framestack command line."""

from .main import app, main

__all__ = ["app", "main"]
