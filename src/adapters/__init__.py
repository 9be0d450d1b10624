"""Adapters package: command-line and UI entry points."""

__all__ = []
