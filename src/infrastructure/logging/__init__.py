"""Logging infrastructure package."""

__all__ = []
