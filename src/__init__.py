"""Clinic finance dashboard source package."""

__all__ = []
