"""Shared utility helpers."""

__all__ = []
