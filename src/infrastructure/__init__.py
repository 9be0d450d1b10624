"""Infrastructure adapters: database, settings, logging."""

__all__ = []
