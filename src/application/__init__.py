"""Application layer: ports and use cases."""

__all__ = []
