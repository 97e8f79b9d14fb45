"""Infrastructure layer implementations."""

from prodline.infrastructure import storage

__all__ = ["storage"]
