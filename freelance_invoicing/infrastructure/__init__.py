"""Infrastructure layer implementations."""

from freelance_invoicing.infrastructure import storage

__all__ = ["storage"]
