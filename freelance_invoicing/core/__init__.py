"""Core domain layer - entities, interfaces, and exceptions."""

from freelance_invoicing.core import entities, exceptions, interfaces

__all__ = ["entities", "interfaces", "exceptions"]
