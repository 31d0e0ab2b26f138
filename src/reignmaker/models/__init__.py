"""SQLAlchemy models for reignmaker persistence.

This module exports the declarative base and every mapped table.
"""

from .base import Base, TimestampMixin
from .phase_step import PhaseStep

__all__ = [
    "Base",
    "PhaseStep",
    "TimestampMixin",
]
