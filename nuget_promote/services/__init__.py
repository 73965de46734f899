"""
Service layer for promotion runs.

This package provides the high-level orchestration that ties resolution,
license checks and transfer together.
"""

from .promote_service import PromoteService

__all__ = ["PromoteService"]
