"""Re-export typed models for the rcsdk package."""

from __future__ import annotations

from .batch import BatchEnvelope, BatchPartStatus

__all__ = ["BatchEnvelope", "BatchPartStatus"]
