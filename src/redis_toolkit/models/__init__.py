"""Shared data models for redis_toolkit."""

from .base import ToolkitBaseModel
from .common import ScoredMember

__all__ = [
    "ToolkitBaseModel",
    "ScoredMember",
]
