"""Ely.by profile lookup API"""

from .directory import ProfileDirectory

__all__ = [
    "ProfileDirectory",
]
