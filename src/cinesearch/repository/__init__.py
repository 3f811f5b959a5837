"""Repository implementations."""

from .base import CatalogRepository
from .mock import MockRepository
from .omdb import OmdbRepository

__all__ = [
    "CatalogRepository",
    "MockRepository",
    "OmdbRepository",
]
