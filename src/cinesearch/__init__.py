"""Cinesearch: search a movie catalog and present results incrementally.

Public API:
    - CatalogCoordinator: observable list/detail/error state with stale-result guarding
    - create_repository(): build the repository described by a Config
    - diff() / apply(): minimal list reconciliation
    - Success / Failure / ErrorInfo: fallible results as values
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cinesearch.binding import ListBinding
from cinesearch.config import Config
from cinesearch.coordinator import PENDING, CatalogCoordinator, Pending
from cinesearch.errors import (
    CinesearchError,
    ClosedError,
    ConfigurationError,
    DecodeError,
    InternalError,
    RepositoryError,
    TransportError,
    UpstreamError,
)
from cinesearch.models import CatalogItem, CatalogPayload, DetailRecord, Rating
from cinesearch.reconcile import Insert, Move, Operation, Remove, Update, apply, diff
from cinesearch.result import ErrorInfo, Failure, Result, Success, is_success, unwrap_or

if TYPE_CHECKING:
    from cinesearch.repository.base import CatalogRepository

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("cinesearch")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("cinesearch").addHandler(logging.NullHandler())


def create_repository(config: Config) -> CatalogRepository:
    """Get the repository described by *config*."""
    if config.use_mock:
        from cinesearch.repository.mock import MockRepository

        return MockRepository()

    from cinesearch.repository.omdb import OmdbRepository

    return OmdbRepository(
        base_url=config.base_url, timeout_s=config.timeout_s, plot=config.plot
    )


__all__ = [
    "PENDING",
    "CatalogCoordinator",
    "CatalogItem",
    "CatalogPayload",
    "CinesearchError",
    "ClosedError",
    "Config",
    "ConfigurationError",
    "DecodeError",
    "DetailRecord",
    "ErrorInfo",
    "Failure",
    "Insert",
    "InternalError",
    "ListBinding",
    "Move",
    "Operation",
    "Pending",
    "Rating",
    "Remove",
    "RepositoryError",
    "Result",
    "Success",
    "TransportError",
    "Update",
    "UpstreamError",
    "__version__",
    "apply",
    "create_repository",
    "diff",
    "is_success",
    "unwrap_or",
]
