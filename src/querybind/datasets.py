from __future__ import annotations

"""Dataset handles backed by a DB-API 2.0 connection."""

import logging
from typing import Any

from .models import ResolvedQuery

logger = logging.getLogger(__name__)


class DbApiDataset:
    """Exposes ``read(resolved)`` over an existing DB-API connection.

    ``resolved`` is either a :class:`ResolvedQuery` (SQL plus parameters in
    the driver's paramstyle) or plain SQL text. The open cursor is returned
    as-is; iterating and closing it is up to the caller.
    """

    def __init__(self, connection, name: str):
        self.connection = connection
        self.name = name

    def read(self, resolved: Any):
        cursor = self.connection.cursor()
        if isinstance(resolved, ResolvedQuery):
            logger.debug("dataset %s: executing %r with %r", self.name, resolved.sql, resolved.params)
            cursor.execute(resolved.sql, resolved.params)
        else:
            logger.debug("dataset %s: executing %r", self.name, resolved)
            cursor.execute(resolved)
        return cursor

    def __repr__(self) -> str:
        return f"DbApiDataset(name={self.name!r})"


__all__ = ["DbApiDataset"]
