from __future__ import annotations

"""Glue between a DB-API connection, a query registry and relation types."""

import logging
import sqlite3
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

from .datasets import DbApiDataset
from .loader import load_query_files
from .registry import QueryRegistry
from .relation_type import RelationType, derive_dataset_id, register_relation_type
from .settings import QueryBindSettings
from .strategy import default_strategy, get_strategy

logger = logging.getLogger(__name__)


class Gateway:
    """Owns one connection and one registry; declares relation types on them.

    Every relation type declared through the gateway reads from a
    :class:`DbApiDataset` named after its dataset id and uses the gateway's
    default strategy unless one is passed explicitly.
    """

    def __init__(
        self,
        connection,
        registry: Optional[QueryRegistry] = None,
        *,
        default_strategy: Callable[..., Any] = default_strategy,
        strict: bool = False,
    ):
        self.connection = connection
        self.registry = registry if registry is not None else QueryRegistry()
        self.default_strategy = default_strategy
        self.strict = strict
        self._relations: Dict[str, RelationType] = {}

    @classmethod
    def from_settings(cls, settings: QueryBindSettings) -> "Gateway":
        connection = sqlite3.connect(settings.database)
        gateway = cls(
            connection,
            default_strategy=get_strategy(settings.default_strategy),
            strict=settings.strict,
        )
        if settings.queries_path is not None:
            try:
                gateway.load_queries(settings.queries_path)
            except Exception:
                connection.close()
                raise
        gateway.registry.freeze()
        return gateway

    def load_queries(self, source: Path | str | Mapping[str, Mapping[str, Any]]) -> None:
        if isinstance(source, (str, Path)):
            logger.info("Loading queries from %s", source)
            source = load_query_files(source)
        self.registry.load(source)

    def dataset(self, name: str) -> DbApiDataset:
        return DbApiDataset(self.connection, name)

    def relation(
        self,
        name: str,
        *,
        dataset_id: Any = None,
        strategy: Optional[Callable[..., Any]] = None,
    ) -> RelationType:
        resolved_id = dataset_id if dataset_id is not None else derive_dataset_id(name)
        relation_type = register_relation_type(
            self.registry,
            name,
            dataset_id=resolved_id,
            strategy=strategy or self.default_strategy,
            dataset=self.dataset(str(resolved_id)),
            strict=self.strict,
        )
        self._relations[name] = relation_type
        return relation_type

    @property
    def relations(self) -> Mapping[str, RelationType]:
        return dict(self._relations)

    def close(self) -> None:
        self.connection.close()

    def __enter__(self) -> "Gateway":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


__all__ = ["Gateway"]
