from __future__ import annotations

"""Relation types and their explicit declaration step."""

import logging
import re
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Optional

from .binder import BoundOperation, bind
from .errors import BindingConflictError, UnknownDatasetError, UnknownOperation
from .registry import QueryRegistry
from .relation import Relation
from .strategy import default_strategy

logger = logging.getLogger(__name__)

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")
_SEPARATORS = re.compile(r"[\s\-.]+")


def derive_dataset_id(name: str) -> str:
    """``ActiveUsers`` -> ``active_users``, ``HTTPLogs`` -> ``http_logs``."""
    s = _SEPARATORS.sub("_", name.strip())
    s = _ACRONYM_BOUNDARY.sub(r"\1_\2", s)
    s = _WORD_BOUNDARY.sub(r"\1_\2", s)
    return s.lower()


class RelationType:
    """A declared category of relation with a table of bound query operations.

    Operations are looked up in the table on attribute access
    (``users.find_active(1)``), via :meth:`call` or via :meth:`operation`.
    A bound operation shadows a public member of the same name; internals
    only go through underscored attributes so shadowing cannot break them.
    """

    def __init__(
        self,
        name: str,
        dataset_id: Any,
        *,
        strategy: Optional[Callable[..., Any]] = None,
        dataset: Any = None,
    ):
        self._name = name
        self._dataset_id = dataset_id
        self._strategy = strategy or default_strategy
        self._operations: Dict[str, BoundOperation] = {}
        self._dataset = dataset

    def __getattribute__(self, item: str) -> Any:
        if not item.startswith("_"):
            operations = object.__getattribute__(self, "__dict__").get("_operations")
            if operations and item in operations:
                return operations[item]
        return object.__getattribute__(self, item)

    @property
    def name(self) -> str:
        return self._name

    @property
    def dataset_id(self) -> Any:
        return self._dataset_id

    @property
    def strategy(self) -> Callable[..., Any]:
        return self._strategy

    @property
    def dataset(self) -> Any:
        return self._dataset

    @dataset.setter
    def dataset(self, dataset: Any) -> None:
        self._dataset = dataset

    @property
    def operations(self) -> FrozenSet[str]:
        return frozenset(self._operations)

    def install(self, name: str, operation: BoundOperation) -> None:
        self._install(name, operation)

    def _install(self, name: str, operation: BoundOperation) -> None:
        self._operations[name] = operation

    def operation(self, name: str) -> BoundOperation:
        return self._lookup(name)

    def _lookup(self, name: str) -> BoundOperation:
        try:
            return self._operations[name]
        except KeyError:
            raise UnknownOperation(self._name, name, self._operations) from None

    def call(self, name: str, /, *args: Any, **kwargs: Any) -> Relation:
        return self._lookup(name)(*args, **kwargs)

    def __getattr__(self, item: str) -> Any:
        operations = self.__dict__.get("_operations")
        if operations is None or item.startswith("__"):
            raise AttributeError(item)
        try:
            return operations[item]
        except KeyError:
            raise UnknownOperation(self._name, item, operations) from None

    def __contains__(self, name: object) -> bool:
        return name in self._operations

    def __dir__(self) -> Iterable[str]:
        return sorted(set(super().__dir__()) | set(self._operations))

    def __repr__(self) -> str:
        return (
            f"RelationType(name={self._name!r}, dataset_id={self._dataset_id!r}, "
            f"operations={sorted(self._operations)!r})"
        )


def _member_names() -> FrozenSet[str]:
    return frozenset(n for n in dir(RelationType) if not n.startswith("_"))


def register_relation_type(
    registry: QueryRegistry,
    name: str,
    *,
    dataset_id: Any = None,
    strategy: Optional[Callable[..., Any]] = None,
    dataset: Any = None,
    strict: bool = False,
) -> RelationType:
    """Declare a relation type and bind the registry's queries for its dataset.

    ``dataset_id`` defaults to :func:`derive_dataset_id` applied to ``name``.
    Binding happens once, here; later registry loads do not affect the
    returned type. With ``strict=True`` an unknown dataset raises
    :class:`UnknownDatasetError` and query names that collide with relation
    type members raise :class:`BindingConflictError`.
    """
    resolved_id = dataset_id if dataset_id is not None else derive_dataset_id(name)
    relation_type = RelationType(name, resolved_id, strategy=strategy, dataset=dataset)

    queries = registry.queries_for(resolved_id)
    if not queries:
        if strict:
            raise UnknownDatasetError(resolved_id)
        logger.warning(
            "No queries registered for dataset %r; relation %s has no operations",
            resolved_id,
            name,
        )
        return relation_type

    if strict:
        conflicts: List[str] = [q for q in queries if q in _member_names()]
        if conflicts:
            raise BindingConflictError(name, conflicts)

    bind(relation_type, queries)
    return relation_type


__all__ = ["RelationType", "derive_dataset_id", "register_relation_type"]
