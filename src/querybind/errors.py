from __future__ import annotations

from typing import Any, Iterable


class QueryBindError(Exception):
    """Base class for querybind errors."""


class RegistryLoadError(QueryBindError, ValueError):
    """Query definitions were rejected; the previous snapshot is kept."""


class UnknownOperation(QueryBindError, AttributeError):
    def __init__(self, relation: str, operation: str, available: Iterable[str] = ()):
        msg = f"Relation '{relation}' has no operation '{operation}'"
        names = sorted(available)
        if names:
            msg += f" (available: {', '.join(names)})"
        super().__init__(msg)
        self.relation = relation
        self.operation = operation
        self.available = names


class UnknownDatasetError(QueryBindError, LookupError):
    def __init__(self, dataset_id: Any):
        super().__init__(f"No queries registered for dataset {dataset_id!r}")
        self.dataset_id = dataset_id


class BindingConflictError(QueryBindError):
    def __init__(self, relation: str, names: Iterable[str]):
        self.names = sorted(names)
        super().__init__(
            f"Queries would shadow members of relation '{relation}': {', '.join(self.names)}"
        )
        self.relation = relation


class DatasetNotConfigured(QueryBindError, RuntimeError):
    def __init__(self, relation: str):
        super().__init__(f"Relation '{relation}' has no dataset to read from")
        self.relation = relation


__all__ = [
    "QueryBindError",
    "RegistryLoadError",
    "UnknownOperation",
    "UnknownDatasetError",
    "BindingConflictError",
    "DatasetNotConfigured",
]
