from __future__ import annotations

"""Process-wide store of query templates grouped by dataset."""

import copy
import logging
from types import MappingProxyType
from typing import Annotated, Any, Dict, List, Mapping

from pydantic import StringConstraints, TypeAdapter, ValidationError

from .errors import RegistryLoadError
from .models import QueryTemplate

logger = logging.getLogger(__name__)

_Identifier = Annotated[str, StringConstraints(strict=True, min_length=1)]
_DEFINITIONS: TypeAdapter[Dict[str, Dict[str, Any]]] = TypeAdapter(
    Dict[_Identifier, Dict[_Identifier, Any]]
)

_EMPTY: Mapping[str, Any] = MappingProxyType({})


class QueryRegistry:
    """Holds exactly one snapshot of ``dataset -> name -> template``.

    The snapshot is replaced wholesale by :meth:`load`; nothing is merged
    with earlier contents. Bindings read the registry once, so reloading
    never changes operations that were already bound.
    """

    def __init__(self, definitions: Mapping[str, Mapping[str, Any]] | None = None):
        self._templates: Mapping[str, Mapping[str, QueryTemplate]] = MappingProxyType({})
        self._queries: Mapping[str, Mapping[str, Any]] = MappingProxyType({})
        self._loaded = False
        self._frozen = False
        if definitions is not None:
            self.load(definitions)

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def frozen(self) -> bool:
        return self._frozen

    def load(self, definitions: Mapping[str, Mapping[str, Any]]) -> None:
        """Replace the stored snapshot with ``definitions``.

        Raises :class:`RegistryLoadError` for malformed input, in which case
        the previous snapshot stays in place.
        """
        if self._frozen:
            raise RegistryLoadError("Query registry is frozen; load() is no longer allowed")
        try:
            validated = _DEFINITIONS.validate_python(definitions)
            templates = {
                dataset: {
                    name: QueryTemplate(dataset=dataset, name=name, text=copy.deepcopy(text))
                    for name, text in queries.items()
                }
                for dataset, queries in validated.items()
            }
        except ValidationError as exc:
            raise RegistryLoadError(f"Invalid query definitions: {exc}") from exc

        self._templates = MappingProxyType(
            {dataset: MappingProxyType(items) for dataset, items in templates.items()}
        )
        self._queries = MappingProxyType(
            {
                dataset: MappingProxyType({name: tpl.text for name, tpl in items.items()})
                for dataset, items in templates.items()
            }
        )
        self._loaded = True
        logger.info(
            "Loaded %d queries across %d datasets",
            sum(len(items) for items in templates.values()),
            len(templates),
        )

    def freeze(self) -> None:
        """Finalize the registry; later :meth:`load` calls are rejected."""
        self._frozen = True

    def queries_for(self, dataset_id: Any) -> Mapping[str, Any]:
        try:
            return self._queries.get(dataset_id, _EMPTY)
        except TypeError:
            # unhashable identifiers are simply unknown
            return _EMPTY

    def template(self, dataset_id: str, name: str) -> QueryTemplate:
        return self._templates[dataset_id][name]

    def datasets(self) -> List[str]:
        return sorted(self._templates)

    def __contains__(self, dataset_id: object) -> bool:
        try:
            return dataset_id in self._queries
        except TypeError:
            return False

    def __repr__(self) -> str:
        return f"QueryRegistry(datasets={self.datasets()!r}, frozen={self._frozen})"


__all__ = ["QueryRegistry"]
