from __future__ import annotations

"""Installs query operations on relation types."""

import logging
from typing import TYPE_CHECKING, Any, Callable, List, Mapping

from .errors import DatasetNotConfigured
from .relation import Relation

if TYPE_CHECKING:  # pragma: no cover
    from .relation_type import RelationType

logger = logging.getLogger(__name__)


class BoundOperation:
    """Callable captured over ``(name, template, strategy)``.

    Each call resolves the template through the strategy, reads the result
    from the owning relation type's dataset and wraps it in a
    :class:`Relation`. Errors from either step propagate unchanged.
    """

    __slots__ = ("name", "template", "strategy", "relation_type")

    def __init__(
        self,
        name: str,
        template: Any,
        strategy: Callable[..., Any],
        relation_type: "RelationType",
    ):
        self.name = name
        self.template = template
        self.strategy = strategy
        self.relation_type = relation_type

    def __call__(self, *args: Any, **kwargs: Any) -> Relation:
        # private attributes: public ones may be shadowed by bound operations
        dataset = self.relation_type._dataset
        if dataset is None:
            raise DatasetNotConfigured(self.relation_type._name)
        resolved = self.strategy(self.name, self.template, *args, **kwargs)
        logger.debug("%s.%s -> read(%r)", self.relation_type._name, self.name, resolved)
        return Relation(dataset.read(resolved))

    def __repr__(self) -> str:
        return f"<BoundOperation {self.relation_type._name}.{self.name}>"


def bind(relation_type: "RelationType", queries: Mapping[str, Any]) -> List[str]:
    """Install one operation per ``(name, template)`` pair on ``relation_type``.

    Same-named operations are overwritten. An empty mapping installs nothing.
    Returns the installed names.
    """
    installed: List[str] = []
    for name, template in dict(queries).items():
        relation_type._install(
            name, BoundOperation(name, template, relation_type._strategy, relation_type)
        )
        installed.append(name)
    if installed:
        logger.debug(
            "Bound %d operations on %s (dataset=%r): %s",
            len(installed),
            relation_type._name,
            relation_type._dataset_id,
            ", ".join(installed),
        )
    return installed


__all__ = ["BoundOperation", "bind"]
