from __future__ import annotations

from typing import Any, Iterator


class Relation:
    """Uniform wrapper around whatever a dataset's ``read`` returned.

    Behaviour is delegated to ``source``; the wrapper adds nothing but a
    common result type for every bound operation.
    """

    __slots__ = ("source",)

    def __init__(self, source: Any):
        self.source = source

    @classmethod
    def wrap(cls, source: Any) -> "Relation":
        return cls(source)

    def __getattr__(self, item: str) -> Any:
        if item == "source":
            raise AttributeError(item)
        return getattr(self.source, item)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.source)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Relation):
            other = other.source
        return self.source == other

    def __hash__(self) -> int:
        return hash(self.source)

    def __repr__(self) -> str:
        return f"Relation({self.source!r})"


__all__ = ["Relation"]
