from __future__ import annotations

from typing import Any, Mapping, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class QueryTemplate(BaseModel):
    """Immutable named query definition registered under a dataset."""

    model_config = ConfigDict(frozen=True)

    dataset: str
    name: str = Field(min_length=1)
    text: Any

    @field_validator("text")
    @classmethod
    def require_text(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("query template text is required")
        return value


class ResolvedQuery(BaseModel):
    """SQL text plus DB-API parameters, as produced by ``params_strategy``."""

    model_config = ConfigDict(frozen=True)

    sql: str
    params: Union[Mapping[str, Any], Sequence[Any]] = ()


__all__ = ["QueryTemplate", "ResolvedQuery"]
