from __future__ import annotations

"""Execution strategies turning a template plus call arguments into a query."""

from typing import Any, Callable, Dict, Mapping, Protocol

from .models import ResolvedQuery


class ExecutionStrategy(Protocol):
    def __call__(self, name: str, template: Any, /, *args: Any, **kwargs: Any) -> Any: ...


def _single_mapping(args: tuple, kwargs: Dict[str, Any]) -> Mapping[str, Any] | None:
    if kwargs:
        if args:
            raise TypeError("Pass either positional or keyword query arguments, not both")
        return kwargs
    if len(args) == 1 and isinstance(args[0], Mapping):
        return args[0]
    return None


def format_strategy(name: str, template: Any, /, *args: Any, **kwargs: Any) -> Any:
    """Interpolate arguments into the template with ``%`` formatting.

    A mapping (or keyword arguments) fills ``%(key)s`` placeholders,
    positional arguments fill ``%s``. Without arguments the template is
    returned unchanged.
    """
    if not args and not kwargs:
        return template
    params = _single_mapping(args, kwargs)
    if params is not None:
        return template % params
    return template % args


def params_strategy(name: str, template: Any, /, *args: Any, **kwargs: Any) -> ResolvedQuery:
    """Keep the template intact and hand the arguments to the driver as parameters."""
    params = _single_mapping(args, kwargs)
    if params is not None:
        return ResolvedQuery(sql=template, params=dict(params))
    return ResolvedQuery(sql=template, params=tuple(args))


_STRATEGIES: Dict[str, Callable[..., Any]] = {
    "format": format_strategy,
    "params": params_strategy,
}


def get_strategy(name: str) -> Callable[..., Any]:
    try:
        return _STRATEGIES[name]
    except KeyError:
        raise ValueError(
            f"Unknown execution strategy {name!r}; expected one of: {', '.join(sorted(_STRATEGIES))}"
        ) from None


default_strategy = format_strategy


__all__ = [
    "ExecutionStrategy",
    "default_strategy",
    "format_strategy",
    "get_strategy",
    "params_strategy",
]
