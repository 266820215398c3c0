from pydantic import __version__ as _pydantic_version

# querybind relies on the Pydantic v2 API (TypeAdapter, model_config, etc.).
if not _pydantic_version.startswith("2"):
    raise ImportError(
        "querybind requires pydantic>=2.0; detected version %s" % _pydantic_version
    )

from .binder import BoundOperation, bind
from .datasets import DbApiDataset
from .errors import (
    BindingConflictError,
    DatasetNotConfigured,
    QueryBindError,
    RegistryLoadError,
    UnknownDatasetError,
    UnknownOperation,
)
from .gateway import Gateway
from .loader import load_query_files
from .models import QueryTemplate, ResolvedQuery
from .registry import QueryRegistry
from .relation import Relation
from .relation_type import RelationType, derive_dataset_id, register_relation_type
from .settings import QueryBindSettings, load_settings
from .strategy import (
    ExecutionStrategy,
    default_strategy,
    format_strategy,
    get_strategy,
    params_strategy,
)

__all__ = [
    "BindingConflictError",
    "BoundOperation",
    "DatasetNotConfigured",
    "DbApiDataset",
    "ExecutionStrategy",
    "Gateway",
    "QueryBindError",
    "QueryBindSettings",
    "QueryRegistry",
    "QueryTemplate",
    "RegistryLoadError",
    "Relation",
    "RelationType",
    "ResolvedQuery",
    "UnknownDatasetError",
    "UnknownOperation",
    "bind",
    "default_strategy",
    "derive_dataset_id",
    "format_strategy",
    "get_strategy",
    "load_query_files",
    "load_settings",
    "params_strategy",
    "register_relation_type",
]
