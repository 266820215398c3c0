from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List

from .errors import QueryBindError
from .gateway import Gateway
from .loader import load_query_files
from .logging_config import configure_logging
from .registry import QueryRegistry
from .settings import load_settings
from .strategy import params_strategy


def _parse_param(raw: str) -> tuple[str, str]:
    if "=" not in raw:
        raise argparse.ArgumentTypeError(f"Expected key=value, got {raw!r}")
    key, value = raw.split("=", 1)
    return key.strip(), value


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="querybind utilities")
    parser.add_argument("--config", type=Path, default=None, help="Path to querybind.toml")
    parser.add_argument("--log-level", default=None, help="Override log level (DEBUG, INFO, ...)")
    parser.add_argument("--log-json", action="store_true", help="Emit logs as JSON lines")
    sub = parser.add_subparsers(dest="command", required=True)

    list_cmd = sub.add_parser("list", help="List registered queries as dataset.name")
    list_cmd.add_argument("--queries", type=Path, default=None, help="Directory with .sql files")

    run_cmd = sub.add_parser("run", help="Execute one registered query and print the rows")
    run_cmd.add_argument("dataset", help="Dataset id the query is registered under")
    run_cmd.add_argument("query", help="Query name")
    run_cmd.add_argument("--queries", type=Path, default=None, help="Directory with .sql files")
    run_cmd.add_argument("--db", default=None, help="SQLite database path")
    run_cmd.add_argument(
        "--param",
        type=_parse_param,
        action="append",
        default=[],
        help="Named query parameter as key=value (repeatable)",
    )
    return parser.parse_args(argv)


def _cmd_list(queries_path: Path) -> int:
    registry = QueryRegistry(load_query_files(queries_path))
    for dataset in registry.datasets():
        for name in sorted(registry.queries_for(dataset)):
            print(f"{dataset}.{name}")
    return 0


def _cmd_run(gateway: Gateway, dataset: str, query: str, params: Dict[str, Any]) -> int:
    relation_type = gateway.relation(dataset, dataset_id=dataset, strategy=params_strategy)
    # through the class: a query may be named "call"
    rows: List[Any] = list(type(relation_type).call(relation_type, query, **params))
    for row in rows:
        print("\t".join("" if v is None else str(v) for v in row))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    overrides: Dict[str, Any] = {}
    if args.log_level:
        overrides["log_level"] = args.log_level
    if args.queries is not None:
        overrides["queries_path"] = args.queries
    if getattr(args, "db", None):
        overrides["database"] = args.db
    settings = load_settings(config_path=args.config, overrides=overrides)
    configure_logging(level=settings.log_level, jsonl=args.log_json)

    if settings.queries_path is None:
        raise SystemExit("No query directory configured; pass --queries or set queries_path")

    if args.command == "list":
        return _cmd_list(settings.queries_path)
    if args.command == "run":
        with Gateway.from_settings(settings) as gateway:
            try:
                return _cmd_run(gateway, args.dataset, args.query, dict(args.param))
            except QueryBindError as exc:
                print(f"error: {exc}", file=sys.stderr)
                return 2
    raise SystemExit(f"Unknown command: {args.command}")


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
