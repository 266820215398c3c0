from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict

logger = logging.getLogger(__name__)


def load_query_files(path: Path | str) -> Dict[str, Dict[str, str]]:
    """Collect ``.sql`` files below ``path`` into ``dataset -> name -> sql``.

    The dataset is the directory holding the file, relative to ``path``
    (nested directories are joined with ``/``); files placed directly in
    ``path`` use the directory's own name. The query name is the file stem.
    """
    root = Path(path)
    if not root.is_dir():
        raise FileNotFoundError(f"Query directory not found: {root}")

    definitions: Dict[str, Dict[str, str]] = {}
    for sql_file in sorted(root.rglob("*.sql")):
        rel_parent = sql_file.parent.relative_to(root)
        dataset = rel_parent.as_posix() if rel_parent.parts else root.resolve().name
        definitions.setdefault(dataset, {})[sql_file.stem] = sql_file.read_text(encoding="utf-8").strip()

    logger.debug("Found %d query datasets under %s", len(definitions), root)
    return definitions


__all__ = ["load_query_files"]
