from __future__ import annotations

import os
from pathlib import Path
from typing import Tuple, Optional

_FALLBACK_SQLITE = "/data/empresa.db"


def _normalize_path(raw: str) -> Path:
    """
    Expand ~ and relative paths for SQLite files to an absolute Path.
    """
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = Path.cwd() / path
    return path


def resolve_sqlite_target() -> Tuple[str, Optional[Path]]:
    """
    Return a tuple (uri, path) based on EMPRESA_SQLITE_PATH.
    - If EMPRESA_SQLITE_PATH already looks like a sqlite:// URI, it is returned as-is and
      the path component is None.
    - Otherwise, ensure the parent directory exists and return the absolute path.
    """
    raw = (os.environ.get("EMPRESA_SQLITE_PATH") or _FALLBACK_SQLITE).strip()
    if raw.startswith("sqlite:"):
        return raw, None
    path = _normalize_path(raw)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        # /data no escribible (dev local): usar ./data
        path = _normalize_path(f"./data/{path.name}")
        path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{path.as_posix()}", path


def resolve_database_uri() -> str:
    """
    DATABASE_URL when set (postgres:// normalised for SQLAlchemy), SQLite otherwise.
    """
    url = (os.environ.get("DATABASE_URL") or "").strip()
    if url:
        if url.startswith("postgres://"):
            url = "postgresql://" + url[len("postgres://"):]
        return url
    uri, _ = resolve_sqlite_target()
    return uri
