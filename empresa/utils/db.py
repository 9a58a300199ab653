from __future__ import annotations
import logging
import random
import time
from typing import Any, Callable, Optional

log = logging.getLogger(__name__)


def is_transient_db_error(exc: Exception) -> bool:
    """Classify DB errors that are safe to retry.

    SQLAlchemy wraps DBAPI exceptions in ``exc.orig``; the check is done on
    the driver message so it works the same on SQLite and Postgres.
    """
    orig = getattr(exc, "orig", exc)
    msg = (str(orig) or "").lower()
    return (
        "deadlock" in msg
        or "could not serialize" in msg
        or "serialization failure" in msg
        or "database is locked" in msg
        or "lock timeout" in msg
        or ("timeout" in msg and "statement" in msg)
    )


def retry_with_backoff(func: Callable[[], Any], *, attempts: int = 5, base_delay: float = 0.05,
                       on_retry: Optional[Callable[[Exception], None]] = None) -> Any:
    """Execute callable with exponential backoff on transient DB errors.

    - Retries up to `attempts` times
    - Backoff: base_delay * 2^(n-1) + jitter (capped at 1s)
    - `on_retry` runs before each new attempt (e.g. session rollback)
    """
    last_exc: Optional[Exception] = None
    for i in range(1, max(1, attempts) + 1):
        try:
            return func()
        except Exception as exc:
            last_exc = exc
            if not is_transient_db_error(exc) or i >= attempts:
                break
            log.debug("[db] transient error (attempt %d/%d): %r", i, attempts, exc)
            if on_retry is not None:
                on_retry(exc)
            time.sleep(min(1.0, base_delay * (2 ** (i - 1)) + random.uniform(0, base_delay)))
    if last_exc is not None:
        raise last_exc
    return None
