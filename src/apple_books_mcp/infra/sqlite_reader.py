import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Any, Dict, List, Sequence

from ..core.errors import ExtractionError


def _connect(path: str) -> sqlite3.Connection:
    """Open a new read-only SQLite connection to ``path``."""
    # URI mode with mode=ro never creates the file and rejects writes.
    uri = f"{Path(path).resolve().as_uri()}?mode=ro"
    return sqlite3.connect(uri, uri=True)


def extract_rows(path: str, query: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
    """Run ``query`` against the store at ``path`` and return every row.

    Rows are returned in store order as dicts keyed by the query's
    output column names. The connection is closed before returning,
    also when the query fails.
    """
    try:
        with closing(_connect(path)) as conn:
            conn.row_factory = sqlite3.Row
            cur = conn.execute(query, params)
            rows = cur.fetchall()
    except sqlite3.Error as exc:
        raise ExtractionError(
            f"Reading {path} failed: {type(exc).__name__}: {exc}"
        ) from exc

    return [dict(row) for row in rows]
