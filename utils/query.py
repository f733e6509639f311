"""Query-string helpers for upstream resource paths."""

from __future__ import annotations

from collections.abc import Mapping
from urllib.parse import quote_plus


def build_query_string(params: Mapping[str, object | None]) -> str:
    """Encode *params* as ``?k=v&...``, dropping ``None`` and empty values.

    Returns an empty string when nothing survives, so the result can be
    appended to a resource path unconditionally.
    """
    pairs = [
        f"{key}={quote_plus(str(value))}"
        for key, value in params.items()
        if value is not None and str(value) != ""
    ]
    return f"?{'&'.join(pairs)}" if pairs else ""
