"""Decode tunnel response bodies into generic objects."""

import json
from typing import Optional

from ..errors import DecodeError
from ..types import GenericObject

PREVIEW_CHARS = 120


def decode(body: bytes, cluster: Optional[str] = None) -> GenericObject:
    """Parse a single JSON object document."""
    try:
        obj = json.loads(body)
    except (ValueError, UnicodeDecodeError, RecursionError) as e:
        raise DecodeError(
            f"invalid JSON response ({len(body)} bytes, preview {_preview(body)!r}): {e}",
            cluster=cluster,
        ) from e

    if not isinstance(obj, dict):
        raise DecodeError(
            f"expected a JSON object, got {type(obj).__name__} "
            f"({len(body)} bytes, preview {_preview(body)!r})",
            cluster=cluster,
        )
    return obj


def _preview(body: bytes) -> str:
    return body[:PREVIEW_CHARS].decode("utf-8", errors="replace")
