"""Common type aliases shared across the client.

These aliases model JSON-compatible payloads so the fetcher and paginators
can describe decoded backend responses without falling back to ``Any``.
"""

from __future__ import annotations

from typing import Dict, List, TypeAlias, Union

# NOTE:
# Decoded pages are only trusted as far as ``isinstance`` checks go, so the
# containers stay ``object``-valued; the paginators narrow them row by row.
JSONPrimitive: TypeAlias = Union[str, int, float, bool, None]
JSONValue: TypeAlias = Union[JSONPrimitive, Dict[str, object], List[object]]
JSONDict: TypeAlias = Dict[str, JSONValue]

__all__ = ["JSONPrimitive", "JSONValue", "JSONDict"]
