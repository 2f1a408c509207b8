"""JSON exporter for file chains (machine-friendly format)."""

import json
from typing import Any, Dict, List, Sequence

from scanner.builder import ChainEntry


def to_json(
    entries: Sequence[ChainEntry],
    include_content: bool = True,
    indent: int = 2,
) -> str:
    """
    Convert a file chain to JSON format.

    Args:
        entries: The file chain, dependencies first.
        include_content: If True, include each file's content.
        indent: JSON indentation level.

    Returns:
        JSON array of {"filename": ..., "content": ...} objects.
    """
    data: List[Dict[str, Any]] = []
    for entry in entries:
        item: Dict[str, Any] = {"filename": entry.filename}
        if include_content:
            item["content"] = entry.content
        data.append(item)

    return json.dumps(data, indent=indent)
