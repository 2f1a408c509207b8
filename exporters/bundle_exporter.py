"""Bundle exporter that concatenates a file chain into one text."""

from typing import Sequence

from scanner.builder import ChainEntry


def to_bundle(entries: Sequence[ChainEntry], separator: str = "\n") -> str:
    """
    Concatenate the contents of a file chain in order.

    Each content is terminated by a newline if it lacks one, and entries
    are joined with separator.

    Args:
        entries: The file chain, dependencies first.
        separator: Text placed between consecutive files.

    Returns:
        The concatenated bundle.
    """
    parts = []
    for entry in entries:
        content = entry.content
        if content and not content.endswith("\n"):
            content += "\n"
        parts.append(content)

    return separator.join(parts)
