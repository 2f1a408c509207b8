"""Plain list exporter: one file identity per line."""

from typing import Iterable


def to_list(chain: Iterable[str]) -> str:
    """Convert a chain of file identities to newline-separated text."""
    return "\n".join(chain)
