"""Directory listing utilities used by directory requires."""

import os
from typing import List


DOT_ENTRIES = [".", ".."]


def list_entries(directory: str, skip_dots: bool = True) -> List[str]:
    """
    List the entries of a directory in lexical order.

    Args:
        directory: Directory to list.
        skip_dots: If False, '.' and '..' are listed first.

    Returns:
        Entry names (not paths).
    """
    entries = sorted(os.listdir(directory))
    if not skip_dots:
        entries = DOT_ENTRIES + entries
    return entries

