"""Path resolution utilities for mapping references to actual files."""

import os
import re
from typing import Iterable, List, Optional

from .errors import NotFoundError


SEPARATOR = "/"

# Rooted paths, drive letters ("C:") and schemes ("vfs://")
EXPLICIT_PATH = re.compile(r"^/|:")
ROOT_PREFIX = re.compile(r"^(?:/|[A-Za-z][\w+.\-]*:/*)")


def is_explicit(reference: str) -> bool:
    """Return True if a reference already names a rooted location."""
    return EXPLICIT_PATH.search(reference) is not None


def same_file(path1: str, path2: str) -> bool:
    """Return True if both paths canonicalize to the same location."""
    return os.path.realpath(path1) == os.path.realpath(path2)


def extension(path: str) -> str:
    """
    Return the extension of the final path segment, without the dot.

    Returns an empty string when the segment has no dot.
    """
    name = path.replace("\\", SEPARATOR).rsplit(SEPARATOR, 1)[-1]
    if "." not in name:
        return ""
    return name.rpartition(".")[2]


def join(*segments: str) -> str:
    """Join path segments with the internal separator, skipping empty ones."""
    return SEPARATOR.join(segment for segment in segments if segment)


def dirname(path: str) -> str:
    """Return the directory part of a path, or '.' when there is none."""
    head = path.replace("\\", SEPARATOR).rpartition(SEPARATOR)[0]
    if not head:
        return SEPARATOR if path.startswith(SEPARATOR) else "."
    return head


def normalize(path: str) -> str:
    """
    Strip superfluous '.' and '..' segments from a path.

    A '..' removes the preceding real segment. A '..' with nothing to
    remove, or following another '..', is kept as is. Explicit paths keep
    their root marker.

    Args:
        path: The path to normalize.

    Returns:
        Normalized path using '/' as separator.
    """
    path = path.replace("\\", SEPARATOR)

    root = ""
    match = ROOT_PREFIX.match(path) if is_explicit(path) else None
    if match:
        root = match.group(0)
        path = path[len(root):]

    final_segments: List[str] = []
    for segment in path.split(SEPARATOR):
        segment = segment.strip()
        if segment in ("", "."):
            continue

        if segment == ".." and final_segments and final_segments[-1] != "..":
            final_segments.pop()
            continue

        final_segments.append(segment)

    return root + SEPARATOR.join(final_segments)


class PathResolver:
    """
    Resolves references against an ordered list of load paths.

    Load paths at the front have precedence. Extensions are tried most
    recently registered first when a reference is probed without one.
    """

    def __init__(
        self,
        extensions: Iterable[str] = (),
        load_paths: Iterable[str] = (),
    ):
        self._load_paths: List[str] = []
        self._extensions: List[str] = []

        for ext in extensions:
            self.add_extension(ext)
        for path in load_paths:
            self.append_path(path)

    @property
    def load_paths(self) -> List[str]:
        """Return the load paths in precedence order."""
        return list(self._load_paths)

    @property
    def extensions(self) -> List[str]:
        """Return the registered extensions, most recently added first."""
        return list(self._extensions)

    def prepend_path(self, path: str) -> None:
        """Add a load path with the highest precedence."""
        self._add_path(path, prepend=True)

    def append_path(self, path: str) -> None:
        """Add a load path with the lowest precedence."""
        self._add_path(path, prepend=False)

    def _add_path(self, path: str, prepend: bool) -> None:
        path = normalize(path)
        if path in self._load_paths:
            self._load_paths.remove(path)

        if prepend:
            self._load_paths.insert(0, path)
        else:
            self._load_paths.append(path)

    def add_extension(self, ext: str) -> None:
        """Register an extension (without the dot) ahead of existing ones."""
        if ext in self._extensions:
            self._extensions.remove(ext)
        self._extensions.insert(0, ext)

    def probe(self, reference: str) -> Optional[str]:
        """
        Find the first existing location for a reference.

        Explicit references are returned unchanged if they exist. Others
        are tried against each load path: directly when the load path is
        explicit, and always relative to the current working directory.

        Returns:
            The existing candidate path, or None.
        """
        if is_explicit(reference):
            return reference if os.path.exists(reference) else None

        cwd = os.getcwd()
        for load_path in self._load_paths:
            if is_explicit(load_path):
                candidate = join(load_path, reference)
                if os.path.exists(candidate):
                    return candidate

            candidate = join(cwd, load_path, reference)
            if os.path.exists(candidate):
                return candidate

        return None

    def resolve(self, reference: str) -> str:
        """Like probe(), but raise NotFoundError when nothing matches."""
        path = self.probe(reference)
        if path is None:
            raise NotFoundError(reference)
        return path

    def probe_with_extensions(self, reference: str) -> Optional[str]:
        """Probe reference + '.' + ext for each extension, then reference itself."""
        for ext in self._extensions:
            path = self.probe(f"{reference}.{ext}")
            if path is not None:
                return path

        return self.probe(reference)

    def resolve_with_extensions(self, reference: str) -> str:
        """Like probe_with_extensions(), but raise NotFoundError when nothing matches."""
        path = self.probe_with_extensions(reference)
        if path is None:
            raise NotFoundError(reference)
        return path

    def strip_known_extension(self, path: str) -> str:
        """Remove the extension of path if it is registered."""
        ext = extension(path)
        if not ext or ext not in self._extensions:
            return path
        return path[: -(len(ext) + 1)]

    def __repr__(self) -> str:
        return f"PathResolver(load_paths={self._load_paths!r}, extensions={self._extensions!r})"
