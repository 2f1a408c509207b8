"""Chain scanner that orchestrates directive parsing, resolution and graph construction."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from graph.model import DependencyGraph
from .discovery import list_entries
from .errors import DecodeError, NotFoundError, NotScannedError
from .parser import REQUIRE, REQUIRE_DIRECTORY, REQUIRE_TREE, extract_directives, split_directive
from .resolver import PathResolver, dirname, extension, is_explicit, join, normalize, same_file

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChainEntry:
    """A file in a chain, paired with its content."""

    filename: str
    content: str


class ChainScanner:
    """
    Scans files for require directives and orders their dependencies.

    File identities are the strings given to scan() and the relative
    names derived from them; chains are reported with those identities.
    Each instance holds the state of one resolution run and is not safe
    to share between threads.
    """

    def __init__(self, extensions: Iterable[str] = (), load_paths: Iterable[str] = ()):
        self._graph = DependencyGraph()
        self._resolver = PathResolver()
        self._contents: Dict[str, str] = {}
        self._scanned: Dict[str, None] = {}

        self.configure(extensions)
        for path in load_paths:
            self.append_load_path(path)

    @property
    def graph(self) -> DependencyGraph:
        """Return the dependency graph built so far."""
        return self._graph

    @property
    def scanned(self) -> List[str]:
        """Return the scanned file identities in scan order."""
        return list(self._scanned)

    def configure(self, extensions: Iterable[str]) -> None:
        """Register the extensions of files that may hold directives."""
        for ext in extensions:
            self._resolver.add_extension(ext.lstrip("."))

    def prepend_load_path(self, path: str) -> None:
        """Add a load path with the highest precedence."""
        self._resolver.prepend_path(path)

    def append_load_path(self, path: str) -> None:
        """Add a load path with the lowest precedence."""
        self._resolver.append_path(path)

    def get_registered_extensions(self) -> List[str]:
        """Return the registered extensions, most recently added first."""
        return self._resolver.extensions

    def scan(self, file_id: str) -> bool:
        """
        Scan a file and, recursively, everything it requires.

        Args:
            file_id: The file identity, relative to a load path or explicit.

        Returns:
            False if the file was already scanned, True otherwise.

        Scanning recurses once per newly discovered file, so a require
        chain deeper than the interpreter recursion limit raises
        RecursionError.

        Raises:
            NotFoundError: If the file, a required file or a required
                directory cannot be resolved.
            DecodeError: If a file is not valid UTF-8.
        """
        if file_id in self._scanned:
            return False

        self._scanned[file_id] = None
        self._graph.add_node(file_id)
        logger.debug("Scanning %s", file_id)

        directory = dirname(file_id)
        own_path = None
        for text in extract_directives(self._content(file_id)):
            command, arguments = split_directive(text)

            if command == REQUIRE:
                for reference in arguments:
                    self._require(reference, directory, file_id)
            elif command in (REQUIRE_DIRECTORY, REQUIRE_TREE):
                if own_path is None:
                    own_path = self._resolver.resolve(file_id)
                for reference in arguments:
                    dir_name = reference if is_explicit(reference) else join(directory, reference)
                    self._require_directory(
                        dir_name, file_id, own_path, recursive=(command == REQUIRE_TREE)
                    )
            else:
                logger.debug("Ignoring unknown directive '%s' in %s", command, file_id)

        return True

    def get_chain(self, file_id: str) -> List[str]:
        """
        Get the dependencies of a scanned file, dependencies first.

        Raises:
            NotScannedError: If the file was never scanned.
            CyclicDependencyError: If a cycle is reachable from the file.
        """
        if file_id not in self._scanned:
            raise NotScannedError(file_id)

        return self._graph.chain(file_id)

    def get_file_chain(self, file_id: str) -> List[ChainEntry]:
        """Get the chain of a scanned file plus the file itself, with contents."""
        files = self.get_chain(file_id) + [file_id]
        return [ChainEntry(filename, self._content(filename)) for filename in files]

    def _content(self, file_id: str) -> str:
        """Read a file once and cache its content. A leading BOM is dropped."""
        if file_id not in self._contents:
            path = self._resolver.probe(file_id)
            if path is None:
                raise NotFoundError(file_id, f"File not found: '{file_id}'")
            try:
                self._contents[file_id] = Path(path).read_text(encoding="utf-8-sig")
            except UnicodeDecodeError as e:
                raise DecodeError(file_id, e) from e

        return self._contents[file_id]

    def _require(self, reference: str, directory: str, dependent: str) -> None:
        """Resolve a reference from directory and record it as a dependency of dependent."""
        if is_explicit(self._resolver.strip_known_extension(reference)):
            dependency = self._resolver.probe_with_extensions(reference)
            if dependency is None:
                raise NotFoundError(reference, f"File not found: '{reference}'")
        else:
            dependency = self._find_matching_file(join(directory, reference))

        dependency = normalize(dependency)

        if extension(dependency) not in self._resolver.extensions:
            logger.debug("Skipping %s: extension not registered", dependency)
            return

        logger.debug("Adding dependency %s -> %s", dependent, dependency)
        self._graph.add_edge(dependent, dependency)
        self.scan(dependency)

    def _require_directory(self, dir_name: str, dependent: str, own_path: str, recursive: bool) -> None:
        """
        Require every file in a directory, descending into subdirectories if recursive.

        own_path is the resolved location of dependent, which is never
        required by itself.
        """
        dir_path = self._resolver.probe(dir_name)
        if dir_path is None or not os.path.isdir(dir_path):
            raise NotFoundError(dir_name, f"Directory not found: '{dir_name}'")

        for name in list_entries(dir_path):
            full_path = join(dir_path, name)
            if same_file(full_path, own_path):
                continue

            if os.path.isfile(full_path):
                self._require(name, dir_name, dependent)
            elif recursive and os.path.isdir(full_path):
                self._require_directory(join(dir_name, name), dependent, own_path, recursive=True)

    def _find_matching_file(self, name: str) -> str:
        """
        Map a reference (without or with extension) to a file identity.

        The resolved file is matched first against files already read, so
        the same file keeps the same identity, then against the entries of
        its directory joined back onto the reference's directory.
        """
        absolute = self._resolver.probe_with_extensions(name)
        if absolute is None:
            raise NotFoundError(name, f"File not found: '{name}'")

        match = self._match_identity(absolute, list(self._contents))
        if match is not None:
            return match

        directory = dirname(name)
        candidates = [join(directory, entry) for entry in list_entries(dirname(absolute))]
        match = self._match_identity(absolute, candidates)
        if match is None:
            raise NotFoundError(name, f"File not found: '{name}'")

        return match

    def _match_identity(self, absolute: str, candidates: List[str]) -> Optional[str]:
        """Return the first candidate that resolves to the same file as absolute."""
        for candidate in candidates:
            path = self._resolver.probe(candidate)
            if path is not None and same_file(path, absolute):
                return candidate
        return None

    def __repr__(self) -> str:
        return f"ChainScanner(scanned={len(self._scanned)}, graph={self._graph!r})"


def build_chain(
    file_id: str,
    extensions: Iterable[str],
    load_paths: Iterable[str] = (),
) -> List[ChainEntry]:
    """
    Scan a file and return its file chain.

    Args:
        file_id: The file to start from.
        extensions: Extensions of files that may hold directives.
        load_paths: Directories searched, in order, for file identities.

    Returns:
        The dependencies of the file, then the file itself, with contents.
    """
    scanner = ChainScanner(extensions=extensions, load_paths=load_paths)
    scanner.scan(file_id)
    return scanner.get_file_chain(file_id)
