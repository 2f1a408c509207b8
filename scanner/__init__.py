"""Scanner module for directive parsing, path resolution and chain building."""

from .discovery import list_entries
from .parser import extract_header, parse_directives, split_directive
from .resolver import PathResolver
from .builder import ChainScanner, ChainEntry, build_chain
from .config import ScanConfig, load_config, find_config
from .errors import ScanError, NotFoundError, NotScannedError, DecodeError, ConfigError, CyclicDependencyError

__all__ = [
    "list_entries",
    "extract_header",
    "parse_directives",
    "split_directive",
    "PathResolver",
    "ChainScanner",
    "ChainEntry",
    "build_chain",
    "ScanConfig",
    "load_config",
    "find_config",
    "ScanError",
    "NotFoundError",
    "NotScannedError",
    "DecodeError",
    "ConfigError",
    "CyclicDependencyError",
]
