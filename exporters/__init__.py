"""Exporters for converting chains and graphs to various output formats."""

from .list_exporter import to_list
from .json_exporter import to_json
from .bundle_exporter import to_bundle
from .ascii_exporter import to_ascii

__all__ = ["to_list", "to_json", "to_bundle", "to_ascii"]
