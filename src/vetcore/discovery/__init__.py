"""Package discovery: resolving directories into units and walking trees of them."""

from .resolver import FileHeader, PackageResolver, Unit, parse_header, read_header
from .traversal import DirectoryTraversal

__all__ = [
    "PackageResolver",
    "Unit",
    "FileHeader",
    "parse_header",
    "read_header",
    "DirectoryTraversal",
]
