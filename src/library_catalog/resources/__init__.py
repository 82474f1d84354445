"""Library Catalog Resources

Resources are the read-only side of the catalog server: each one renders
part of the catalog for a client and never changes it. Changes go through
the tools in ``library_catalog.tools``.
"""

from .catalog import build_catalog_resources

__all__ = [
    "build_catalog_resources",
]
