"""Catalog-addressed operations and the command boundary."""

from workspace.catalog import ImageCatalog
from workspace.engine import ImageEngine
from workspace.commands import CommandRunner, ScriptReport

__all__ = [
    "ImageCatalog",
    "ImageEngine",
    "CommandRunner",
    "ScriptReport",
]
