"""Treesum data models."""

from treesum.models.entry import DirLevel, EntryRecord
from treesum.models.session import ScanConfig, ScanSession

__all__ = [
    "DirLevel",
    "EntryRecord",
    "ScanConfig",
    "ScanSession",
]
