"""
This package resolves, downloads and installs the external artifacts.
It exposes the descriptor registry, the inventory scanner and the `Reconciler`.
"""

from .registry import ArtifactDescriptor, build_registry, select_descriptors
from .inventory import InventoryEntry, list_output_dir, scan
from .reconciler import Outcome, ReconcileResult, Reconciler

__all__ = [
    "ArtifactDescriptor", "build_registry", "select_descriptors",
    "InventoryEntry", "list_output_dir", "scan",
    "Outcome", "ReconcileResult", "Reconciler",
]
