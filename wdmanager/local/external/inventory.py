import logging
from pathlib import Path
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from wdmanager.local.external.registry import ArtifactDescriptor

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class InventoryEntry:
    """Presence of one artifact in a directory listing snapshot."""
    descriptor: ArtifactDescriptor
    present: bool
    stale_files: Tuple[str, ...] = ()

    @property
    def stale_alternate_present(self) -> bool:
        return bool(self.stale_files)


def list_output_dir(out_dir: Path) -> List[str]:
    """Takes the single listing snapshot for a pass. A missing directory is empty."""
    if not out_dir.is_dir():
        log.debug(f"Output directory '{out_dir}' does not exist yet.")
        return []
    return sorted(p.name for p in out_dir.iterdir() if p.is_file())


def classify(listing: Iterable[str], descriptor: ArtifactDescriptor) -> InventoryEntry:
    names = list(listing)
    stale = tuple(n for n in names if descriptor.file_prefix in n and n != descriptor.expected_filename)
    return InventoryEntry(descriptor, descriptor.expected_filename in names, stale)


def scan(listing: Iterable[str], descriptors: Iterable[ArtifactDescriptor]) -> List[InventoryEntry]:
    """
    Classifies every descriptor against the same listing snapshot.

    :param listing: Filenames in the output directory.
    :param descriptors: The descriptors to classify.
    :return list: One InventoryEntry per descriptor, in input order.
    """
    names = list(listing)
    return [classify(names, d) for d in descriptors]
