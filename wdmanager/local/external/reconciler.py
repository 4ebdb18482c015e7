import logging
from enum import Enum
from pathlib import Path
from dataclasses import dataclass
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from wdmanager.local.config import ManagerConfig
from wdmanager.local.errors import ConfigurationError, ManagerError
from wdmanager.local.platform_info import PlatformInfo
from wdmanager.local.external import fetcher, installer, inventory
from wdmanager.local.external.registry import ArtifactDescriptor

log = logging.getLogger(__name__)


class Outcome(Enum):
    ALREADY_CURRENT = "already current"
    UPDATED = "updated"
    UNAVAILABLE_FOR_PLATFORM = "unavailable for this platform"
    FAILED = "failed"


@dataclass(frozen=True)
class ReconcileResult:
    descriptor: ArtifactDescriptor
    outcome: Outcome
    error: Optional[ManagerError] = None


class Reconciler:
    """Brings the output directory in line with the configured artifact versions."""

    def __init__(self, config: ManagerConfig, platform_info: PlatformInfo):
        self.config = config
        self.platform_info = platform_info
        self.out_dir: Path = config.out_dir

    def _delete_stale(self, descriptor: ArtifactDescriptor, listing: Sequence[str]) -> None:
        """Removes every file carrying the descriptor's prefix, whatever its version."""
        for name in listing:
            if descriptor.file_prefix not in name:
                continue
            log.info(f"Removing old {descriptor.name} file '{name}'.")
            (self.out_dir / name).unlink(missing_ok=True)

    def reconcile_one(self, entry: inventory.InventoryEntry, listing: Sequence[str]) -> ReconcileResult:
        """
        Runs delete-stale, fetch and install for one artifact, in that order.

        An artifact whose exact current file is present is left untouched,
        even if older files with the same prefix are lying around.
        """
        descriptor = entry.descriptor
        if entry.present:
            log.info(f"{descriptor.name} {descriptor.version} is up to date.")
            return ReconcileResult(descriptor, Outcome.ALREADY_CURRENT)

        try:
            self._delete_stale(descriptor, listing)

            url = descriptor.resolve_download_url(self.platform_info)
            if url is None:
                raise ConfigurationError(
                    f"No {descriptor.name} build is published for "
                    f"{self.platform_info.os_kind.value}/{self.platform_info.arch.value}."
                )

            log.info(f"Updating {descriptor.name} to {descriptor.version}...")
            archive = fetcher.fetch(url, self.out_dir / descriptor.expected_filename, self.config)
            if descriptor.is_archive:
                installer.install(archive, self.out_dir, descriptor, self.platform_info.os_kind)
        except ConfigurationError as e:
            log.warning(f"Skipping {descriptor.name}: {e}")
            return ReconcileResult(descriptor, Outcome.UNAVAILABLE_FOR_PLATFORM, e)
        except ManagerError as e:
            log.error(f"Update of {descriptor.name} failed. Re-run the update to try again.")
            return ReconcileResult(descriptor, Outcome.FAILED, e)
        except OSError as e:
            log.error(f"Update of {descriptor.name} failed: {e}")
            return ReconcileResult(descriptor, Outcome.FAILED, ManagerError(str(e)))

        return ReconcileResult(descriptor, Outcome.UPDATED)

    def reconcile(self, descriptors: Sequence[ArtifactDescriptor]) -> List[ReconcileResult]:
        """
        Reconciles the given artifacts concurrently.

        The directory listing is taken once, before any file is removed. Each
        artifact's own steps run in sequence; different artifacts overlap.

        :param descriptors: The selected artifacts.
        :return list: One result per descriptor, in input order.
        """
        if not descriptors:
            log.info("No artifacts selected.")
            return []

        self.out_dir.mkdir(parents=True, exist_ok=True)
        listing = inventory.list_output_dir(self.out_dir)
        entries = inventory.scan(listing, descriptors)

        with ThreadPoolExecutor(max_workers=len(entries), thread_name_prefix="Reconcile") as pool:
            futures = [pool.submit(self.reconcile_one, entry, listing) for entry in entries]
            return [f.result() for f in futures]
