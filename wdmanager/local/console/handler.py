from typing import Iterable

from wdmanager.local.external.inventory import InventoryEntry
from wdmanager.local.external.reconciler import Outcome, ReconcileResult


def display_status(entries: Iterable[InventoryEntry]) -> None:
    """Prints the presence and staleness of every artifact."""
    print("\n--- Artifact Status ---")
    for entry in entries:
        descriptor = entry.descriptor
        if entry.present:
            status = f"{descriptor.version} installed"
        else:
            status = f"{descriptor.version} NOT installed"
        print(f"  - {descriptor.name:<22} : {status}")
        for stale in entry.stale_files:
            print(f"      stale file: {stale}")
    print("-----------------------\n")


def display_results(results: Iterable[ReconcileResult]) -> None:
    """Prints the outcome of a reconcile pass."""
    print("\n--- Update Summary ---")
    for result in results:
        line = f"  - {result.descriptor.name:<22} : {result.outcome.value}"
        if result.outcome is Outcome.FAILED and result.error is not None:
            line += f" ({result.error})"
        print(line)
    print("----------------------\n")
