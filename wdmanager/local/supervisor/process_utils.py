import logging
from typing import TYPE_CHECKING, Iterable, List

from wdmanager.local.platform_info import OSKind

if TYPE_CHECKING:
    from wdmanager.local.config import ManagerConfig
    from wdmanager.local.external.inventory import InventoryEntry

log = logging.getLogger(__name__)


def normalize_command(args: List[str], os_kind: OSKind) -> List[str]:
    """Wraps the command through the command interpreter on Windows."""
    if os_kind is OSKind.WINDOWS:
        return ["cmd", "/c", *args]
    return list(args)


def get_server_args(config: "ManagerConfig", server_filename: str,
                    entries: Iterable["InventoryEntry"]) -> List[str]:
    """
    Returns the command line for the Selenium server.

    Drivers are optional companions: the server is only told where a driver
    lives if that driver's current version is present.

    :param config: The effective configuration.
    :param server_filename: Filename of the server jar inside the output directory.
    :param entries: Inventory of every artifact from the same listing snapshot.
    :return list: The un-normalized argument list.
    """
    out_dir = config.out_dir.resolve()
    args = [config.java_executable, "-jar", str(out_dir / server_filename)]
    if config.selenium_port:
        args += ["-port", str(config.selenium_port)]

    for entry in entries:
        descriptor = entry.descriptor
        if not descriptor.driver_property or not entry.present:
            continue
        driver_path = out_dir / (descriptor.executable_name or descriptor.expected_filename)
        args.append(f"-D{descriptor.driver_property}={driver_path}")
        log.debug(f"Passing {descriptor.name} location to the server: {driver_path}")
    return args


def exit_status(code: int) -> int:
    """
    Maps a child's return code onto a status the shell reports faithfully.

    A child killed by a signal returns `-signum`; shells report that as
    `128 + signum`, so the supervisor exits the same way.
    """
    return 128 - code if code < 0 else code
