import stat
import logging
import zipfile
from pathlib import Path
from typing import Optional

from wdmanager.local.errors import InstallError
from wdmanager.local.platform_info import OSKind
from wdmanager.local.external.registry import ArtifactDescriptor

log = logging.getLogger(__name__)

EXECUTABLE_MODE = (stat.S_IRWXU | stat.S_IRGRP | stat.S_IXGRP | stat.S_IROTH | stat.S_IXOTH)  # 0o755


def install(archive_path: Path, out_dir: Path, descriptor: ArtifactDescriptor, os_kind: OSKind) -> Optional[Path]:
    """
    Extracts a downloaded archive into the output directory.

    Existing entries of the same name are overwritten, so running this twice
    on the same archive is harmless. Zip files do not reliably carry the
    executable bit, so on non-Windows targets it is set on the extracted
    executable afterwards.

    :param archive_path: The downloaded zip file. It is left in place.
    :param out_dir: Directory to extract into.
    :param descriptor: The artifact being installed.
    :param os_kind: The target operating system.
    :return: Path of the extracted executable, or None if the descriptor names none.
    :raises InstallError: The archive is corrupt or could not be written out.
    """
    log.info(f"Extracting '{archive_path.name}'...")
    try:
        with zipfile.ZipFile(archive_path, "r") as zip_ref:
            zip_ref.extractall(out_dir)
    except (zipfile.BadZipFile, OSError) as e:
        log.error(f"Extraction of '{archive_path.name}' failed: {e}")
        raise InstallError(f"Could not extract '{archive_path}': {e}") from e

    if not descriptor.executable_name:
        return None

    executable = out_dir / descriptor.executable_name
    if os_kind is not OSKind.WINDOWS:
        try:
            executable.chmod(EXECUTABLE_MODE)
        except OSError as e:
            log.error(f"Could not mark '{executable}' as executable: {e}")
            raise InstallError(f"Could not set permissions on '{executable}': {e}") from e

    log.info(f"{descriptor.name} installed at '{executable}'.")
    return executable
