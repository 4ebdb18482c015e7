import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from wdmanager.local.config import ManagerConfig
from wdmanager.local.platform_info import Arch, OSKind, PlatformInfo

log = logging.getLogger(__name__)

UrlResolver = Callable[[str, PlatformInfo], Optional[str]]


@dataclass(frozen=True)
class ArtifactDescriptor:
    """
    Static description of one downloadable artifact.

    `expected_filename` always embeds the configured version while
    `file_prefix` never does, so the prefix matches every version on disk.
    """
    key: str
    name: str
    is_default_selected: bool
    file_prefix: str
    expected_filename: str
    version: str
    url_resolver: UrlResolver
    is_archive: bool = False
    executable_name: Optional[str] = None
    driver_property: Optional[str] = None

    def resolve_download_url(self, platform_info: PlatformInfo) -> Optional[str]:
        return self.url_resolver(self.version, platform_info)


def short_version(version: str) -> str:
    """Returns the 'major.minor' part of a version string, e.g. '2.44.0' -> '2.44'."""
    return ".".join(version.split(".")[:2])


def executable_filename(base_name: str, platform_info: PlatformInfo) -> str:
    """Appends '.exe' for Windows targets."""
    return f"{base_name}.exe" if platform_info.is_windows else base_name


def _standalone_url(base_url: str) -> UrlResolver:
    def resolve(version: str, platform_info: PlatformInfo) -> Optional[str]:
        return f"{base_url}/{short_version(version)}/selenium-server-standalone-{version}.jar"
    return resolve


_CHROMEDRIVER_BUILDS = {
    (OSKind.MAC, None): "mac32",
    (OSKind.LINUX, Arch.X64): "linux64",
    (OSKind.LINUX, None): "linux32",
    (OSKind.WINDOWS, None): "win32",
}


def _chromedriver_url(base_url: str) -> UrlResolver:
    def resolve(version: str, platform_info: PlatformInfo) -> Optional[str]:
        build = (_CHROMEDRIVER_BUILDS.get((platform_info.os_kind, platform_info.arch))
                 or _CHROMEDRIVER_BUILDS.get((platform_info.os_kind, None)))
        if build is None:
            return None
        return f"{base_url}/{version}/chromedriver_{build}.zip"
    return resolve


def _iedriver_url(base_url: str) -> UrlResolver:
    def resolve(version: str, platform_info: PlatformInfo) -> Optional[str]:
        if not platform_info.is_windows:
            return None
        build = "x64" if platform_info.arch is Arch.X64 else "Win32"
        return f"{base_url}/{short_version(version)}/IEDriverServer_{build}_{version}.zip"
    return resolve


def build_registry(config: ManagerConfig, platform_info: PlatformInfo) -> Dict[str, ArtifactDescriptor]:
    """
    Constructs the descriptors for the configured versions.

    The server artifact is always the 'standalone' key. Descriptors are built
    once per invocation and never mutated afterwards.

    :param config: The effective configuration.
    :param platform_info: The detected host platform.
    :return dict: Descriptors keyed by artifact key, in a stable order.
    """
    standalone = ArtifactDescriptor(
        key="standalone",
        name="selenium standalone",
        is_default_selected=True,
        file_prefix="selenium-server-standalone",
        expected_filename=f"selenium-server-standalone-{config.selenium_version}.jar",
        version=config.selenium_version,
        url_resolver=_standalone_url(config.selenium_base_url),
    )
    chrome = ArtifactDescriptor(
        key="chrome",
        name="chromedriver",
        is_default_selected=True,
        file_prefix="chromedriver_",
        expected_filename=f"chromedriver_{config.chromedriver_version}.zip",
        version=config.chromedriver_version,
        url_resolver=_chromedriver_url(config.chromedriver_base_url),
        is_archive=True,
        executable_name=executable_filename("chromedriver", platform_info),
        driver_property="webdriver.chrome.driver",
    )
    ie = ArtifactDescriptor(
        key="ie",
        name="IEDriver",
        is_default_selected=False,
        file_prefix="IEDriverServer_",
        expected_filename=f"IEDriverServer_{config.iedriver_version}.zip",
        version=config.iedriver_version,
        url_resolver=_iedriver_url(config.selenium_base_url),
        is_archive=True,
        executable_name=executable_filename("IEDriverServer", platform_info),
        driver_property="webdriver.ie.driver",
    )
    registry = {d.key: d for d in (standalone, chrome, ie)}
    log.debug(f"Artifact registry built for {platform_info.os_kind.value}/{platform_info.arch.value}: "
              f"{', '.join(d.expected_filename for d in registry.values())}")
    return registry


def select_descriptors(registry: Dict[str, ArtifactDescriptor],
                       selection: Optional[Dict[str, Optional[bool]]] = None) -> List[ArtifactDescriptor]:
    """
    Picks the descriptors a pass should process.

    An explicit True/False in `selection` wins; keys absent or None fall back
    to the descriptor's `is_default_selected`.
    """
    selection = selection or {}
    selected = []
    for key, descriptor in registry.items():
        choice = selection.get(key)
        if choice is None:
            choice = descriptor.is_default_selected
        if choice:
            selected.append(descriptor)
    return selected
