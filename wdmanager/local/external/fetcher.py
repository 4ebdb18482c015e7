import os
import logging
import requests
from pathlib import Path
from typing import Mapping, Optional

from wdmanager import __version__
from wdmanager.local.config import ManagerConfig
from wdmanager.local.errors import RemoteStatusError, TransportError

log = logging.getLogger(__name__)

USER_AGENT = f"wdmanager/{__version__}"


def _env_proxy(environ: Mapping[str, str], name: str) -> Optional[str]:
    return environ.get(name.upper()) or environ.get(name.lower()) or None


def resolve_proxy(url: str, explicit: Optional[str] = None,
                  environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """
    Picks the proxy for a download URL.

    An explicit proxy always wins. Otherwise HTTPS URLs use HTTPS_PROXY and
    fall back to HTTP_PROXY, while HTTP URLs only consult HTTP_PROXY.

    :param url: The URL about to be fetched.
    :param explicit: The proxy given on the command line or in the overrides file.
    :param environ: Environment to consult; defaults to `os.environ`.
    :return: The proxy URL, or None to connect directly.
    """
    if explicit:
        return explicit
    environ = os.environ if environ is None else environ
    if url.lower().startswith("https:"):
        return _env_proxy(environ, "https_proxy") or _env_proxy(environ, "http_proxy")
    return _env_proxy(environ, "http_proxy")


def fetch(url: str, destination: Path, config: ManagerConfig) -> Path:
    """
    Streams `url` into `destination`.

    The body is written chunk by chunk as it arrives. On any failure the
    partial destination file is removed before the error propagates; nothing
    is retried. On success the file is closed before this returns.

    :param url: The artifact URL.
    :param destination: Where to write the body.
    :param config: Supplies proxy, TLS verification, timeout and chunk size.
    :return Path: `destination`.
    :raises RemoteStatusError: The server answered with anything but 200.
    :raises TransportError: The request failed below HTTP.
    """
    proxy = resolve_proxy(url, config.proxy)
    proxies = {"http": proxy, "https": proxy} if proxy else {}
    if config.ignore_ssl:
        log.warning(f"Certificate validation is DISABLED for '{url}'. The download is not protected against tampering.")
    if proxy:
        log.info(f"Using proxy {proxy}")

    log.info(f"Downloading from {url}...")
    try:
        with requests.Session() as session:
            # Only resolve_proxy decides which proxy applies.
            session.trust_env = False
            with session.get(url, stream=True, timeout=config.download_timeout, proxies=proxies,
                             verify=not config.ignore_ssl, headers={"User-Agent": USER_AGENT}) as r:
                if r.status_code != 200:
                    raise RemoteStatusError(url, r.status_code)
                downloaded = 0
                with open(destination, "wb") as f:
                    for chunk in r.iter_content(chunk_size=config.download_chunk_size):
                        if chunk:
                            f.write(chunk)
                            downloaded += len(chunk)
    except RemoteStatusError as e:
        destination.unlink(missing_ok=True)
        log.error(str(e))
        raise
    except requests.RequestException as e:
        destination.unlink(missing_ok=True)
        log.error(f"Download failed: {e}")
        raise TransportError(url, str(e)) from e

    log.info(f"Successfully downloaded {downloaded / 1024 / 1024:.2f} MB to '{destination}'.")
    return destination
