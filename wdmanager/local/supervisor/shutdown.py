import logging
import requests
import threading
from typing import Callable, TextIO

log = logging.getLogger(__name__)


def _send_shutdown_request(url: str, timeout: float) -> None:
    """Target function for the shutdown thread. Failures are only logged."""
    try:
        response = requests.get(url, timeout=timeout)
        log.debug(f"Shutdown request answered with HTTP {response.status_code}.")
    except requests.RequestException as e:
        log.error(f"Failed to send shutdown request to '{url}': {e}")


def request_shutdown(url: str, timeout: float) -> threading.Thread:
    """
    Asks the Selenium server to shut itself down.

    The request runs on a daemon thread so the caller keeps waiting on the
    process instead of on the HTTP call.

    :param url: The server's shutdown endpoint.
    :param timeout: Timeout for the HTTP request, in seconds.
    :return threading.Thread: The already started request thread.
    """
    log.info("Attempting to shut down the Selenium server nicely...")
    thread = threading.Thread(
        target=_send_shutdown_request,
        args=(url, timeout),
        daemon=True,
        name="ShutdownRequestThread"
    )
    thread.start()
    return thread


def _watch_stream(stream: TextIO, on_data: Callable[[], None]) -> None:
    try:
        for line in iter(stream.readline, ""):
            if line:
                on_data()
    except (OSError, ValueError) as e:
        log.debug(f"Standard input watcher exited: {e}")


def watch_input(stream: TextIO, on_data: Callable[[], None]) -> threading.Thread:
    """Calls `on_data` every time a line arrives on `stream`, until EOF."""
    thread = threading.Thread(target=_watch_stream, args=(stream, on_data), daemon=True, name="StdinWatcherThread")
    thread.start()
    return thread
