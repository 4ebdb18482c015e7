import sys
import signal
import psutil
import logging
import threading
from enum import Enum
from typing import Dict, Optional, TextIO

from wdmanager.local.config import ManagerConfig
from wdmanager.local.errors import PreconditionError
from wdmanager.local.platform_info import PlatformInfo
from wdmanager.local.external import inventory
from wdmanager.local.external.registry import ArtifactDescriptor
from wdmanager.local.supervisor import process_utils, shutdown

log = logging.getLogger(__name__)

SERVER_KEY = "standalone"


class SupervisorState(Enum):
    NOT_STARTED = "not started"
    RUNNING = "running"
    SHUTTING_DOWN = "shutting down"
    EXITED = "exited"


class ServerSupervisor:
    """
    Owns the lifecycle of a single Selenium server process.

    The child inherits the supervisor's standard streams, so the operator sees
    the server's output live. Any line typed on standard input triggers the
    server's HTTP shutdown command, and an interrupt signal does not kill the
    supervisor: it keeps waiting so the child can finish shutting down. The
    child's exit code becomes the supervisor's result.
    """

    def __init__(self, config: ManagerConfig, registry: Dict[str, ArtifactDescriptor],
                 platform_info: PlatformInfo, stdin: Optional[TextIO] = None):
        self.config = config
        self.registry = registry
        self.platform_info = platform_info
        self.stdin = stdin if stdin is not None else sys.stdin

        self.state = SupervisorState.NOT_STARTED
        self.process: Optional[psutil.Popen] = None
        self.exit_code: Optional[int] = None
        self._state_lock = threading.Lock()

    @property
    def server(self) -> ArtifactDescriptor:
        return self.registry[SERVER_KEY]

    def start(self) -> psutil.Popen:
        """
        Spawns the server.

        :raises PreconditionError: The current server jar is not in the output directory.
        :raises RuntimeError: The supervisor has already been started.
        """
        if self.state is not SupervisorState.NOT_STARTED:
            raise RuntimeError(f"Cannot start a supervisor that is {self.state.value}.")

        listing = inventory.list_output_dir(self.config.out_dir)
        entries = inventory.scan(listing, self.registry.values())
        server_entry = next(e for e in entries if e.descriptor.key == SERVER_KEY)
        if not server_entry.present:
            raise PreconditionError(
                f"{self.server.name} {self.server.version} is not present in '{self.config.out_dir}'. "
                "Run the 'update' command first."
            )

        args = process_utils.get_server_args(self.config, self.server.expected_filename, entries)
        args = process_utils.normalize_command(args, self.platform_info.os_kind)
        log.info(f"Starting {self.server.name}: {' '.join(args)}")

        self.process = psutil.Popen(args, cwd=str(self.config.out_dir))
        with self._state_lock:
            self.state = SupervisorState.RUNNING
        log.info(f"{self.server.name} started with PID: {self.process.pid}")

        shutdown.watch_input(self.stdin, self.request_shutdown)
        return self.process

    def request_shutdown(self) -> Optional[threading.Thread]:
        """Sends the HTTP shutdown command without waiting for the answer."""
        with self._state_lock:
            if self.state is SupervisorState.EXITED:
                return None
            if self.state is SupervisorState.RUNNING:
                self.state = SupervisorState.SHUTTING_DOWN
        return shutdown.request_shutdown(self.config.shutdown_url, self.config.shutdown_request_timeout)

    def _handle_interrupt(self, signum, frame) -> None:
        log.warning(f"Interrupt received. Staying alive until the {self.server.name} process exits.")

    def wait(self) -> int:
        """
        Blocks until the child exits and returns its exit code.

        SIGINT is trapped for the duration of the wait and only logged; the
        child shares the terminal's process group and receives it directly.
        """
        if self.process is None:
            raise RuntimeError("The server has not been started.")

        trap = threading.current_thread() is threading.main_thread()
        previous_handler = signal.signal(signal.SIGINT, self._handle_interrupt) if trap else None
        try:
            code = self.process.wait()
        finally:
            if trap:
                signal.signal(signal.SIGINT, previous_handler)

        with self._state_lock:
            self.exit_code = int(code)
            self.state = SupervisorState.EXITED
        log.info(f"{self.server.name} has exited with code {self.exit_code}")
        return self.exit_code

    def run(self) -> int:
        """Starts the server and supervises it until it exits."""
        self.start()
        return self.wait()
