import logging
import sys

LOG_FORMAT = '%(asctime)s - %(levelname)-8s - [%(name)s] - %(message)s'


class MainFormatter(logging.Formatter):
    """Console formatter. Records from worker threads carry the thread name."""

    def format(self, record):
        if record.threadName and record.threadName.startswith("Reconcile"):
            original_format = self._style._fmt
            self._style._fmt = '%(asctime)s - %(levelname)-8s - [%(name)s:%(threadName)s] - %(message)s'
            formatted_message = super().format(record)
            self._style._fmt = original_format
            return formatted_message
        return super().format(record)


def setup_logging(console_level: int = logging.INFO) -> None:
    """
    Configures the root logger for the application.
    Clears any previously configured handlers to prevent duplication, so it is
    safe to call more than once.

    :param console_level: The logging level for the console output (e.g., logging.INFO).
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(MainFormatter(LOG_FORMAT))
    root_logger.addHandler(console_handler)

    # urllib3 logs every connection at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)
