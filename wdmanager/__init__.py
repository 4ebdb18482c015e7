"""wdmanager: keeps the Selenium server and browser drivers current and runs the server."""

__version__ = "0.1.0"
