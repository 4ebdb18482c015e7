"""
This module contains the default configuration settings for wdmanager.
It defines paths, artifact versions, download locations and server settings.
Values here are only defaults: `wdmanager.local.config.load_config` merges them with
an overrides file and command-line options into a single `ManagerConfig`.
"""

import os
import pathlib
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv(override=True)

#* --- Core Paths ---
BASE_DIR = pathlib.Path.cwd()  # Invocation directory
OUT_DIR = pathlib.Path(os.getenv("WDM_OUT_DIR", BASE_DIR / "selenium"))
OVERRIDES_JSON_PATH = BASE_DIR / "wdmanager.json"

#* --- Artifact Versions ---
SELENIUM_VERSION = os.getenv("WDM_SELENIUM_VERSION", "2.44.0")
CHROMEDRIVER_VERSION = os.getenv("WDM_CHROMEDRIVER_VERSION", "2.12")
IEDRIVER_VERSION = os.getenv("WDM_IEDRIVER_VERSION", "2.44.0")

#* --- Download Locations ---
SELENIUM_BASE_URL = "https://selenium-release.storage.googleapis.com"
CHROMEDRIVER_BASE_URL = "https://chromedriver.storage.googleapis.com"

#* --- Network Settings ---
PROXY = os.getenv("WDM_PROXY") or None
IGNORE_SSL = False
DOWNLOAD_TIMEOUT = 30  # seconds
DOWNLOAD_CHUNK_SIZE = 8192

#* --- Server Settings ---
JAVA_EXECUTABLE = os.getenv("JAVA_EXECUTABLE", "java")
SELENIUM_PORT = int(os.getenv("WDM_SELENIUM_PORT", "0")) or None
# The shutdown endpoint always lives on the default management port.
DEFAULT_SELENIUM_PORT = 4444
SHUTDOWN_PATH = "/selenium-server/driver/?cmd=shutDownSeleniumServer"
SHUTDOWN_REQUEST_TIMEOUT = 10  # seconds

#* --- MODIFIABLE SETTINGS (Changeable via the overrides file) ---
MODIFIABLE_SETTINGS = {
    "OUT_DIR",
    "SELENIUM_VERSION", "CHROMEDRIVER_VERSION", "IEDRIVER_VERSION",
    "SELENIUM_BASE_URL", "CHROMEDRIVER_BASE_URL",
    "PROXY", "IGNORE_SSL", "DOWNLOAD_TIMEOUT",
    "JAVA_EXECUTABLE", "SELENIUM_PORT",
}
