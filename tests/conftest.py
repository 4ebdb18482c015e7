"""
Shared test fixtures and configuration.
"""

import io
import logging
import zipfile
from pathlib import Path
from typing import Dict, List, Union

import pytest
import requests

from wdmanager.local.config import ManagerConfig
from wdmanager.local.platform_info import Arch, OSKind, PlatformInfo
from wdmanager.local.external.registry import build_registry


class FakeResponse:
    """Stands in for a streamed `requests.Response`."""

    def __init__(self, status_code: int = 200, body: bytes = b""):
        self.status_code = status_code
        self.body = body
        self.closed = False

    def iter_content(self, chunk_size: int = 1):
        for i in range(0, len(self.body), chunk_size):
            yield self.body[i:i + chunk_size]

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True
        return False


class FakeHttp:
    """Routes `requests.Session.get` calls to canned responses or exceptions."""

    def __init__(self):
        self.routes: Dict[str, Union[FakeResponse, Exception]] = {}
        self.calls: List[dict] = []

    def get(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        route = self.routes.get(url, FakeResponse(404))
        if isinstance(route, Exception):
            raise route
        return route

    @property
    def urls(self) -> List[str]:
        return [c["url"] for c in self.calls]


def make_zip(members: Dict[str, bytes]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, data in members.items():
            zf.writestr(name, data)
    return buffer.getvalue()


@pytest.fixture(autouse=True)
def reset_logging():
    """Restores the root handlers so CLI-installed handlers never outlive their stream."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    path = tmp_path / "selenium"
    path.mkdir()
    return path


@pytest.fixture
def config(out_dir: Path) -> ManagerConfig:
    return ManagerConfig(
        out_dir=out_dir,
        selenium_version="2.44.0",
        chromedriver_version="2.12",
        iedriver_version="2.44.0",
        selenium_base_url="https://selenium.test",
        chromedriver_base_url="https://chromedriver.test",
    )


@pytest.fixture
def linux() -> PlatformInfo:
    return PlatformInfo(OSKind.LINUX, Arch.X64)


@pytest.fixture
def windows() -> PlatformInfo:
    return PlatformInfo(OSKind.WINDOWS, Arch.X64)


@pytest.fixture
def registry(config, linux):
    return build_registry(config, linux)


@pytest.fixture
def http(monkeypatch) -> FakeHttp:
    fake = FakeHttp()

    def fake_get(session, url, **kwargs):
        return fake.get(url, **kwargs)

    monkeypatch.setattr(requests.Session, "get", fake_get)
    return fake


@pytest.fixture
def chromedriver_zip() -> bytes:
    return make_zip({"chromedriver": b"#!/bin/sh\necho chromedriver\n"})
