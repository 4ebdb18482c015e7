"""
Tests for the reconcile pass: ordering, idempotence and failure isolation.
"""

import requests

from wdmanager.local.platform_info import Arch, OSKind, PlatformInfo
from wdmanager.local.external.reconciler import Outcome, Reconciler
from tests.conftest import FakeResponse

STANDALONE_URL = "https://selenium.test/2.44/selenium-server-standalone-2.44.0.jar"
CHROME_URL = "https://chromedriver.test/2.12/chromedriver_linux64.zip"


def _outcomes(results):
    return {r.descriptor.key: r.outcome for r in results}


def _serve_all(http, chromedriver_zip):
    http.routes[STANDALONE_URL] = FakeResponse(200, b"jar bytes")
    http.routes[CHROME_URL] = FakeResponse(200, chromedriver_zip)


def test_fresh_directory_is_populated(config, linux, registry, http, chromedriver_zip, out_dir):
    _serve_all(http, chromedriver_zip)
    results = Reconciler(config, linux).reconcile([registry["standalone"], registry["chrome"]])

    assert _outcomes(results) == {"standalone": Outcome.UPDATED, "chrome": Outcome.UPDATED}
    assert sorted(p.name for p in out_dir.iterdir()) == [
        "chromedriver", "chromedriver_2.12.zip", "selenium-server-standalone-2.44.0.jar",
    ]


def test_second_pass_is_a_no_op(config, linux, registry, http, chromedriver_zip, out_dir):
    _serve_all(http, chromedriver_zip)
    selected = [registry["standalone"], registry["chrome"]]
    Reconciler(config, linux).reconcile(selected)
    snapshot = {p.name: p.read_bytes() for p in out_dir.iterdir()}
    http.calls.clear()

    results = Reconciler(config, linux).reconcile(selected)

    assert http.calls == []
    assert set(_outcomes(results).values()) == {Outcome.ALREADY_CURRENT}
    assert {p.name: p.read_bytes() for p in out_dir.iterdir()} == snapshot


def test_stale_version_is_replaced(config, linux, registry, http, chromedriver_zip, out_dir):
    (out_dir / "chromedriver_2.10.zip").write_bytes(b"old")
    http.routes[CHROME_URL] = FakeResponse(200, chromedriver_zip)

    results = Reconciler(config, linux).reconcile([registry["chrome"]])

    assert _outcomes(results) == {"chrome": Outcome.UPDATED}
    assert [p.name for p in out_dir.iterdir() if p.name.startswith("chromedriver_")] == ["chromedriver_2.12.zip"]


def test_present_file_short_circuits_stale_cleanup(config, linux, registry, http, out_dir):
    (out_dir / "selenium-server-standalone-2.43.1.jar").write_bytes(b"old")
    (out_dir / "selenium-server-standalone-2.44.0.jar").write_bytes(b"current")

    results = Reconciler(config, linux).reconcile([registry["standalone"]])

    assert _outcomes(results) == {"standalone": Outcome.ALREADY_CURRENT}
    assert (out_dir / "selenium-server-standalone-2.43.1.jar").exists()
    assert http.calls == []


def test_unavailable_platform_makes_no_request(config, registry, http, out_dir):
    other = PlatformInfo(OSKind.OTHER, Arch.OTHER)
    http.routes[STANDALONE_URL] = FakeResponse(200, b"jar bytes")

    results = Reconciler(config, other).reconcile([registry["standalone"], registry["chrome"]])

    assert _outcomes(results) == {"standalone": Outcome.UPDATED, "chrome": Outcome.UNAVAILABLE_FOR_PLATFORM}
    assert http.urls == [STANDALONE_URL]


def test_failure_does_not_stop_other_artifacts(config, linux, registry, http, chromedriver_zip, out_dir):
    http.routes[STANDALONE_URL] = requests.ConnectionError("boom")
    http.routes[CHROME_URL] = FakeResponse(200, chromedriver_zip)

    results = Reconciler(config, linux).reconcile([registry["standalone"], registry["chrome"]])

    assert _outcomes(results) == {"standalone": Outcome.FAILED, "chrome": Outcome.UPDATED}
    assert not (out_dir / "selenium-server-standalone-2.44.0.jar").exists()


def test_non_200_leaves_no_partial_file(config, linux, registry, http, out_dir):
    http.routes[STANDALONE_URL] = FakeResponse(503)

    results = Reconciler(config, linux).reconcile([registry["standalone"]])

    assert _outcomes(results) == {"standalone": Outcome.FAILED}
    assert list(out_dir.iterdir()) == []


def test_bad_archive_fails_and_keeps_download(config, linux, registry, http, out_dir):
    http.routes[CHROME_URL] = FakeResponse(200, b"not a zip")

    results = Reconciler(config, linux).reconcile([registry["chrome"]])

    assert _outcomes(results) == {"chrome": Outcome.FAILED}
    assert (out_dir / "chromedriver_2.12.zip").exists()


def test_creates_missing_output_directory(config, linux, registry, http, tmp_path):
    target = tmp_path / "not" / "yet"
    http.routes[STANDALONE_URL] = FakeResponse(200, b"jar bytes")

    Reconciler(config.with_overrides(out_dir=target), linux).reconcile([registry["standalone"]])

    assert (target / "selenium-server-standalone-2.44.0.jar").exists()
