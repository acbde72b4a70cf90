"""Shared pytest fixtures for all test modules."""

import os
import subprocess
import sys

import pytest

import skcfctl.redact as redact_module
from skcfctl.wait.types import OperationStatus


PROJECT_ROOT = os.path.normpath(os.path.join(os.path.dirname(__file__), ".."))


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep the developer's SKCF env vars and config file out of the tests."""
    for var in ("SKCF_PROJECT_ID", "SKCF_API_URL", "SKCF_TOKEN", "STACKIT_SERVICE_ACCOUNT_TOKEN"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("SKCF_CONFIG", str(tmp_path / "no-such-config.yaml"))
    redact_module._patterns = None
    redact_module._extra_secrets.clear()
    yield
    redact_module._patterns = None
    redact_module._extra_secrets.clear()


@pytest.fixture(scope="session")
def project_root():
    """Absolute path to the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def run_cli(project_root):
    """Return a callable that invokes the skcfctl CLI as a subprocess."""

    def _run(*args):
        result = subprocess.run(
            [sys.executable, "-m", "skcfctl.skcfctl", *args],
            capture_output=True,
            text=True,
            cwd=project_root,
            stdin=subprocess.DEVNULL,
        )
        return result.returncode, result.stdout, result.stderr

    return _run


# ── Unit-test fixtures ──────────────────────────────────────────────


class ScriptedStatus:
    """Async status query that replays a fixed list of raw statuses.

    Entries that are exceptions are raised instead of returned. The last
    entry repeats once the script runs out.
    """

    def __init__(self, script):
        self.script = list(script)
        self.calls = 0

    async def __call__(self, handle):
        item = self.script[min(self.calls, len(self.script) - 1)]
        self.calls += 1
        if isinstance(item, BaseException):
            raise item
        return item


@pytest.fixture
def scripted_status():
    """Factory for ScriptedStatus queries."""
    return ScriptedStatus


@pytest.fixture
def identity_classify():
    """Classifier for scripts that already contain OperationStatus values."""

    def _classify(raw):
        assert isinstance(raw, OperationStatus)
        return raw

    return _classify


def cluster(name="my-cluster", state=None, error=None):
    """Cluster dict as returned by the API."""
    status = {}
    if state is not None:
        status["aggregated"] = state
    if error is not None:
        status["error"] = error
    return {"name": name, "status": status}


@pytest.fixture
def make_cluster():
    return cluster
