"""
Shared test fixtures and configuration.
"""

import io
import json
import urllib.error
import urllib.request
from pathlib import Path

import pytest

from depwizard.core.errors import VersionLookupError
from depwizard.core.models.package import PackageDescriptor


class FakeResolver:
    """Version lookup backed by a dict; unknown names fail like a 404."""

    def __init__(self, versions: dict[str, str] | None = None):
        self.versions = dict(versions or {})
        self.calls: list[str] = []

    def __call__(self, name: str) -> str:
        self.calls.append(name)
        if name not in self.versions:
            raise VersionLookupError(name, "HTTP 404")
        return self.versions[name]


class FakeSelector:
    """Selector returning fixed choices; ``declined`` names answer "no"."""

    def __init__(self, selected: list[PackageDescriptor], declined: set[str] | None = None):
        self.selected = selected
        self.declined = declined or set()
        self.confirmed: list[str] = []

    def select_packages(self, catalog):
        return list(self.selected)

    def confirm_type(self, descriptor):
        self.confirmed.append(descriptor.name)
        return descriptor.name not in self.declined


class FakeResponse:
    """Minimal stand-in for the object returned by ``urlopen``."""

    def __init__(self, body: bytes | str, status: int = 200):
        self._body = body.encode() if isinstance(body, str) else body
        self.status = status

    def getcode(self) -> int:
        return self.status

    def read(self) -> bytes:
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


@pytest.fixture
def project_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A fresh project directory that is also the cwd."""
    project = tmp_path / "My App"
    project.mkdir()
    monkeypatch.chdir(project)
    return project


@pytest.fixture
def registry(monkeypatch: pytest.MonkeyPatch):
    """Patch ``urlopen`` with an in-memory registry.

    Returns the dict of name → version; names missing from it get a 404.
    Requested URLs are appended to ``registry.requests``.
    """

    class _Registry(dict):
        requests: list[str] = []

    versions = _Registry()
    versions.requests = []

    def fake_urlopen(req, timeout=None):
        url = req.full_url
        versions.requests.append(url)
        name = url.split("/", 3)[3].rsplit("/latest", 1)[0]
        if name not in versions:
            raise urllib.error.HTTPError(url, 404, "Not Found", {}, io.BytesIO(b""))
        return FakeResponse(json.dumps({"name": name, "version": versions[name]}))

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)
    return versions


def write_manifest(project: Path, document: dict) -> Path:
    path = project / "package.json"
    path.write_text(json.dumps(document, indent=2))
    return path


def read_manifest(project: Path) -> dict:
    return json.loads((project / "package.json").read_text())
