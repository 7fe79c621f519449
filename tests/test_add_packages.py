"""
Tests for the add-packages use case — the end-to-end flow with fakes.
"""

from pathlib import Path

import pytest

from conftest import FakeResolver, FakeSelector, read_manifest, write_manifest
from depwizard.adapters.mock import MockAdapter
from depwizard.core.config.loader import WizardConfig
from depwizard.core.data.catalog import CATALOG, get_descriptor
from depwizard.core.errors import ManifestParseError, PromptError
from depwizard.core.use_cases.add_packages import add_packages

VERSIONS = {
    "node": "22.9.0",
    "nodemon": "3.1.7",
    "axios": "1.7.7",
    "jest": "29.7.0",
    "lodash": "4.17.21",
    "tailwindcss": "3.4.13",
    "postcss": "8.4.47",
    "autoprefixer": "10.4.20",
    "@mui/material": "6.1.3",
    "@emotion/react": "11.13.3",
    "@emotion/styled": "11.13.0",
    "@mui/icons-material": "6.1.3",
}


def _d(name):
    descriptor = get_descriptor(name)
    assert descriptor is not None, name
    return descriptor


def _run(project: Path, selector, resolver=None, adapter=None, **kwargs):
    return add_packages(
        project,
        selector,
        config=WizardConfig(),
        resolve_version=resolver or FakeResolver(VERSIONS),
        adapter=adapter or MockAdapter(adapter_name="shell"),
        **kwargs,
    )


class TestBaselineFallback:
    def test_nothing_selected_adds_baseline(self, project_dir):
        adapter = MockAdapter()
        result = _run(project_dir, FakeSelector([]), adapter=adapter)

        manifest = read_manifest(project_dir)
        assert manifest["dependencies"] == {"node": "^22.9.0"}
        assert manifest["devDependencies"] == {"nodemon": "^3.1.7"}
        assert result.used_baseline
        assert result.manifest_created

    def test_baseline_skips_install(self, project_dir):
        adapter = MockAdapter()
        result = _run(project_dir, FakeSelector([]), adapter=adapter)
        assert adapter.call_count == 0
        assert result.install is None

    def test_baseline_over_existing_manifest(self, project_dir):
        write_manifest(project_dir, {"name": "x", "dependencies": {"nodemon": "^2.0.0"}})
        _run(project_dir, FakeSelector([]))
        manifest = read_manifest(project_dir)
        assert manifest["dependencies"] == {"node": "^22.9.0"}
        assert manifest["devDependencies"] == {"nodemon": "^3.1.7"}


class TestPlacement:
    def test_confirmed_keeps_declared_section(self, project_dir):
        _run(project_dir, FakeSelector([_d("axios"), _d("jest")]))
        manifest = read_manifest(project_dir)
        assert manifest["dependencies"] == {"axios": "^1.7.7"}
        assert manifest["devDependencies"] == {"jest": "^29.7.0"}

    def test_declined_flips_section(self, project_dir):
        write_manifest(project_dir, {"name": "x", "devDependencies": {"axios": "^0.1.0"}})
        result = _run(project_dir, FakeSelector([_d("axios"), _d("jest")], declined={"jest"}))
        manifest = read_manifest(project_dir)
        assert manifest["dependencies"] == {"axios": "^1.7.7", "jest": "^29.7.0"}
        assert manifest["devDependencies"] == {}
        jest = next(p for p in result.resolved if p.name == "jest")
        assert jest.toggled

    def test_declined_flips_external_dependencies(self, project_dir):
        _run(project_dir, FakeSelector([_d("tailwindcss")], declined={"tailwindcss"}))
        manifest = read_manifest(project_dir)
        assert manifest["dependencies"] == {
            "tailwindcss": "^3.4.13",
            "postcss": "^8.4.47",
            "autoprefixer": "^10.4.20",
        }
        assert manifest["devDependencies"] == {}

    def test_external_dependencies_follow_parent(self, project_dir):
        resolver = FakeResolver(VERSIONS)
        result = _run(project_dir, FakeSelector([_d("@mui/material"), _d("axios")]), resolver)
        assert resolver.calls == [
            "@mui/material", "@emotion/react", "@emotion/styled", "@mui/icons-material", "axios",
        ]
        assert [p.parent for p in result.resolved] == [
            None, "@mui/material", "@mui/material", "@mui/material", None,
        ]

    def test_confirm_asked_once_per_selected_entry(self, project_dir):
        selector = FakeSelector([_d("@mui/material"), _d("jest")])
        _run(project_dir, selector)
        assert selector.confirmed == ["@mui/material", "jest"]


class TestLookupFailures:
    def test_failed_package_excluded(self, project_dir):
        versions = {k: v for k, v in VERSIONS.items() if k != "lodash"}
        result = _run(project_dir, FakeSelector([_d("lodash"), _d("axios")]), FakeResolver(versions))
        manifest = read_manifest(project_dir)
        assert manifest["dependencies"] == {"axios": "^1.7.7"}
        assert "lodash" in result.failed_lookups

    def test_failed_parent_skips_external_dependencies(self, project_dir):
        versions = {k: v for k, v in VERSIONS.items() if k != "tailwindcss"}
        resolver = FakeResolver(versions)
        _run(project_dir, FakeSelector([_d("tailwindcss"), _d("axios")]), resolver)
        assert resolver.calls == ["tailwindcss", "axios"]
        assert read_manifest(project_dir)["devDependencies"] == {}

    def test_failed_external_dependency_only_skips_itself(self, project_dir):
        versions = {k: v for k, v in VERSIONS.items() if k != "postcss"}
        result = _run(project_dir, FakeSelector([_d("tailwindcss")]), FakeResolver(versions))
        assert read_manifest(project_dir)["devDependencies"] == {
            "tailwindcss": "^3.4.13",
            "autoprefixer": "^10.4.20",
        }
        assert list(result.failed_lookups) == ["postcss"]

    def test_all_failed_leaves_manifest_untouched(self, project_dir):
        adapter = MockAdapter()
        result = _run(project_dir, FakeSelector([_d("lodash")]), FakeResolver({}), adapter)
        assert not (project_dir / "package.json").exists()
        assert not result.manifest_written
        assert adapter.call_count == 0


class TestInstallPhase:
    def test_install_then_scripts(self, project_dir):
        adapter = MockAdapter(adapter_name="shell")
        result = _run(project_dir, FakeSelector([_d("tailwindcss"), _d("axios")]), adapter=adapter)
        assert adapter.commands == ["npm install", "npx tailwindcss init -p"]
        assert result.install is not None
        assert result.install_error is None

    def test_custom_install_command(self, project_dir):
        adapter = MockAdapter()
        add_packages(
            project_dir,
            FakeSelector([_d("axios")]),
            config=WizardConfig(install_command="pnpm install"),
            resolve_version=FakeResolver(VERSIONS),
            adapter=adapter,
        )
        assert adapter.commands == ["pnpm install"]

    def test_install_failure_keeps_manifest(self, project_dir):
        adapter = MockAdapter()
        adapter.fail_command("npm install", "network down")
        result = _run(project_dir, FakeSelector([_d("tailwindcss")]), adapter=adapter)
        assert adapter.commands == ["npm install"]
        assert "network down" in result.install_error
        assert read_manifest(project_dir)["devDependencies"]["tailwindcss"] == "^3.4.13"

    def test_no_install(self, project_dir):
        adapter = MockAdapter()
        result = _run(project_dir, FakeSelector([_d("tailwindcss")]), adapter=adapter, run_install=False)
        assert adapter.call_count == 0
        assert result.manifest_written


class TestFailures:
    def test_prompt_error_writes_nothing(self, project_dir):
        class BrokenSelector(FakeSelector):
            def confirm_type(self, descriptor):
                raise PromptError("no tty")

        with pytest.raises(PromptError):
            _run(project_dir, BrokenSelector([_d("axios")]))
        assert not (project_dir / "package.json").exists()

    def test_malformed_manifest_aborts(self, project_dir):
        (project_dir / "package.json").write_text("{oops")
        adapter = MockAdapter()
        with pytest.raises(ManifestParseError):
            _run(project_dir, FakeSelector([_d("axios")]), adapter=adapter)
        assert (project_dir / "package.json").read_text() == "{oops"
        assert adapter.call_count == 0


class TestResultSerialization:
    def test_to_dict(self, project_dir):
        result = _run(project_dir, FakeSelector([_d("axios")]))
        data = result.to_dict()
        assert data["selected"] == ["axios"]
        assert data["resolved"][0]["range"] == "^1.7.7"
        assert data["manifest"]["created"] is True
        assert data["install"]["installed"] is True

    def test_catalog_passed_to_selector(self, project_dir):
        seen = {}

        class SpySelector(FakeSelector):
            def select_packages(self, catalog):
                seen["catalog"] = catalog
                return []

        _run(project_dir, SpySelector([]))
        assert seen["catalog"] == CATALOG
