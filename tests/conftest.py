"""
Pytest configuration and shared fixtures.

Hosts are built from manifest dictionaries, the same way the CLI builds
them from manifest files, so tests exercise the real in-memory project
and render queue.
"""

import json

import pytest

from roster_render.batch.orchestrator import BatchOrchestrator
from roster_render.manifest import ProjectManifest
from roster_render.settings import DEFAULT_RENDER_SETTINGS

from tests.helpers import ORIGINAL_SELECTOR_VALUE, roster_entries


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "cli: marks tests that go through the command line entrypoint"
    )


@pytest.fixture
def manifest_data():
    """A project laid out like production: control comp, two selected comps."""
    return {
        "items": [
            {
                "name": "00_Simulator",
                "layers": [
                    {
                        "name": "PLAYER TO RENDER",
                        "effects": [
                            {
                                "name": "DROPDOWN",
                                "properties": {
                                    "Menu": {"value": ORIGINAL_SELECTOR_VALUE, "menu_items": 47}
                                },
                            }
                        ],
                    }
                ],
            },
            {"name": "CompA", "selected": True},
            {"name": "CompB", "selected": True},
            {"name": "CompC"},
            {"name": "logo.png", "type": "footage", "selected": True},
        ],
        "roster": roster_entries(),
        "render_queue": {"templates": ["LHF-FINAL"]},
    }


@pytest.fixture
def build_host(manifest_data):
    """Factory: (project, render_queue) from manifest data."""

    def _build(data=None, settings=DEFAULT_RENDER_SETTINGS):
        return ProjectManifest.model_validate(data or manifest_data).build(settings)

    return _build


@pytest.fixture
def sleeps():
    """Intervals passed to the fake sleep, in call order."""
    return []


@pytest.fixture
def make_orchestrator(sleeps):
    """Factory: orchestrator over a host, with sleeps recorded instead of slept."""

    def _make(project, queue, settings=DEFAULT_RENDER_SETTINGS):
        return BatchOrchestrator.for_host(project, queue, settings=settings, sleep=sleeps.append)

    return _make


@pytest.fixture
def output_root(tmp_path):
    root = tmp_path / "renders"
    root.mkdir()
    return root


@pytest.fixture
def manifest_file(tmp_path, manifest_data):
    path = tmp_path / "project.json"
    path.write_text(json.dumps(manifest_data))
    return path
