"""
Project manifest tests.
"""

import json

import pytest

from roster_render.execution.base import RenderStatus
from roster_render.manifest import ManifestError, ProjectManifest
from roster_render.project.registry import ItemRegistry
from roster_render.settings import RenderSettings

from tests.helpers import ORIGINAL_SELECTOR_VALUE, selector_property


class TestLoad:

    def test_load_file(self, manifest_file):
        manifest = ProjectManifest.load(manifest_file)
        assert len(manifest.roster) == 47

    def test_missing_file(self, tmp_path):
        with pytest.raises(ManifestError, match="not found"):
            ProjectManifest.load(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "project.json"
        path.write_text("{items: []")

        with pytest.raises(ManifestError, match="Invalid JSON"):
            ProjectManifest.load(path)

    def test_not_utf8(self, tmp_path):
        path = tmp_path / "project.json"
        path.write_bytes(b"\xff\xfe{}")

        with pytest.raises(ManifestError, match="Cannot read"):
            ProjectManifest.load(path)

    def test_directory(self, tmp_path):
        with pytest.raises(ManifestError, match="Cannot read"):
            ProjectManifest.load(tmp_path)

    def test_schema_error(self, tmp_path):
        path = tmp_path / "project.json"
        path.write_text(json.dumps({"items": [{"name": "A", "kind": "comp"}]}))

        with pytest.raises(ManifestError, match="Invalid manifest schema"):
            ProjectManifest.load(path)

    def test_unknown_render_outcome(self):
        with pytest.raises(ValueError):
            ProjectManifest.model_validate({"render_queue": {"outcomes": {"A": "exploded"}}})


class TestBuild:

    def test_roster_shorthand_expands(self, build_host):
        project, _ = build_host()
        registry = ItemRegistry(project)

        names = registry.find_by_name("NAME LIST")
        firsts = registry.find_by_name("FIRSTNAME LIST")
        numbers = registry.find_by_name("NUMBERLIST - NEW")

        assert names.layer_count == 47
        assert names.layer(5).source_text == "Jane Doe"
        assert firsts.layer(5).source_text == "Jane"
        assert numbers.layer(5).source_text == "007"
        assert registry.find_by_name("LASTNAME LIST").layer(5).source_text == "Doe"

    def test_shorthand_follows_settings(self, build_host):
        project, _ = build_host(settings=RenderSettings(number_composition="NUMBERS"))
        registry = ItemRegistry(project)

        assert registry.find_by_name("NUMBERS") is not None
        assert registry.find_by_name("NUMBERLIST - NEW") is None

    def test_explicit_composition_wins(self, build_host, manifest_data):
        manifest_data["items"].append({
            "name": "FIRSTNAME LIST",
            "layers": [{"text": "Override"}],
        })
        project, _ = build_host()

        matches = [item for item in project.items() if item.name == "FIRSTNAME LIST"]
        assert len(matches) == 1
        assert matches[0].layer(1).source_text == "Override"
        assert matches[0].layer(1).name == "1"

    def test_selector_menu(self, build_host):
        project, _ = build_host()
        menu = selector_property(project)

        assert menu.value == ORIGINAL_SELECTOR_VALUE
        assert menu.menu_items == 47
        with pytest.raises(ValueError):
            menu.set_value(48)

    def test_footage_has_no_layers(self, build_host, manifest_data):
        manifest_data["items"][4]["layers"] = [{"name": "ignored"}]
        project, _ = build_host()

        footage = [item for item in project.items() if item.name == "logo.png"][0]
        assert not footage.is_composition
        assert footage.layer_count == 0

    def test_render_queue(self, build_host, manifest_data):
        manifest_data["render_queue"] = {
            "templates": ["LHF-FINAL", "Proxy"],
            "outcomes": {"CompA": "stopped"},
            "start_delay_polls": 2,
        }
        _, queue = build_host()

        assert queue.templates == {"LHF-FINAL", "Proxy"}
        assert queue.outcomes == {"CompA": RenderStatus.STOPPED}
        assert queue.start_delay_polls == 2
        assert queue.num_items == 0

    def test_default_templates(self):
        _, queue = ProjectManifest().build()
        assert queue.templates == {"LHF-FINAL"}
