"""
Naming and output path tests.

Folder and file names must match the delivery convention exactly.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from roster_render.deliver.naming import NamingTuple, file_name, folder_name, resolve_template
from roster_render.deliver.paths import OutputPathBuilder
from roster_render.errors import FailureKind
from roster_render.execution.errors import OutputPathError


JANE = NamingTuple(number="007", first_name="Jane", last_name="Doe")


class TestNaming:

    def test_folder_name(self):
        assert folder_name(JANE) == "007_Jane_Doe"

    def test_blank_fields_keep_separators(self):
        assert folder_name(NamingTuple()) == "__"
        assert folder_name(NamingTuple(number="10", first_name="Ann")) == "10_Ann_"

    def test_file_name(self):
        assert file_name("CompA", 5) == "CompA_Option5.mov"
        assert file_name("Intro Card", 47, "mp4") == "Intro Card_Option47.mp4"

    def test_index_not_padded(self):
        assert file_name("CompA", 3) == "CompA_Option3.mov"

    def test_unknown_tokens_left_visible(self):
        assert resolve_template("{number}_{team}", {"number": "9"}) == "9_{team}"

    def test_naming_tuple_is_frozen(self):
        with pytest.raises(ValidationError):
            JANE.number = "8"

    def test_naming_tuple_rejects_unknown_fields(self):
        with pytest.raises(ValidationError):
            NamingTuple(number="1", nickname="JJ")


class TestOutputPathBuilder:

    def test_file_for(self):
        path = OutputPathBuilder().file_for(Path("/out/007_Jane_Doe"), "CompA", 5)
        assert path == Path("/out/007_Jane_Doe/CompA_Option5.mov")

    def test_file_for_extension(self):
        path = OutputPathBuilder("mp4").file_for(Path("/out/x"), "CompA", 1)
        assert path.name == "CompA_Option1.mp4"

    def test_folder_for_creates(self, tmp_path):
        folder = OutputPathBuilder().folder_for(tmp_path, JANE)

        assert folder == tmp_path / "007_Jane_Doe"
        assert folder.is_dir()

    def test_folder_for_idempotent(self, tmp_path):
        builder = OutputPathBuilder()
        folder = builder.folder_for(tmp_path, JANE)
        (folder / "CompA_Option5.mov").write_bytes(b"rendered")

        assert builder.folder_for(tmp_path, JANE) == folder
        assert (folder / "CompA_Option5.mov").read_bytes() == b"rendered"

    def test_folder_for_creates_missing_root(self, tmp_path):
        folder = OutputPathBuilder().folder_for(tmp_path / "a" / "b", JANE)
        assert folder.is_dir()

    def test_folder_blocked_by_file(self, tmp_path):
        (tmp_path / "007_Jane_Doe").write_text("")

        with pytest.raises(OutputPathError) as exc_info:
            OutputPathBuilder().folder_for(tmp_path, JANE)

        assert exc_info.value.kind == FailureKind.IO_FAILURE
