"""
Unit tests for artifact saving and the local template
"""

import csv
import io

import pytest

from clustering_map.api import ARTIFACT_FILENAMES, build_local_template, build_template_csv, make_artifact, save_artifact
from clustering_map.api.template import SAMPLE_HEADERS, SAMPLE_ROWS


def _decode(content: bytes):
    text = content.decode("utf-8")
    assert text.startswith("\ufeff")
    return text[1:]


class TestLocalTemplate:
    """Test cases for the generated CSV template"""

    def test_sample_variant_layout(self):
        text = _decode(build_template_csv("sample"))
        rows = list(csv.reader(io.StringIO(text)))

        assert rows[0] == SAMPLE_HEADERS
        assert len(rows) == len(SAMPLE_ROWS) + 1
        assert rows[1][2] == SAMPLE_ROWS[0]["自由記述"]

    def test_every_field_is_quoted(self):
        lines = _decode(build_template_csv()).splitlines()
        assert lines[0] == '"ID","回答者","自由記述","グループ"'
        assert lines[1].startswith('"1","Aさん",')

    def test_minimal_variant_has_only_free_text(self):
        text = _decode(build_template_csv("minimal"))
        rows = list(csv.reader(io.StringIO(text)))
        assert rows[0] == ["自由記述"]
        assert all(len(row) == 1 for row in rows)

    def test_unknown_variant(self):
        with pytest.raises(ValueError):
            build_template_csv("full")

    def test_fallback_artifact(self):
        artifact = build_local_template()
        assert artifact.kind == "template_fallback"
        assert artifact.filename == "clustering_map_template.csv"
        assert artifact.content_type == "text/csv;charset=utf-8"


class TestSaveArtifact:
    """Test cases for save_artifact"""

    def test_writes_under_fixed_filename(self, tmp_path):
        artifact = make_artifact("png", b"\x89PNG\r\n", "image/png")

        path = save_artifact(artifact, tmp_path / "exports")

        assert path == tmp_path / "exports" / ARTIFACT_FILENAMES["png"]
        assert path.read_bytes() == b"\x89PNG\r\n"

    def test_overwrites_previous_export(self, tmp_path):
        save_artifact(make_artifact("pdf", b"old"), tmp_path)
        path = save_artifact(make_artifact("pdf", b"new"), tmp_path)
        assert path.read_bytes() == b"new"
        assert [p.name for p in tmp_path.iterdir()] == ["clustering_map.pdf"]
