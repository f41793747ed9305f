"""Unit tests for metadata snapshot models."""

import json

import pytest

from modelviz.errors import SnapshotError
from modelviz.models import ClassKind, Snapshot, load_snapshot


class TestSnapshotModels:
    """Test snapshot parsing and lookups."""

    def test_class_defaults(self, blog_snapshot):
        admin = blog_snapshot.get("Admin")
        assert admin.kind == ClassKind.MODEL
        assert admin.columns == []
        assert admin.abstract is False

    def test_kinds(self, blog_snapshot):
        assert blog_snapshot.get("PostsController").kind == ClassKind.CONTROLLER
        assert blog_snapshot.get("Order").kind == ClassKind.STATE_MACHINE
        assert blog_snapshot.get("Order").events[0].from_state == "pending"

    def test_get_ignores_leading_colons(self, blog_snapshot):
        assert blog_snapshot.get("::Post").name == "Post"
        assert blog_snapshot.get("Missing") is None

    def test_content_columns(self, blog_snapshot):
        post = blog_snapshot.get("Post")
        assert [c.name for c in post.content_columns] == ["title", "body"]

    def test_has_many_names(self, blog_snapshot):
        assert blog_snapshot.has_many_names("Post") == ["comments", "taggings", "tags"]
        assert blog_snapshot.has_many_names("Comment") == []
        assert blog_snapshot.has_many_names("Missing") == []

    def test_ancestors(self, blog_snapshot):
        assert blog_snapshot.ancestors("SuperAdmin") == ["Admin", "User", "ActiveRecord::Base"]
        assert blog_snapshot.ancestors("Post") == []

    def test_ancestors_survive_cycles(self):
        snapshot = Snapshot(classes=[
            {"name": "A", "superclass": "B"},
            {"name": "B", "superclass": "A"},
        ])
        assert snapshot.ancestors("A") == ["B", "A"]


class TestLoadSnapshot:
    """Test loading snapshots from disk."""

    def test_load(self, snapshot_file):
        snapshot = load_snapshot(snapshot_file)
        assert snapshot.app_name == "Blog"
        assert snapshot.schema_version == "20261019093000"
        assert len(snapshot.classes) == 11

    def test_missing_file(self, tmp_path):
        with pytest.raises(SnapshotError, match="not found"):
            load_snapshot(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(SnapshotError, match="Invalid JSON"):
            load_snapshot(path)

    def test_invalid_structure(self, tmp_path):
        path = tmp_path / "wrong.json"
        path.write_text(json.dumps({"classes": [{"kind": "model"}]}))
        with pytest.raises(SnapshotError, match="Invalid snapshot"):
            load_snapshot(path)

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text(json.dumps([1, 2, 3]))
        with pytest.raises(SnapshotError):
            load_snapshot(path)
