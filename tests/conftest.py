"""Shared fixtures for modelviz tests."""

import json
from datetime import datetime

import pytest

from modelviz.models import Snapshot


@pytest.fixture
def blog_snapshot_data():
    """A small blog application, listed in no particular order."""
    return {
        "appName": "Blog",
        "schemaVersion": "20261019093000",
        "sourceFiles": [
            "app/models/post.rb",
            "app/models/comment.rb",
            "app/models/admin/super_admin.rb",
        ],
        "classes": [
            {"name": "SuperAdmin", "superclass": "Admin", "columns": [{"name": "level", "type": "integer"}]},
            {
                "name": "Post",
                "tableName": "posts",
                "columns": [
                    {"name": "id", "type": "integer", "content": False},
                    {"name": "title", "type": "string"},
                    {"name": "body", "type": "text"},
                    {"name": "created_at", "type": "datetime", "content": False},
                ],
                "associations": [
                    {"name": "comments", "macro": "has_many", "className": "Comment"},
                    {"name": "taggings", "macro": "has_many", "className": "Tagging"},
                    {"name": "tags", "macro": "has_many", "className": "Tag", "through": "taggings"},
                    {"name": "author", "macro": "belongs_to", "className": "User"},
                ],
            },
            {
                "name": "Comment",
                "tableName": "comments",
                "columns": [
                    {"name": "id", "type": "integer", "content": False},
                    {"name": "body", "type": "text"},
                    {"name": "post_id", "type": "integer", "content": False},
                ],
                "associations": [
                    {"name": "post", "macro": "belongs_to", "className": "Post"},
                ],
            },
            {"name": "Admin", "superclass": "User"},
            {
                "name": "Tag",
                "columns": [{"name": "name", "type": "string"}],
                "associations": [
                    {"name": "taggings", "macro": "has_many", "className": "Tagging"},
                    {"name": "posts", "macro": "has_many", "className": "Post", "through": "taggings"},
                ],
            },
            {
                "name": "Tagging",
                "associations": [
                    {"name": "post", "macro": "belongs_to", "className": "Post"},
                    {"name": "tag", "macro": "belongs_to", "className": "Tag"},
                ],
            },
            {
                "name": "User",
                "superclass": "ActiveRecord::Base",
                "columns": [{"name": "name", "type": "string"}],
                "associations": [
                    {"name": "posts", "macro": "has_many", "className": "Post"},
                ],
            },
            {
                "name": "PostsController",
                "kind": "controller",
                "methods": {"public": ["index", "show"], "protected": [], "private": ["find_post"]},
            },
            {
                "name": "Order",
                "kind": "state_machine",
                "states": ["pending", "paid"],
                "events": [{"name": "pay", "from": "pending", "to": "paid"}],
            },
            {"name": "Markdown", "kind": "class"},
            {"name": "Sluggable", "kind": "module"},
        ],
    }


@pytest.fixture
def blog_snapshot(blog_snapshot_data):
    """The blog application as a Snapshot."""
    return Snapshot(**blog_snapshot_data)


@pytest.fixture
def snapshot_file(tmp_path, blog_snapshot_data):
    """The blog application written to a JSON file."""
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(blog_snapshot_data), encoding="utf-8")
    return path


@pytest.fixture
def fixed_clock():
    """Clock frozen at a known instant."""
    return lambda: datetime(2026, 10, 19, 9, 5)
