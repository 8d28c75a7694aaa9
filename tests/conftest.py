"""Test fixtures for Proto Release.

This module provides shared fixtures used across multiple test modules.

Fixtures:
    proto_tree: Creates a temporary project root with a proto directory tree
    make_config: Factory for BuildConfig values with overrides
    config: A BuildConfig pointing at the proto_tree root
"""

import pytest

from proto_release.environment import BuildConfig

BOOK_PROTO = """syntax = "proto3";

package com.book;

message Book {
    int64 isbn = 1;
    string title = 2;
}
"""


@pytest.fixture
def proto_tree(tmp_path):
    """Creates a temporary project root for testing.

    tmp_path/
    └── proto/
        ├── include/
        ├── product/
        │   ├── my-service/
        │   │   └── book.proto
        │   └── empty-service/
        └── my-service/
            ├── book.proto
            └── person.proto

    Returns:
        Path: The project root
    """
    proto = tmp_path / "proto"
    (proto / "include").mkdir(parents=True)

    categorized = proto / "product" / "my-service"
    categorized.mkdir(parents=True)
    (categorized / "book.proto").write_text(BOOK_PROTO)

    (proto / "product" / "empty-service").mkdir()

    flat = proto / "my-service"
    flat.mkdir()
    (flat / "book.proto").write_text(BOOK_PROTO)
    (flat / "person.proto").write_text(BOOK_PROTO.replace("Book", "Person"))

    return tmp_path


@pytest.fixture
def make_config():
    """Factory building a configuration from constants only, without env or files."""
    def make(root, **overrides):
        return BuildConfig(root=root.resolve(), **overrides)
    return make


@pytest.fixture
def config(proto_tree, make_config):
    """Configuration rooted at the temporary proto tree."""
    return make_config(proto_tree)
