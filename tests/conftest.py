"""Shared fixtures: introspection results generated from SDL."""

import json
from unittest.mock import MagicMock

import pytest
from graphql import build_schema, introspection_from_schema

from .fixtures import SDL


@pytest.fixture
def introspection():
    return introspection_from_schema(build_schema(SDL))


@pytest.fixture
def schema_file(tmp_path, introspection):
    path = tmp_path / "schema.json"
    path.write_text(json.dumps(introspection))
    return path


@pytest.fixture
def adapter():
    mock = MagicMock()
    mock.query.return_value = {"data": {"ok": True}}
    mock.mutate.return_value = {"data": {"ok": True}}
    return mock


@pytest.fixture
def notifier():
    return MagicMock()
